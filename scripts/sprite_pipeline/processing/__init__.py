"""
Pixel processing stages: trimming, resizing, alignment, sprite sheets, icon atlases and drop shadows.
"""

from .trimmer import AlphaTrimmer, ContentBounds, trim
from .resizer import AspectResizer, ResizeSpec, resize
from .alignment import (
    AlignmentSuggestion,
    resolve_anchor,
    suggest_offset,
    suggest_shadow_offset,
    suggest_alignment
)
from .spritesheet import SpriteSheet, SpriteSheetComposer, compose
from .shadow import DropShadowCompositor, ShadowSpec, apply_drop_shadow
from .icon import IconAtlas, IconAtlasComposer, IconLayer, compose_atlas

__all__ = [
    "AlphaTrimmer",
    "ContentBounds",
    "trim",
    "AspectResizer",
    "ResizeSpec",
    "resize",
    "AlignmentSuggestion",
    "resolve_anchor",
    "suggest_offset",
    "suggest_shadow_offset",
    "suggest_alignment",
    "SpriteSheet",
    "SpriteSheetComposer",
    "compose",
    "DropShadowCompositor",
    "ShadowSpec",
    "apply_drop_shadow",
    "IconAtlas",
    "IconAtlasComposer",
    "IconLayer",
    "compose_atlas",
]
