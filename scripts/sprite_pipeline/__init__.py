"""
Sprite Pipeline for tile-based game mods

Turns raw artwork into game-ready sprites: trims transparent padding, resizes
with aspect preservation, suggests placement offsets, assembles numbered
variants into sprite sheets and renders multi-resolution icon atlases with a
drop shadow.
"""

__version__ = "0.1.0"
__author__ = "GEARBox Development Team"

from .buffer import PixelBuffer
from .config import ToolConfig
from .errors import (
    SpritePipelineError,
    EmptyImageError,
    DimensionMismatchError,
    InvalidDimensionError,
    MissingResourceError
)
from .processing.trimmer import AlphaTrimmer
from .processing.resizer import AspectResizer, ResizeSpec
from .processing.spritesheet import SpriteSheetComposer
from .processing.icon import IconAtlasComposer
from .processing.shadow import DropShadowCompositor, ShadowSpec
from .pipeline import PicturePipeline, IconPipeline

__all__ = [
    "PixelBuffer",
    "ToolConfig",
    "SpritePipelineError",
    "EmptyImageError",
    "DimensionMismatchError",
    "InvalidDimensionError",
    "MissingResourceError",
    "AlphaTrimmer",
    "AspectResizer",
    "ResizeSpec",
    "SpriteSheetComposer",
    "IconAtlasComposer",
    "DropShadowCompositor",
    "ShadowSpec",
    "PicturePipeline",
    "IconPipeline",
]
