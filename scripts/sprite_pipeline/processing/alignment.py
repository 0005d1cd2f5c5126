"""
Alignment helpers: turn an alignment request into an anchor point and derive
the sprite offsets the game engine needs to place an image (and its shadow)
on a tile.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union
import logging
import re

from ..buffer import PixelBuffer
from ..utils.blend import round_half_away


logger = logging.getLogger(__name__)

Anchor = Tuple[float, float]
Offset = Tuple[float, float]
AlignmentRequest = Union[str, Sequence[float]]

REFERENCE_TILE_SIZE = 64
DEFAULT_ANCHOR: Anchor = (0.0, 0.0)

# Shadow placement constants, tuned by eye against the engine's renderer.
SHADOW_ANCHOR: Anchor = (0.0, 1.0)
SHADOW_WIDTH_NUDGE = 0.04
SHADOW_Y_OFFSET_FACTOR = 2.0
SHADOW_AESTHETIC_PADDING = 1.0

_NUMERIC_PAIR = re.compile(r"^\s*\(?\s*([-+]?[0-9]*\.?[0-9]+)\s*[,;\s]\s*([-+]?[0-9]*\.?[0-9]+)\s*\)?\s*$")


def _validate_anchor(x: float, y: float) -> Anchor:
    if not (0.0 <= x <= 1.0 and 0.0 <= y <= 1.0):
        raise ValueError(f"Alignment must lie within [0, 1] x [0, 1], got ({x}, {y})")
    return (float(x), float(y))


def _resolve_tokens(text: str) -> Optional[Anchor]:
    """Match semantic direction words; order of checks is significant."""
    if "center" in text or "middle" in text:
        if "top" in text:
            return (0.5, 0.0)
        if "left" in text:
            return (0.0, 0.5)
        if "bottom" in text:
            return (0.5, 1.0)
        if "right" in text:
            return (1.0, 0.5)
        return (0.5, 0.5)
    if "left" in text:
        if "top" in text:
            return (0.0, 0.0)
        if "bottom" in text:
            return (0.0, 1.0)
        return (0.0, 0.5)
    if "right" in text:
        if "top" in text:
            return (1.0, 0.0)
        if "bottom" in text:
            return (1.0, 1.0)
        return (1.0, 0.5)
    if "top" in text:
        return (0.5, 0.0)
    if "bottom" in text:
        return (0.5, 1.0)
    return None


def resolve_anchor(request: AlignmentRequest) -> Anchor:
    """
    Resolve an alignment request to a normalized anchor point.

    Args:
        request: Either an (x, y) pair in [0, 1], a "x,y" string, or words
            such as "top-left", "Center Bottom", "right"

    Returns:
        (x, y) anchor where 0.0 = left/top, 0.5 = center, 1.0 = right/bottom.
        Unrecognized words fall back to (0, 0) with a warning.

    Raises:
        ValueError: On an empty string or a numeric pair outside [0, 1]
    """
    if not isinstance(request, str):
        x, y = request
        return _validate_anchor(float(x), float(y))

    if not request.strip():
        raise ValueError("Alignment string cannot be empty")

    numeric = _NUMERIC_PAIR.match(request)
    if numeric:
        return _validate_anchor(float(numeric.group(1)), float(numeric.group(2)))

    text = re.sub(r"[^a-z]", "", request.lower())
    anchor = _resolve_tokens(text)
    if anchor is None:
        logger.warning(f"Unrecognized alignment value '{request}', defaulting to {DEFAULT_ANCHOR}")
        return DEFAULT_ANCHOR
    return anchor


def suggest_offset(image: PixelBuffer, anchor: Anchor,
                   tile_size: int = REFERENCE_TILE_SIZE) -> Offset:
    """
    Offset that places ``image`` at ``anchor`` relative to a tile.

    A 64x64 image at (0.5, 0.5) on a 64 px tile needs no offset.
    """
    offset_x = 0.5 * (anchor[0] - 0.5) * (tile_size - image.width)
    offset_y = 0.5 * (anchor[1] - 0.5) * (tile_size - image.height)
    return (offset_x, offset_y)


def suggest_shadow_offset(image: PixelBuffer, image_offset: Offset, shadow_image: PixelBuffer,
                          tile_size: int = REFERENCE_TILE_SIZE) -> Offset:
    """
    Offset that puts a shadow sprite directly underneath its image.

    The shadow is first aligned bottom-left, moved right by half the gap
    between the tile and the image, pulled down by half its own height (the
    engine centers sprites), then linked to the image's own offset.
    """
    offset_x, offset_y = suggest_offset(shadow_image, SHADOW_ANCHOR, tile_size)

    offset_x += round_half_away(((tile_size / 2.0) - (image.width / 2.0)) / 2.0, 3)
    offset_x += image.width * SHADOW_WIDTH_NUDGE
    offset_y += shadow_image.height / 2.0

    offset_x += image_offset[0]
    offset_y += image_offset[1] * SHADOW_Y_OFFSET_FACTOR

    offset_y += SHADOW_AESTHETIC_PADDING

    return (offset_x, offset_y)


@dataclass(frozen=True)
class AlignmentSuggestion:
    """Advisory offsets for an image and its optional shadow."""
    anchor: Anchor
    offset: Offset
    shadow_offset: Optional[Offset] = None

    def describe(self) -> List[str]:
        lines = [
            f"Using alignment: ({self.anchor[0]:.1f}, {self.anchor[1]:.1f})",
            f"Suggested offset for image alignment: {_format_offset(self.offset)}",
        ]
        if self.shadow_offset is not None:
            lines.append(f"Suggested offset for shadow alignment: {_format_offset(self.shadow_offset)}")
        return lines


def _format_offset(offset: Offset) -> str:
    return f"({offset[0]:g}, {offset[1]:g})"


def suggest_alignment(image: PixelBuffer, shadow_image: Optional[PixelBuffer], anchor: Anchor,
                      tile_size: int = REFERENCE_TILE_SIZE) -> AlignmentSuggestion:
    """Compute the image offset and, when a shadow is present, the linked shadow offset."""
    offset = suggest_offset(image, anchor, tile_size)
    shadow_offset = None
    if shadow_image is not None:
        shadow_offset = suggest_shadow_offset(image, offset, shadow_image, tile_size)
    return AlignmentSuggestion(anchor, offset, shadow_offset)
