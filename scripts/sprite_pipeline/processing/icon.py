"""
Icon atlas composition: one artwork rendered at four mipmap resolutions side
by side, with a drop shadow over the finished atlas.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

from ..buffer import PixelBuffer
from .trimmer import AlphaTrimmer
from .resizer import AspectResizer, ResizeSpec
from .shadow import DropShadowCompositor, ShadowSpec


logger = logging.getLogger(__name__)

ATLAS_SIZE = (120, 64)
RESOLUTIONS = (64, 32, 16, 8)
POSITIONS = (0, 64, 96, 112)
CENTER_ANCHOR = (0.5, 0.5)
DEFAULT_SQUARE_TOLERANCE = 10


@dataclass(frozen=True)
class IconLayer:
    """Placement of one resolution inside the atlas."""
    resolution: int
    padding: int
    tile_size: Tuple[int, int]
    position: Tuple[int, int]


@dataclass
class IconAtlas:
    """Result of icon atlas composition."""
    atlas: PixelBuffer
    source_size: Tuple[int, int]
    trimmed_size: Tuple[int, int]
    layers: List[IconLayer] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def describe(self) -> List[str]:
        lines = [f"Trimmed whitespace, cropped image to: {self.trimmed_size[0]}x{self.trimmed_size[1]}"]
        for layer in self.layers:
            lines.append(
                f"Generated icon layer: {layer.resolution}x{layer.resolution} "
                f"({layer.tile_size[0]}x{layer.tile_size[1]} with padding {layer.padding}) "
                f"at position {layer.position[0]},{layer.position[1]}"
            )
        return lines


class IconAtlasComposer:
    """Builds the fixed 120x64 multi-resolution icon atlas."""

    def __init__(self, shadow: Optional[ShadowSpec] = None,
                 square_tolerance: int = DEFAULT_SQUARE_TOLERANCE,
                 resizer: Optional[AspectResizer] = None):
        self.shadow = shadow or ShadowSpec()
        self.square_tolerance = square_tolerance
        self.resizer = resizer or AspectResizer()
        self.compositor = DropShadowCompositor()

    def layer_padding(self, resolution: int) -> int:
        """Inset that leaves room for the shadow blur without eating small tiles."""
        return min(self.shadow.blur_radius, resolution // 4)

    def compose_atlas(self, source: PixelBuffer) -> PixelBuffer:
        """Compose the atlas and return only the pixels."""
        return self.compose(source).atlas

    def compose(self, source: PixelBuffer) -> IconAtlas:
        """
        Compose the icon atlas from a source image.

        Args:
            source: Artwork buffer; it is not modified

        Returns:
            IconAtlas with the composed buffer and per-layer placement

        Raises:
            EmptyImageError: If the source is entirely transparent
            InvalidDimensionError: If a layer cannot be resized
        """
        trimmed = AlphaTrimmer.trim(source)
        result = IconAtlas(PixelBuffer(*ATLAS_SIZE), source.size, trimmed.size)

        difference = abs(trimmed.width - trimmed.height)
        if difference > self.square_tolerance:
            message = (f"The trimmed image is not square (difference: {difference}px). "
                       f"The icon may not appear as expected.")
            logger.warning(message)
            result.warnings.append(message)

        for resolution, position in zip(RESOLUTIONS, POSITIONS):
            padding = self.layer_padding(resolution)
            # Each layer starts from the trimmed source, never from the previous layer.
            tile = self.resizer.resize(trimmed.copy(),
                                       ResizeSpec(resolution - 2 * padding, anchor=CENTER_ANCHOR))
            draw_x = position + padding
            draw_y = padding
            result.atlas.draw(tile, draw_x, draw_y)
            result.layers.append(IconLayer(resolution, padding, tile.size, (draw_x, draw_y)))
            logger.debug(f"Drew {resolution}px layer ({tile.width}x{tile.height}) at {draw_x},{draw_y}")

        self.compositor.apply(result.atlas, self.shadow)
        return result


def compose_atlas(source: PixelBuffer, shadow: Optional[ShadowSpec] = None) -> PixelBuffer:
    """Module-level shortcut for :meth:`IconAtlasComposer.compose_atlas`."""
    return IconAtlasComposer(shadow).compose_atlas(source)
