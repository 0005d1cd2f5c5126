"""
Drop shadow synthesis.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np

from ..buffer import PixelBuffer, Pixel
from ..utils.blend import alpha_over
from ..utils.image import ImageUtils


@dataclass(frozen=True)
class ShadowSpec:
    """Offset, softness and colour of a drop shadow."""
    offset: Tuple[int, int] = (0, 0)
    blur_radius: int = 2
    color: Pixel = (0, 0, 0, 116)

    def __post_init__(self):
        if self.blur_radius < 0:
            raise ValueError(f"blur_radius cannot be negative, got {self.blur_radius}")
        if len(self.color) != 4 or any(not 0 <= c <= 255 for c in self.color):
            raise ValueError(f"color must be four values in 0-255, got {self.color}")


class DropShadowCompositor:
    """Puts a soft silhouette shadow behind a buffer's content, in place."""

    @staticmethod
    def build_silhouette(buffer: PixelBuffer, dx: int, dy: int, shadow_color: Pixel) -> np.ndarray:
        """
        Shadow layer before blurring.

        Every visible source pixel contributes ``shadow_color`` with its alpha
        scaled by the source alpha, composited over the layer at (x+dx, y+dy).
        Contributions landing outside the buffer are dropped.
        """
        height, width = buffer.height, buffer.width
        layer = np.zeros((height, width, 4), dtype=np.uint8)

        contribution = np.zeros((height, width, 4), dtype=np.uint8)
        contribution[..., :3] = shadow_color[:3]
        scaled = np.floor(shadow_color[3] * (buffer.alpha.astype(np.float64) / 255.0))
        contribution[..., 3] = np.where(buffer.alpha > 0, scaled, 0).astype(np.uint8)

        # Overlap of the source rectangle with its shifted copy.
        dst_x0, dst_x1 = max(dx, 0), min(width + dx, width)
        dst_y0, dst_y1 = max(dy, 0), min(height + dy, height)
        if dst_x0 >= dst_x1 or dst_y0 >= dst_y1:
            return layer

        dst = (slice(dst_y0, dst_y1), slice(dst_x0, dst_x1))
        src = (slice(dst_y0 - dy, dst_y1 - dy), slice(dst_x0 - dx, dst_x1 - dx))
        layer[dst] = alpha_over(contribution[src], layer[dst])
        return layer

    def apply(self, buffer: PixelBuffer, spec: ShadowSpec) -> None:
        """Apply ``spec`` to ``buffer`` in place."""
        self.apply_drop_shadow(buffer, spec.offset[0], spec.offset[1], spec.blur_radius, spec.color)

    def apply_drop_shadow(self, buffer: PixelBuffer, dx: int, dy: int, blur_radius: int,
                          shadow_color: Pixel) -> None:
        """
        Composite ``buffer`` over an offset, blurred silhouette of itself.

        Args:
            buffer: Buffer to modify in place; its size does not change
            dx: Horizontal shadow offset
            dy: Vertical shadow offset
            blur_radius: Gaussian blur radius; 0 leaves a hard edge
            shadow_color: RGBA colour, alpha sets the shadow opacity
        """
        if buffer.width == 0 or buffer.height == 0:
            return

        layer = self.build_silhouette(buffer, dx, dy, shadow_color)

        if blur_radius > 0:
            # Uniform colour so the blur only spreads alpha.
            layer[..., :3] = shadow_color[:3]
            blurred = ImageUtils.gaussian_blur(PixelBuffer.from_array(layer, copy=False).to_image(), blur_radius)
            layer = PixelBuffer.from_image(blurred).pixels

        buffer.pixels[...] = alpha_over(buffer.pixels, layer)


def apply_drop_shadow(buffer: PixelBuffer, dx: int, dy: int, blur_radius: int, shadow_color: Pixel) -> None:
    """Module-level shortcut for :meth:`DropShadowCompositor.apply_drop_shadow`."""
    DropShadowCompositor().apply_drop_shadow(buffer, dx, dy, blur_radius, shadow_color)
