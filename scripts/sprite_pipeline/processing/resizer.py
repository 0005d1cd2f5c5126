"""
Aspect-preserving resize with optional square padding.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..buffer import PixelBuffer
from ..errors import InvalidDimensionError
from ..utils.blend import round_to_int
from ..utils.image import ImageUtils


@dataclass(frozen=True)
class ResizeSpec:
    """How a buffer should be resized."""
    target_size: float
    scale: float = 1.0
    anchor: Optional[Tuple[float, float]] = None

    def __post_init__(self):
        if self.scale < 0:
            raise ValueError(f"scale cannot be negative, got {self.scale}")
        if self.anchor is not None:
            ax, ay = self.anchor
            if not (0.0 <= ax <= 1.0 and 0.0 <= ay <= 1.0):
                raise ValueError(f"anchor must lie within [0, 1] x [0, 1], got {self.anchor}")


class AspectResizer:
    """Fits buffers to a target size without distorting them."""

    @staticmethod
    def fitted_size(width: int, height: int, target_size: float, scale: float = 1.0) -> Tuple[int, int]:
        """
        Compute the output size for a width x height input.

        The long axis (width on ties) is set to ``target_size``, both axes are
        multiplied by ``scale``, and each is rounded half away from zero.

        Raises:
            InvalidDimensionError: If the input or the result has a side <= 0
        """
        if width <= 0 or height <= 0:
            raise InvalidDimensionError(f"Cannot resize a {width}x{height} image", (width, height))

        if width >= height:
            new_width = float(target_size)
            new_height = height * (target_size / width)
        else:
            new_height = float(target_size)
            new_width = width * (target_size / height)

        size = (round_to_int(new_width * scale), round_to_int(new_height * scale))
        if size[0] <= 0 or size[1] <= 0:
            raise InvalidDimensionError(
                f"Resizing {width}x{height} to target {target_size} at scale {scale} "
                f"gives {size[0]}x{size[1]}",
                size
            )
        return size

    def resize(self, buffer: PixelBuffer, spec: ResizeSpec) -> PixelBuffer:
        """
        Resize a buffer according to ``spec``.

        Args:
            buffer: Source buffer (left untouched)
            spec: Target size, scale and optional padding anchor

        Returns:
            New buffer; square with side round(target_size * scale) when an
            anchor is given

        Raises:
            InvalidDimensionError: If any computed dimension is <= 0
        """
        size = self.fitted_size(buffer.width, buffer.height, spec.target_size, spec.scale)
        if size == buffer.size:
            resized = buffer.copy()
        else:
            image = ImageUtils.resize_with_quality(buffer.to_image(), size)
            resized = PixelBuffer.from_image(image)

        if spec.anchor is None:
            return resized

        canvas_size = round_to_int(spec.target_size * spec.scale)
        if canvas_size <= 0:
            raise InvalidDimensionError(
                f"Padding canvas for target {spec.target_size} at scale {spec.scale} "
                f"would be {canvas_size}px",
                (canvas_size, canvas_size)
            )

        pad_left = round_to_int((canvas_size - resized.width) * spec.anchor[0])
        pad_top = round_to_int((canvas_size - resized.height) * spec.anchor[1])

        canvas = PixelBuffer(canvas_size, canvas_size)
        canvas.paste(resized, pad_left, pad_top)
        return canvas


def resize(buffer: PixelBuffer, spec: ResizeSpec) -> PixelBuffer:
    """Module-level shortcut for :meth:`AspectResizer.resize`."""
    return AspectResizer().resize(buffer, spec)
