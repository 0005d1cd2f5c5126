"""
Alpha trimming: crop buffers to the bounding box of their visible pixels.
"""

from dataclasses import dataclass
import numpy as np

from ..buffer import PixelBuffer
from ..errors import EmptyImageError


@dataclass(frozen=True)
class ContentBounds:
    """Inclusive bounding box of visible content."""
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1


class AlphaTrimmer:
    """Crops away fully transparent padding."""

    ALPHA_THRESHOLD = 0

    @staticmethod
    def find_bounds(buffer: PixelBuffer) -> ContentBounds:
        """
        Locate the tightest box around pixels with alpha above the threshold.

        Args:
            buffer: Buffer to scan

        Returns:
            Inclusive content bounds

        Raises:
            EmptyImageError: If the buffer has no visible pixel
        """
        if buffer.width == 0 or buffer.height == 0:
            raise EmptyImageError(f"Cannot trim an empty {buffer.width}x{buffer.height} image")

        visible = buffer.alpha > AlphaTrimmer.ALPHA_THRESHOLD
        rows = np.flatnonzero(visible.any(axis=1))
        if rows.size == 0:
            raise EmptyImageError()
        cols = np.flatnonzero(visible.any(axis=0))

        return ContentBounds(int(cols[0]), int(rows[0]), int(cols[-1]), int(rows[-1]))

    @staticmethod
    def crop_to(buffer: PixelBuffer, bounds: ContentBounds) -> PixelBuffer:
        """Crop to inclusive bounds, returning the same buffer when nothing would change."""
        if bounds == ContentBounds(0, 0, buffer.width - 1, buffer.height - 1):
            return buffer
        return buffer.crop(bounds.left, bounds.top, bounds.right + 1, bounds.bottom + 1)

    @staticmethod
    def trim(buffer: PixelBuffer) -> PixelBuffer:
        """Crop a buffer to its visible content."""
        return AlphaTrimmer.crop_to(buffer, AlphaTrimmer.find_bounds(buffer))


def trim(buffer: PixelBuffer) -> PixelBuffer:
    """Module-level shortcut for :meth:`AlphaTrimmer.trim`."""
    return AlphaTrimmer.trim(buffer)
