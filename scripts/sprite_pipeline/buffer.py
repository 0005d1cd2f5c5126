"""
Owned RGBA8 pixel buffer used by every processing stage.
"""

from typing import Tuple
from PIL import Image
import numpy as np

from .errors import InvalidDimensionError
from .utils.blend import alpha_over


Pixel = Tuple[int, int, int, int]


class PixelBuffer:
    """
    Rectangular grid of straight-alpha RGBA8 pixels.

    Pixels are stored row-major in a numpy array of shape (height, width, 4).
    A buffer is owned by whichever stage holds it: stages either mutate it in
    place or hand back a new buffer that replaces the old one.
    """

    __slots__ = ("_pixels",)

    def __init__(self, width: int, height: int, fill: Pixel = (0, 0, 0, 0)):
        """
        Allocate a buffer filled with a single colour.

        Args:
            width: Width in pixels (>= 0)
            height: Height in pixels (>= 0)
            fill: RGBA fill colour, transparent by default
        """
        if width < 0 or height < 0:
            raise InvalidDimensionError(
                f"Buffer dimensions cannot be negative, got {width}x{height}", (width, height)
            )
        self._pixels = np.zeros((height, width, 4), dtype=np.uint8)
        self._pixels[...] = fill

    @classmethod
    def from_array(cls, array: np.ndarray, copy: bool = True) -> "PixelBuffer":
        """Wrap an (H, W, 4) uint8 array, copying it unless told otherwise."""
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) array, got shape {array.shape}")
        buffer = cls.__new__(cls)
        data = np.array(array, dtype=np.uint8, copy=True) if copy else array.astype(np.uint8, copy=False)
        buffer._pixels = np.ascontiguousarray(data)
        return buffer

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Create a buffer from a Pillow image, converting to RGBA as needed."""
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        if image.width == 0 or image.height == 0:
            return cls(image.width, image.height)
        return cls.from_array(np.asarray(image, dtype=np.uint8))

    def to_image(self) -> Image.Image:
        """Return a Pillow RGBA image holding a copy of this buffer."""
        if self.width == 0 or self.height == 0:
            return Image.new('RGBA', self.size, (0, 0, 0, 0))
        return Image.fromarray(np.ascontiguousarray(self._pixels))

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) tuple."""
        return (self.width, self.height)

    @property
    def pixels(self) -> np.ndarray:
        """The underlying (H, W, 4) array; writes go straight into the buffer."""
        return self._pixels

    @property
    def alpha(self) -> np.ndarray:
        """View of the alpha channel as an (H, W) array."""
        return self._pixels[..., 3]

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} buffer")

    def get_pixel(self, x: int, y: int) -> Pixel:
        """Return the RGBA tuple at (x, y)."""
        self._check_bounds(x, y)
        r, g, b, a = self._pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def set_pixel(self, x: int, y: int, value: Pixel) -> None:
        """Overwrite the pixel at (x, y)."""
        self._check_bounds(x, y)
        self._pixels[y, x] = value

    def copy(self) -> "PixelBuffer":
        """Independent copy of this buffer."""
        return PixelBuffer.from_array(self._pixels)

    def crop(self, left: int, top: int, right: int, bottom: int) -> "PixelBuffer":
        """
        Copy out the region [left, right) x [top, bottom).

        Raises:
            InvalidDimensionError: If the region is empty or leaves the buffer
        """
        if not (0 <= left < right <= self.width and 0 <= top < bottom <= self.height):
            raise InvalidDimensionError(
                f"Crop box ({left}, {top}, {right}, {bottom}) does not fit a "
                f"{self.width}x{self.height} buffer",
                (left, top, right, bottom)
            )
        return PixelBuffer.from_array(self._pixels[top:bottom, left:right])

    def _overlap(self, source: "PixelBuffer", x: int, y: int):
        """Destination and source slices for placing ``source`` at (x, y), or None."""
        left = max(x, 0)
        top = max(y, 0)
        right = min(x + source.width, self.width)
        bottom = min(y + source.height, self.height)
        if left >= right or top >= bottom:
            return None
        dst = (slice(top, bottom), slice(left, right))
        src = (slice(top - y, bottom - y), slice(left - x, right - x))
        return dst, src

    def paste(self, source: "PixelBuffer", x: int, y: int) -> None:
        """Copy ``source`` into this buffer at (x, y), clipping at the edges."""
        overlap = self._overlap(source, x, y)
        if overlap is None:
            return
        dst, src = overlap
        self._pixels[dst] = source.pixels[src]

    def draw(self, source: "PixelBuffer", x: int, y: int) -> None:
        """Composite ``source`` over this buffer at (x, y), clipping at the edges."""
        overlap = self._overlap(source, x, y)
        if overlap is None:
            return
        dst, src = overlap
        self._pixels[dst] = alpha_over(source.pixels[src], self._pixels[dst])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._pixels, other._pixels))

    __hash__ = None

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
