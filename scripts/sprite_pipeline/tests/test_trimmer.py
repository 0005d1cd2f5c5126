"""
Tests for alpha trimming.
"""

import unittest

from ..buffer import PixelBuffer
from ..errors import EmptyImageError
from ..processing.trimmer import AlphaTrimmer, ContentBounds, trim


def _block(buffer: PixelBuffer, left: int, top: int, right: int, bottom: int,
           colour=(255, 0, 0, 255)) -> PixelBuffer:
    """Fill the inclusive box with a colour."""
    buffer.pixels[top:bottom + 1, left:right + 1] = colour
    return buffer


class TestAlphaTrimmer(unittest.TestCase):
    """Test cases for AlphaTrimmer."""

    def test_find_bounds(self):
        buffer = _block(PixelBuffer(20, 20), 5, 3, 9, 12)
        bounds = AlphaTrimmer.find_bounds(buffer)
        self.assertEqual(bounds, ContentBounds(5, 3, 9, 12))
        self.assertEqual((bounds.width, bounds.height), (5, 10))

    def test_trim_crops_to_content(self):
        buffer = _block(PixelBuffer(20, 20), 5, 3, 9, 12)
        trimmed = trim(buffer)
        self.assertEqual(trimmed.size, (5, 10))
        self.assertEqual(trimmed.get_pixel(0, 0), (255, 0, 0, 255))
        self.assertEqual(trimmed.get_pixel(4, 9), (255, 0, 0, 255))

    def test_trim_is_idempotent(self):
        buffer = _block(PixelBuffer(20, 20), 2, 2, 7, 4)
        once = AlphaTrimmer.trim(buffer)
        twice = AlphaTrimmer.trim(once)
        self.assertIs(twice, once)
        self.assertEqual(twice.size, (6, 3))

    def test_faint_pixels_count_as_content(self):
        buffer = PixelBuffer(10, 10)
        buffer.set_pixel(8, 1, (0, 0, 0, 1))
        buffer.set_pixel(2, 6, (0, 0, 0, 1))
        self.assertEqual(AlphaTrimmer.trim(buffer).size, (7, 6))

    def test_colour_of_transparent_pixels_is_ignored(self):
        buffer = PixelBuffer(10, 10, (255, 255, 255, 0))
        buffer.set_pixel(4, 4, (0, 0, 0, 255))
        self.assertEqual(AlphaTrimmer.trim(buffer).size, (1, 1))

    def test_fully_transparent_image(self):
        with self.assertRaises(EmptyImageError):
            AlphaTrimmer.trim(PixelBuffer(8, 8))

    def test_zero_sized_image(self):
        with self.assertRaises(EmptyImageError):
            AlphaTrimmer.trim(PixelBuffer(0, 0))


if __name__ == '__main__':
    unittest.main()
