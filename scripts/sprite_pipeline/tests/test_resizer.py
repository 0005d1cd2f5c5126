"""
Tests for aspect-preserving resizing.
"""

import unittest
from PIL import Image
import numpy as np

from ..buffer import PixelBuffer
from ..errors import InvalidDimensionError
from ..processing.resizer import AspectResizer, ResizeSpec, resize


class TestAspectResizer(unittest.TestCase):
    """Test cases for AspectResizer."""

    def setUp(self):
        self.resizer = AspectResizer()

    def test_fitted_size_landscape(self):
        self.assertEqual(AspectResizer.fitted_size(100, 50, 64), (64, 32))

    def test_fitted_size_portrait(self):
        self.assertEqual(AspectResizer.fitted_size(50, 100, 64), (32, 64))

    def test_fitted_size_square_uses_width(self):
        self.assertEqual(AspectResizer.fitted_size(40, 40, 64), (64, 64))

    def test_fitted_size_with_scale(self):
        self.assertEqual(AspectResizer.fitted_size(100, 50, 64, 0.5), (32, 16))

    def test_fitted_size_rounds_halves_up(self):
        # 64 * 5 / 128 = 2.5
        self.assertEqual(AspectResizer.fitted_size(128, 5, 64), (64, 3))

    def test_aspect_ratio_preserved(self):
        for width, height in [(100, 50), (37, 91), (300, 17), (64, 64), (5, 3)]:
            for target in (8, 64, 200):
                with self.subTest(size=(width, height), target=target):
                    out_width, out_height = AspectResizer.fitted_size(width, height, target)
                    self.assertEqual(max(out_width, out_height), target)
                    self.assertLessEqual(abs(out_width - out_height * width / height), 1.0)

    def test_fitted_size_collapsing_axis(self):
        with self.assertRaises(InvalidDimensionError):
            AspectResizer.fitted_size(1000, 1, 64)

    def test_fitted_size_zero_scale(self):
        with self.assertRaises(InvalidDimensionError):
            AspectResizer.fitted_size(10, 10, 64, 0.0)

    def test_resize_downscale(self):
        source = PixelBuffer(100, 50, (255, 0, 0, 255))
        result = self.resizer.resize(source, ResizeSpec(64))
        self.assertEqual(result.size, (64, 32))
        self.assertEqual(source.size, (100, 50))

    def test_resize_same_size_returns_copy(self):
        source = PixelBuffer(64, 32, (1, 2, 3, 255))
        result = resize(source, ResizeSpec(64))
        self.assertEqual(result, source)
        self.assertIsNot(result, source)

    def test_resize_with_center_anchor_pads_square(self):
        source = PixelBuffer(100, 50, (255, 0, 0, 255))
        result = self.resizer.resize(source, ResizeSpec(64, anchor=(0.5, 0.5)))

        self.assertEqual(result.size, (64, 64))
        # 64x32 content centered vertically: 16 transparent rows above and below
        self.assertFalse(result.alpha[0:16].any())
        self.assertTrue(result.alpha[16:48].all())
        self.assertFalse(result.alpha[48:64].any())

    def test_resize_with_bottom_anchor(self):
        source = PixelBuffer(100, 50, (255, 0, 0, 255))
        result = self.resizer.resize(source, ResizeSpec(64, anchor=(0.5, 1.0)))

        self.assertFalse(result.alpha[0:32].any())
        self.assertTrue(result.alpha[32:64].all())

    def test_anchor_canvas_uses_scale(self):
        source = PixelBuffer(20, 20, (255, 255, 255, 255))
        result = self.resizer.resize(source, ResizeSpec(16, scale=0.5, anchor=(0.5, 0.5)))
        self.assertEqual(result.size, (8, 8))

    def test_spec_validation(self):
        with self.assertRaises(ValueError):
            ResizeSpec(64, scale=-1.0)
        with self.assertRaises(ValueError):
            ResizeSpec(64, anchor=(1.5, 0.0))

    def test_resize_uses_bicubic_kernel(self):
        gradient = np.zeros((50, 100, 4), dtype=np.uint8)
        gradient[..., 0] = np.arange(100, dtype=np.uint8) * 2
        gradient[..., 3] = 255
        source = PixelBuffer.from_array(gradient)

        expected = source.to_image().resize((64, 32), Image.Resampling.BICUBIC)

        self.assertEqual(self.resizer.resize(source, ResizeSpec(64)), PixelBuffer.from_image(expected))


if __name__ == '__main__':
    unittest.main()
