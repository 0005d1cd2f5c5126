"""
Tests for alignment resolution and offset suggestions.
"""

import unittest

from ..buffer import PixelBuffer
from ..processing.alignment import (
    resolve_anchor,
    suggest_offset,
    suggest_shadow_offset,
    suggest_alignment
)


class TestResolveAnchor(unittest.TestCase):
    """Test cases for turning alignment requests into anchors."""

    def test_direction_words(self):
        cases = {
            "center": (0.5, 0.5),
            "middle": (0.5, 0.5),
            "Top-Left": (0.0, 0.0),
            "bottom right": (1.0, 1.0),
            "bottom-center": (0.5, 1.0),
            "center_top": (0.5, 0.0),
            "LEFT": (0.0, 0.5),
            "right": (1.0, 0.5),
            "top": (0.5, 0.0),
            "bottom": (0.5, 1.0),
            "top-right": (1.0, 0.0),
            "left bottom": (0.0, 1.0),
        }
        for request, expected in cases.items():
            with self.subTest(request=request):
                self.assertEqual(resolve_anchor(request), expected)

    def test_center_takes_precedence_over_sides(self):
        # "center" with both "top" and "left" resolves on "top" first
        self.assertEqual(resolve_anchor("top-left-center"), (0.5, 0.0))

    def test_unrecognized_words_fall_back_with_warning(self):
        with self.assertLogs("sprite_pipeline.processing.alignment", level="WARNING") as logs:
            self.assertEqual(resolve_anchor("gibberish"), (0.0, 0.0))
        self.assertIn("gibberish", logs.output[0])

    def test_numeric_pair(self):
        self.assertEqual(resolve_anchor("0.25,1"), (0.25, 1.0))
        self.assertEqual(resolve_anchor("(0.5, 0.5)"), (0.5, 0.5))
        self.assertEqual(resolve_anchor((1, 0)), (1.0, 0.0))

    def test_numeric_pair_out_of_range(self):
        with self.assertRaises(ValueError):
            resolve_anchor("1.5,0")
        with self.assertRaises(ValueError):
            resolve_anchor((0.0, -0.1))

    def test_empty_string(self):
        with self.assertRaises(ValueError):
            resolve_anchor("   ")


class TestOffsetSuggestions(unittest.TestCase):
    """Test cases for image and shadow offsets."""

    def test_tile_sized_image_needs_no_offset(self):
        image = PixelBuffer(64, 64)
        self.assertEqual(suggest_offset(image, (0.5, 0.5)), (0.0, 0.0))
        self.assertEqual(suggest_offset(image, (1.0, 1.0)), (0.0, 0.0))

    def test_small_image_offsets(self):
        image = PixelBuffer(32, 32)
        self.assertEqual(suggest_offset(image, (0.5, 1.0)), (0.0, 8.0))
        self.assertEqual(suggest_offset(image, (0.0, 0.0)), (-8.0, -8.0))

    def test_custom_tile_size(self):
        image = PixelBuffer(32, 32)
        self.assertEqual(suggest_offset(image, (1.0, 0.5), tile_size=128), (24.0, 0.0))

    def test_shadow_offset(self):
        image = PixelBuffer(32, 32)
        shadow = PixelBuffer(40, 16)
        image_offset = suggest_offset(image, (0.5, 1.0))

        offset_x, offset_y = suggest_shadow_offset(image, image_offset, shadow)

        # -6 (bottom-left) + 8 (half the gap) + 1.28 (width nudge)
        self.assertAlmostEqual(offset_x, 3.28)
        # 12 (bottom-left) + 8 (half height) + 2 * 8 (linked) + 1 (padding)
        self.assertAlmostEqual(offset_y, 37.0)

    def test_suggest_alignment_without_shadow(self):
        suggestion = suggest_alignment(PixelBuffer(32, 32), None, (0.5, 1.0))
        self.assertEqual(suggestion.offset, (0.0, 8.0))
        self.assertIsNone(suggestion.shadow_offset)
        self.assertEqual(suggestion.describe(), [
            "Using alignment: (0.5, 1.0)",
            "Suggested offset for image alignment: (0, 8)",
        ])

    def test_suggest_alignment_with_shadow(self):
        suggestion = suggest_alignment(PixelBuffer(32, 32), PixelBuffer(40, 16), (0.5, 1.0))
        self.assertIsNotNone(suggestion.shadow_offset)
        self.assertEqual(len(suggestion.describe()), 3)
        self.assertTrue(suggestion.describe()[2].startswith("Suggested offset for shadow alignment"))


if __name__ == '__main__':
    unittest.main()
