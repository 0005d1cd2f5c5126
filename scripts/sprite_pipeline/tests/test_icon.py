"""
Tests for icon atlas composition.
"""

import unittest

from ..buffer import PixelBuffer
from ..errors import EmptyImageError
from ..processing.icon import IconAtlasComposer, compose_atlas, ATLAS_SIZE, POSITIONS
from ..processing.shadow import ShadowSpec


class TestIconAtlasComposer(unittest.TestCase):
    """Test cases for IconAtlasComposer."""

    def setUp(self):
        self.composer = IconAtlasComposer()
        # 50x50 opaque artwork with a transparent margin
        self.source = PixelBuffer(60, 60)
        self.source.pixels[5:55, 5:55] = (30, 120, 200, 255)

    def test_atlas_size(self):
        atlas = compose_atlas(self.source)
        self.assertEqual(atlas.size, ATLAS_SIZE)
        self.assertEqual(atlas.size, (120, 64))

    def test_layers(self):
        result = self.composer.compose(self.source)

        self.assertEqual(result.source_size, (60, 60))
        self.assertEqual(result.trimmed_size, (50, 50))
        self.assertEqual([layer.resolution for layer in result.layers], [64, 32, 16, 8])
        self.assertEqual([layer.padding for layer in result.layers], [2, 2, 2, 2])
        self.assertEqual([layer.tile_size for layer in result.layers], [(60, 60), (28, 28), (12, 12), (4, 4)])
        self.assertEqual([layer.position for layer in result.layers], [(2, 2), (66, 2), (98, 2), (114, 2)])

    def test_layer_content_lands_inside_its_slot(self):
        atlas = self.composer.compose_atlas(self.source)
        for position, resolution in zip(POSITIONS, (64, 32, 16, 8)):
            centre = position + resolution // 2
            with self.subTest(resolution=resolution):
                self.assertGreater(atlas.get_pixel(centre, resolution // 2)[3], 200)

    def test_source_is_not_modified(self):
        before = self.source.copy()
        self.composer.compose(self.source)
        self.assertEqual(self.source, before)

    def test_padding_is_limited_on_small_layers(self):
        composer = IconAtlasComposer(ShadowSpec(blur_radius=6))
        self.assertEqual(composer.layer_padding(64), 6)
        self.assertEqual(composer.layer_padding(16), 4)
        self.assertEqual(composer.layer_padding(8), 2)

    def test_no_blur_means_no_padding(self):
        composer = IconAtlasComposer(ShadowSpec(blur_radius=0))
        result = composer.compose(self.source)
        self.assertEqual(result.layers[0].tile_size, (64, 64))
        self.assertEqual(result.layers[0].position, (0, 0))

    def test_shadow_fills_padding(self):
        atlas = self.composer.compose_atlas(self.source)
        # The blurred shadow reaches into the 2px padding around the 64px layer
        self.assertGreater(atlas.get_pixel(1, 32)[3], 0)

    def test_empty_source(self):
        with self.assertRaises(EmptyImageError):
            self.composer.compose(PixelBuffer(32, 32))

    def test_non_square_source_warns(self):
        source = PixelBuffer(60, 30, (255, 255, 255, 255))
        with self.assertLogs("sprite_pipeline.processing.icon", level="WARNING"):
            result = self.composer.compose(source)
        self.assertEqual(len(result.warnings), 1)
        self.assertIn("30px", result.warnings[0])
        self.assertEqual(result.atlas.size, (120, 64))

    def test_nearly_square_source_does_not_warn(self):
        source = PixelBuffer(60, 52, (255, 255, 255, 255))
        result = self.composer.compose(source)
        self.assertEqual(result.warnings, [])

    def test_describe(self):
        lines = self.composer.compose(self.source).describe()
        self.assertEqual(lines[0], "Trimmed whitespace, cropped image to: 50x50")
        self.assertEqual(len(lines), 5)


if __name__ == '__main__':
    unittest.main()
