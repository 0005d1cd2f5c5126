"""
Image I/O and Pillow-backed resampling for the sprite pipeline.
"""

from typing import Tuple, Union
from pathlib import Path
from PIL import Image, ImageFilter
import io

from ..buffer import PixelBuffer


class ImageUtils:
    """Utility class for image decoding, encoding and filtering."""

    @staticmethod
    def load_image(data: Union[bytes, str, Path, Image.Image]) -> Image.Image:
        """
        Load image from various sources.

        Args:
            data: Image data as bytes, file path, or PIL Image

        Returns:
            PIL Image object

        Raises:
            ValueError: If data cannot be loaded as image
        """
        if isinstance(data, Image.Image):
            return data
        elif isinstance(data, bytes):
            try:
                return Image.open(io.BytesIO(data))
            except Exception as e:
                raise ValueError(f"Cannot load image from bytes: {e}")
        elif isinstance(data, (str, Path)):
            try:
                with Image.open(data) as image:
                    image.load()
                    return image.copy()
            except Exception as e:
                raise ValueError(f"Cannot load image from path '{data}': {e}")
        else:
            raise ValueError(f"Unsupported image data type: {type(data)}")

    @staticmethod
    def load_buffer(data: Union[bytes, str, Path, Image.Image]) -> PixelBuffer:
        """Decode an image source straight into an RGBA pixel buffer."""
        return PixelBuffer.from_image(ImageUtils.ensure_rgba(ImageUtils.load_image(data)))

    @staticmethod
    def save_image(image: Image.Image, path: Union[str, Path], format: str = 'PNG', **kwargs) -> None:
        """
        Save image to file with quality preservation.

        Args:
            image: Image to save
            path: Output file path
            format: Image format (PNG, WEBP)
            **kwargs: Additional save parameters
        """
        save_kwargs = {
            'optimize': True,
        }

        if format.upper() == 'PNG':
            save_kwargs['compress_level'] = kwargs.pop('compress_level', 6)

        save_kwargs.update(kwargs)

        image.save(path, format=format, **save_kwargs)

    @staticmethod
    def save_buffer(buffer: PixelBuffer, path: Union[str, Path], format: str = 'PNG', **kwargs) -> None:
        """Encode a pixel buffer to disk."""
        ImageUtils.save_image(buffer.to_image(), path, format, **kwargs)

    @staticmethod
    def ensure_rgba(image: Image.Image) -> Image.Image:
        """Convert image to RGBA mode if not already."""
        if image.mode != 'RGBA':
            return image.convert('RGBA')
        return image

    @staticmethod
    def resize_with_quality(image: Image.Image, target_size: Tuple[int, int]) -> Image.Image:
        """
        Resize image with a bicubic kernel.

        Args:
            image: Source image
            target_size: Target (width, height)

        Returns:
            Resized image
        """
        return image.resize(target_size, Image.Resampling.BICUBIC)

    @staticmethod
    def gaussian_blur(image: Image.Image, radius: float) -> Image.Image:
        """Blur every channel of the image with a Gaussian of the given radius."""
        if radius <= 0:
            return image.copy()
        return image.filter(ImageFilter.GaussianBlur(radius=radius))
