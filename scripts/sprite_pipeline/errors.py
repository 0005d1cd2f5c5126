"""
Exception hierarchy for the sprite pipeline.
Every failure carries enough context (file path, offending dimensions) for the
command-line layer to print an actionable message.
"""

from typing import Optional, Tuple, Union
from pathlib import Path


class SpritePipelineError(Exception):
    """Base exception for sprite pipeline errors."""
    
    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.message = message
        self.path = path
    
    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class EmptyImageError(SpritePipelineError):
    """Exception raised when an image has no visible pixel to trim to."""
    
    def __init__(self, message: str = "Cannot process an image which is entirely transparent",
                 path: Optional[Union[str, Path]] = None):
        super().__init__(message, path)


class DimensionMismatchError(SpritePipelineError):
    """Exception raised when images that must share a size do not."""
    
    def __init__(self, message: str, expected: Tuple[int, int], actual: Tuple[int, int],
                 path: Optional[Union[str, Path]] = None, index: Optional[int] = None):
        super().__init__(message, path)
        self.expected = expected
        self.actual = actual
        self.index = index


class InvalidDimensionError(SpritePipelineError):
    """Exception raised when a computed image or canvas size is not positive."""
    
    def __init__(self, message: str, dimensions: Tuple[Union[int, float], ...],
                 path: Optional[Union[str, Path]] = None):
        super().__init__(message, path)
        self.dimensions = dimensions


class MissingResourceError(SpritePipelineError):
    """Exception raised when a required companion file does not exist."""
    
    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message, path)
