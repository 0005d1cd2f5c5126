"""
Sprite sheet composition for numbered variants.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Union
from pathlib import Path
import json

from ..buffer import PixelBuffer
from ..errors import DimensionMismatchError


@dataclass
class SpriteSheet:
    """Result of sprite sheet composition."""
    sheet: PixelBuffer
    frame_size: Tuple[int, int]
    frame_count: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def line_length(self) -> int:
        """Frames per row; sheets are a single row."""
        return self.frame_count

    @property
    def frame_map(self) -> Dict[str, Dict[str, int]]:
        frame_width, frame_height = self.frame_size
        return {
            f"frame_{index + 1}": {"x": index * frame_width, "y": 0, "w": frame_width, "h": frame_height}
            for index in range(self.frame_count)
        }

    def describe(self) -> List[str]:
        return [
            f"Sprite sheet size: {self.sheet.width}x{self.sheet.height}",
            f"Individual sprite size: {self.frame_size[0]}x{self.frame_size[1]}",
            f"Variation count: {self.frame_count}",
            f"Line length: {self.line_length}",
        ]

    def save_frame_map(self, path: Union[str, Path]) -> None:
        """Save the frame map as JSON."""
        sheet_data = {
            "frames": self.frame_map,
            "meta": {
                "size": {"w": self.sheet.width, "h": self.sheet.height},
                "format": "RGBA",
                "variation_count": self.frame_count,
                "line_length": self.line_length,
                **self.metadata
            }
        }
        with open(path, 'w') as f:
            json.dump(sheet_data, f, indent=2)


class SpriteSheetComposer:
    """Lays equally sized frames side by side, left to right."""

    @staticmethod
    def validate_frames(frames: Sequence[PixelBuffer]) -> Tuple[int, int]:
        """
        Check that every frame matches the first one.

        Returns:
            The shared (width, height)

        Raises:
            ValueError: If there are no frames
            DimensionMismatchError: If a frame differs in size
        """
        if not frames:
            raise ValueError("A sprite sheet needs at least one frame")
        expected = frames[0].size
        for index, frame in enumerate(frames[1:], start=2):
            if frame.size != expected:
                raise DimensionMismatchError(
                    f"Frame {index} is {frame.width}x{frame.height} but frame 1 is "
                    f"{expected[0]}x{expected[1]}; all frames must share the same dimensions",
                    expected,
                    frame.size,
                    index=index
                )
        return expected

    def compose(self, frames: Sequence[PixelBuffer]) -> PixelBuffer:
        """Concatenate frames horizontally in sequence order."""
        return self.compose_sheet(frames).sheet

    def compose_sheet(self, frames: Sequence[PixelBuffer]) -> SpriteSheet:
        """Concatenate frames and report the sheet layout."""
        frame_width, frame_height = self.validate_frames(frames)

        sheet = PixelBuffer(frame_width * len(frames), frame_height)
        for index, frame in enumerate(frames):
            sheet.paste(frame, index * frame_width, 0)

        return SpriteSheet(sheet, (frame_width, frame_height), len(frames))


def compose(frames: Sequence[PixelBuffer]) -> PixelBuffer:
    """Module-level shortcut for :meth:`SpriteSheetComposer.compose`."""
    return SpriteSheetComposer().compose(frames)
