"""
Configuration management for the sprite pipeline.
Supports TOML and JSON configuration files and environment overrides.
"""

import os
import json
import tomllib
from dataclasses import dataclass, replace
from typing import Dict, List, Any, Tuple, Union
from pathlib import Path

from .processing.alignment import resolve_anchor


ENV_PREFIX = "SPRITE_PIPELINE_"


def parse_color(value: Union[str, List[int], Tuple[int, ...]]) -> Tuple[int, int, int, int]:
    """
    Parse an RGBA colour.

    Accepts "r,g,b[,a]", "#rrggbb[aa]" or a 3/4 item sequence. Alpha
    defaults to 255.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.startswith('#'):
            digits = text[1:]
            if len(digits) not in (6, 8):
                raise ValueError(f"Hex colour must have 6 or 8 digits, got '{value}'")
            try:
                channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
            except ValueError:
                raise ValueError(f"Invalid hex colour '{value}'")
        else:
            try:
                channels = [int(part) for part in text.split(',')]
            except ValueError:
                raise ValueError(f"Colour must be comma-separated integers, got '{value}'")
    else:
        channels = [int(c) for c in value]

    if len(channels) == 3:
        channels.append(255)
    if len(channels) != 4:
        raise ValueError(f"Colour needs 3 or 4 channels, got {len(channels)}")
    if any(not 0 <= c <= 255 for c in channels):
        raise ValueError(f"Colour channels must be within 0-255, got {channels}")
    return (channels[0], channels[1], channels[2], channels[3])


def _parse_pair(value: Union[str, List[float], Tuple[float, ...]], kind=float) -> Tuple[Any, Any]:
    if isinstance(value, str):
        value = value.split(',')
    items = [kind(v) for v in value]
    if len(items) != 2:
        raise ValueError(f"Expected two values, got {value}")
    return (items[0], items[1])


@dataclass(frozen=True)
class ToolConfig:
    """Settings for one invocation of the sprite pipeline."""

    # Picture settings
    tile_size: int = 64
    scale: float = 1.0
    alignment: Tuple[float, float] = (0.0, 0.0)

    # Icon settings
    shadow_blur_radius: int = 2
    shadow_offset: Tuple[int, int] = (0, 0)
    shadow_color: Tuple[int, int, int, int] = (0, 0, 0, 116)
    square_tolerance: int = 10

    # Output settings
    output_suffix: str = "-processed"
    output_format: str = "PNG"
    compression_level: int = 6

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "ToolConfig":
        """Load configuration from TOML or JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == '.toml':
            with open(config_path, 'rb') as f:
                data = tomllib.load(f)
        elif config_path.suffix.lower() == '.json':
            with open(config_path, 'r') as f:
                data = json.load(f)
        else:
            raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "ToolConfig":
        """Create configuration from dictionary."""
        config_data: Dict[str, Any] = {}

        if 'picture' in data:
            picture = data['picture']
            if 'tile_size' in picture:
                config_data['tile_size'] = int(picture['tile_size'])
            if 'scale' in picture:
                config_data['scale'] = float(picture['scale'])
            if 'alignment' in picture:
                config_data['alignment'] = resolve_anchor(picture['alignment'])

        if 'icon' in data:
            icon = data['icon']
            if 'shadow_blur_radius' in icon:
                config_data['shadow_blur_radius'] = int(icon['shadow_blur_radius'])
            if 'shadow_offset' in icon:
                config_data['shadow_offset'] = _parse_pair(icon['shadow_offset'], int)
            if 'shadow_color' in icon:
                config_data['shadow_color'] = parse_color(icon['shadow_color'])
            if 'square_tolerance' in icon:
                config_data['square_tolerance'] = int(icon['square_tolerance'])

        if 'output' in data:
            output = data['output']
            config_data['output_suffix'] = output.get('suffix', '-processed')
            config_data['output_format'] = output.get('format', 'PNG')
            config_data['compression_level'] = int(output.get('compression_level', 6))

        return cls(**config_data)

    @classmethod
    def from_env(cls) -> "ToolConfig":
        """Create configuration from environment variables only."""
        return cls._apply_env_overrides(cls())

    @classmethod
    def _apply_env_overrides(cls, config: "ToolConfig") -> "ToolConfig":
        """Return a copy of ``config`` with environment variable overrides applied."""
        overrides: Dict[str, Any] = {}

        if os.getenv(ENV_PREFIX + 'TILE_SIZE'):
            overrides['tile_size'] = int(os.getenv(ENV_PREFIX + 'TILE_SIZE', '64'))

        if os.getenv(ENV_PREFIX + 'SCALE'):
            overrides['scale'] = float(os.getenv(ENV_PREFIX + 'SCALE', '1.0'))

        if os.getenv(ENV_PREFIX + 'ALIGNMENT'):
            overrides['alignment'] = resolve_anchor(os.getenv(ENV_PREFIX + 'ALIGNMENT', ''))

        if os.getenv(ENV_PREFIX + 'SHADOW_BLUR_RADIUS'):
            overrides['shadow_blur_radius'] = int(os.getenv(ENV_PREFIX + 'SHADOW_BLUR_RADIUS', '2'))

        if os.getenv(ENV_PREFIX + 'SHADOW_OFFSET'):
            overrides['shadow_offset'] = _parse_pair(os.getenv(ENV_PREFIX + 'SHADOW_OFFSET', '0,0'), int)

        if os.getenv(ENV_PREFIX + 'SHADOW_COLOR'):
            overrides['shadow_color'] = parse_color(os.getenv(ENV_PREFIX + 'SHADOW_COLOR', '0,0,0,116'))

        if os.getenv(ENV_PREFIX + 'SQUARE_TOLERANCE'):
            overrides['square_tolerance'] = int(os.getenv(ENV_PREFIX + 'SQUARE_TOLERANCE', '10'))

        if os.getenv(ENV_PREFIX + 'OUTPUT_SUFFIX'):
            overrides['output_suffix'] = os.getenv(ENV_PREFIX + 'OUTPUT_SUFFIX', '-processed')

        if os.getenv(ENV_PREFIX + 'OUTPUT_FORMAT'):
            overrides['output_format'] = os.getenv(ENV_PREFIX + 'OUTPUT_FORMAT', 'PNG')

        if os.getenv(ENV_PREFIX + 'COMPRESSION_LEVEL'):
            overrides['compression_level'] = int(os.getenv(ENV_PREFIX + 'COMPRESSION_LEVEL', '6'))

        return replace(config, **overrides) if overrides else config

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.tile_size <= 0:
            errors.append("tile_size must be positive")

        if self.scale <= 0:
            errors.append("scale must be positive")

        if not all(0.0 <= v <= 1.0 for v in self.alignment):
            errors.append("alignment values must be between 0 and 1")

        if self.shadow_blur_radius < 0:
            errors.append("shadow_blur_radius cannot be negative")

        if len(self.shadow_color) != 4 or any(not 0 <= c <= 255 for c in self.shadow_color):
            errors.append("shadow_color must be four values between 0 and 255")

        if self.square_tolerance < 0:
            errors.append("square_tolerance cannot be negative")

        if not self.output_suffix:
            errors.append("output_suffix cannot be empty")

        if not 0 <= self.compression_level <= 9:
            errors.append("compression_level must be between 0 and 9")

        if self.output_format.upper() not in ['PNG', 'WEBP']:
            errors.append("output_format must be PNG or WEBP")

        return errors
