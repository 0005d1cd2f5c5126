#!/usr/bin/env python3
"""Run the sprite pipeline CLI from a source checkout without installing it."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from sprite_pipeline.cli import app

if __name__ == "__main__":
    app()
