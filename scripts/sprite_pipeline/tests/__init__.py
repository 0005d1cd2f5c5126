# Tests for the sprite pipeline
