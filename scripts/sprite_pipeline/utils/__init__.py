"""
Utility modules for pixel blending and image I/O.
"""

from .blend import alpha_over, round_half_away, round_to_int

__all__ = [
    "alpha_over",
    "round_half_away",
    "round_to_int",
]
