"""
Pixel arithmetic shared by the compositing stages.
All blending is straight (non-premultiplied) alpha on uint8 RGBA arrays.
"""

from decimal import Decimal, ROUND_HALF_UP
import numpy as np


def round_half_away(value: float, digits: int = 0) -> float:
    """
    Round to the given number of decimal places, halves away from zero.
    
    Python's built-in round() uses banker's rounding, which would shift
    sprite sizes and offsets by a pixel on exact halves.
    
    Args:
        value: Number to round
        digits: Decimal places to keep
        
    Returns:
        Rounded value (a float; use int() on the result when digits == 0)
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_to_int(value: float) -> int:
    """Round half away from zero to an integer."""
    return int(round_half_away(value))


def alpha_over(src: np.ndarray, dst: np.ndarray) -> np.ndarray:
    """
    Composite ``src`` over ``dst`` with the standard "over" operator.
    
    Args:
        src: Foreground RGBA array (uint8, ... x 4)
        dst: Background RGBA array of the same shape
        
    Returns:
        New uint8 RGBA array. Pixels whose combined alpha is zero come out
        as (0, 0, 0, 0).
    """
    if src.shape != dst.shape:
        raise ValueError(f"Cannot blend arrays of shape {src.shape} and {dst.shape}")
    
    src_f = src.astype(np.float64)
    dst_f = dst.astype(np.float64)
    src_a = src_f[..., 3:4] / 255.0
    dst_a = dst_f[..., 3:4] / 255.0
    
    out_a = src_a + dst_a * (1.0 - src_a)
    numerator = src_f[..., :3] * src_a + dst_f[..., :3] * dst_a * (1.0 - src_a)
    safe_a = np.where(out_a > 0, out_a, 1.0)
    out_rgb = np.where(out_a > 0, numerator / safe_a, 0.0)
    
    result = np.empty(src.shape, dtype=np.uint8)
    result[..., :3] = np.clip(np.rint(out_rgb), 0, 255)
    result[..., 3] = np.clip(np.rint(out_a[..., 0] * 255.0), 0, 255)
    return result
