"""
sRGB transfer functions.

Converts between gamma-encoded sRGB channel values and light-linear values.
Neither direction clamps its input; callers clamp where needed.
"""
import math
from typing import NamedTuple

import numpy as np


class LinearColor(NamedTuple):
    """Light-linear RGB triple, each channel nominally in [0, 1]."""
    r: float
    g: float
    b: float


def srgb_to_linear(c: float) -> float:
    """Decode one gamma-encoded channel value to linear light."""
    if c <= 0.04045:
        return c / 12.92
    return math.pow((c + 0.055) / 1.055, 2.4)


def linear_to_srgb(c: float) -> float:
    """Encode one linear channel value back to gamma-encoded sRGB."""
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * math.pow(c, 1.0 / 2.4) - 0.055


def srgb_to_linear_array(c: np.ndarray) -> np.ndarray:
    """Vectorized :func:`srgb_to_linear`."""
    c = np.asarray(c, dtype=np.float64)
    # power branch is evaluated everywhere; keep its base non-negative
    power = np.power(np.maximum((c + 0.055) / 1.055, 0.0), 2.4)
    return np.where(c <= 0.04045, c / 12.92, power)


def linear_to_srgb_array(c: np.ndarray) -> np.ndarray:
    """Vectorized :func:`linear_to_srgb`."""
    c = np.asarray(c, dtype=np.float64)
    power = 1.055 * np.power(np.maximum(c, 0.0), 1.0 / 2.4) - 0.055
    return np.where(c <= 0.0031308, 12.92 * c, power)
