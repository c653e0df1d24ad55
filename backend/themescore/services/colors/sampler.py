"""
Alpha-weighted average color sampling.

Averages a raster in linear light over a regular grid whose stride keeps the
number of visited pixels near ``MAX_SAMPLES`` regardless of resolution. The
last partial row and column are skipped when the stride does not divide the
extent.
"""
import math
from dataclasses import dataclass

import numpy as np

from .colorspace import LinearColor, srgb_to_linear_array
from ..imaging import Raster

MAX_SAMPLES = 4096
CHANNEL_MAX = 65535.0

BLACK = LinearColor(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class SampledAverage:
    """Average linear color plus the grid that produced it."""
    color: LinearColor
    step: int
    samples: int
    weight: float


def sampling_step(width: int, height: int, max_samples: int = MAX_SAMPLES) -> int:
    """Grid stride for a ``width`` x ``height`` raster: max(1, floor(sqrt(w*h / max_samples)))."""
    area = max(0, width) * max(0, height)
    return max(1, math.isqrt(area // max_samples))


def sample_linear_average(raster: Raster) -> SampledAverage:
    """
    Compute the alpha-weighted mean of a raster in linear RGB.

    Each grid pixel contributes ``srgb_to_linear(channel) * alpha`` to the
    channel sums and ``alpha`` to the weight. A zero total weight (fully
    transparent or empty raster) yields black.
    """
    step = sampling_step(raster.width, raster.height)
    samples = raster.sample_grid(step).astype(np.float64) / CHANNEL_MAX
    count = len(samples)

    alpha = samples[:, 3]
    weight = float(alpha.sum())
    if weight == 0:
        return SampledAverage(BLACK, step, count, 0.0)

    linear = srgb_to_linear_array(samples[:, :3])
    sums = (linear * alpha[:, np.newaxis]).sum(axis=0)
    color = LinearColor(*(float(s) / weight for s in sums))
    return SampledAverage(color, step, count, weight)


def average_linear_rgb(raster: Raster) -> LinearColor:
    """Alpha-weighted average linear color of ``raster``."""
    return sample_linear_average(raster).color
