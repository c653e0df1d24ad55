"""
Similarity scoring between a sampled linear color and a theme color.

The score is Euclidean distance in the linear RGB unit cube, inverted and
normalized by the cube diagonal so that identical colors score 100 and
opposite corners score 0. Rounding is half away from zero, to one decimal.
"""
import math
from dataclasses import dataclass
from typing import Tuple

from .colorspace import LinearColor, linear_to_srgb, srgb_to_linear
from .literals import rgb_to_hex, round_half_away

METHOD = "linear-srgb-euclidean(sampled)"
MAX_DISTANCE = math.sqrt(3.0)


@dataclass(frozen=True)
class ScoreResult:
    score: float
    avg_color_hex: str
    method: str = METHOD


def reference_to_linear(rgb: Tuple[int, int, int]) -> LinearColor:
    """Convert an 8-bit sRGB triple to linear light."""
    r, g, b = rgb
    return LinearColor(
        srgb_to_linear(r / 255.0),
        srgb_to_linear(g / 255.0),
        srgb_to_linear(b / 255.0),
    )


def linear_distance(a: LinearColor, b: LinearColor) -> float:
    dr = a.r - b.r
    dg = a.g - b.g
    db = a.b - b.b
    return math.sqrt(dr * dr + dg * dg + db * db)


def round_score(score: float) -> float:
    """Round to one decimal place, ties away from zero."""
    return round_half_away(score * 10) / 10


def similarity_score(sample: LinearColor, reference: LinearColor) -> float:
    """Score in [0, 100], rounded to one decimal."""
    score = 100.0 * (1.0 - linear_distance(sample, reference) / MAX_DISTANCE)
    score = min(100.0, max(0.0, score))
    return round_score(score)


def linear_to_hex(color: LinearColor) -> str:
    """Render a linear color as a gamma-encoded ``#rrggbb`` string."""
    return rgb_to_hex(
        linear_to_srgb(color.r),
        linear_to_srgb(color.g),
        linear_to_srgb(color.b),
    )


def score_similarity(sample: LinearColor, reference_rgb: Tuple[int, int, int]) -> ScoreResult:
    """
    Score a sampled average against an 8-bit reference color.

    Args:
        sample: Alpha-weighted average in linear RGB
        reference_rgb: Theme color as three 0-255 channel values

    Returns:
        ScoreResult with the rounded score and the sample rendered as hex
    """
    reference = reference_to_linear(reference_rgb)
    return ScoreResult(
        score=similarity_score(sample, reference),
        avg_color_hex=linear_to_hex(sample),
    )
