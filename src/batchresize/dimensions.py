"""
dimensions.py - Target size policy.

compute_target_size() turns the run's sizing options into a bounding box for
one image; fit_dimensions() fits the source inside that box without
distortion, treating a zero axis as unbounded.
"""

__all__ = ["Sizing", "compute_target_size", "fit_dimensions",]

import math
from dataclasses import dataclass
from typing import Optional, Tuple

Size = Tuple[int, int]


@dataclass(frozen=True)
class Sizing:
    """Caller's sizing options. `scale` wins over width/height when set."""
    scale: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.scale is None and self.width is None and self.height is None


def compute_target_size(src_size: Size, sizing: Sizing) -> Size:
    """
    Compute the bounding box `(tgt_w, tgt_h)` for a source of `src_size`.

    With a scale, both source dimensions are multiplied and truncated toward
    zero. Otherwise the absolute width/height are used, a missing one being 0.
    """
    src_w, src_h = src_size
    if sizing.scale is not None:
        return (math.floor(src_w * sizing.scale), math.floor(src_h * sizing.scale))
    return (sizing.width or 0, sizing.height or 0)


def fit_dimensions(src_size: Size, box: Size) -> Size:
    """
    Largest size with the source aspect ratio that fits inside `box`.

    Integer arithmetic throughout; the free axis is floored and never drops
    below 1. A zero box axis is unbounded; a fully zero box yields 1x1.
    """
    w, h = src_size
    bw, bh = box
    if bw == 0 and bh == 0:
        return (1, 1)
    if bw == 0:
        return (max(1, w * bh // h), bh)
    if bh == 0:
        return (bw, max(1, h * bw // w))
    if bw * h <= w * bh:
        return (bw, max(1, h * bw // w))
    return (max(1, w * bh // h), bh)
