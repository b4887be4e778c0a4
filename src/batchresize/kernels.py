"""
kernels.py
----------

Separable convolution resampling in NumPy, for kernels Pillow does not ship.

The resampler works one axis at a time (vertical, then horizontal). For every
output sample it centres the kernel on the mapped source coordinate; when
downscaling, the kernel is stretched by the scale ratio so it acts as a
low-pass filter. Weights are normalized per output sample, and the final
values are rounded to nearest and clamped to the range of the input dtype.
"""

from __future__ import annotations

__all__ = ["Kernel", "gaussian", "GAUSSIAN", "resample_axis", "resample_array",]

import math
from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np
from numpy.typing import NDArray


# ---------------------------------------------------------------------------
# Kernels
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Kernel:
    """A 1-D reconstruction filter and the radius beyond which it is zero."""
    func: Callable[[NDArray[np.float64]], NDArray[np.float64]]
    support: float


def gaussian(x: NDArray[np.float64], sigma: float = 0.5) -> NDArray[np.float64]:
    return np.exp(-(x ** 2) / (2.0 * sigma ** 2)) / (math.sqrt(2.0 * math.pi) * sigma)


GAUSSIAN = Kernel(func=gaussian, support=3.0)


# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------
def _axis_weights(src_len: int, dst_len: int,
                  kernel: Kernel) -> Tuple[NDArray[np.intp], NDArray[np.float64]]:
    """
    Gather indices and normalized weights for resampling one axis.

    Returns two (dst_len, taps) arrays. Padding taps point at a valid index
    and carry zero weight, so callers can sum over all taps unconditionally.
    """
    ratio = src_len / dst_len
    sratio = max(ratio, 1.0)
    src_support = kernel.support * sratio

    centers = (np.arange(dst_len, dtype=np.float64) + 0.5) * ratio
    left = np.clip(np.floor(centers - src_support).astype(np.intp), 0, src_len - 1)
    right = np.clip(np.ceil(centers + src_support).astype(np.intp), left + 1, src_len)

    taps = int((right - left).max())
    idx = left[:, None] + np.arange(taps, dtype=np.intp)[None, :]
    valid = idx < right[:, None]

    # kernel is evaluated against pixel centres
    offsets = (idx - (centers - 0.5)[:, None]) / sratio
    weights = np.where(valid, kernel.func(offsets), 0.0)
    sums = weights.sum(axis=1, keepdims=True)
    weights = weights / np.where(sums == 0.0, 1.0, sums)

    return np.minimum(idx, src_len - 1), weights


def resample_axis(data: NDArray, dst_len: int, axis: int, kernel: Kernel) -> NDArray[np.float64]:
    """Resample float `data` along `axis` to `dst_len` samples."""
    data = np.moveaxis(data, axis, 0)
    idx, weights = _axis_weights(data.shape[0], dst_len, kernel)
    out = np.zeros((dst_len,) + data.shape[1:], dtype=np.float64)
    extra = (None,) * (data.ndim - 1)
    for tap in range(idx.shape[1]):
        out += weights[(slice(None), tap) + extra] * data[idx[:, tap]]
    return np.moveaxis(out, 0, axis)


def resample_array(pixels: NDArray, size: Tuple[int, int], kernel: Kernel = GAUSSIAN) -> NDArray:
    """
    Resample an image array of shape (h, w) or (h, w, channels) to `size`.

    Args:
        pixels: Integer or float pixel array, as produced by np.asarray(img).
        size:   Target (width, height), both >= 1.
        kernel: Reconstruction filter.

    Returns:
        Array of shape (height, width[, channels]) with the input dtype.
    """
    width, height = size
    if width < 1 or height < 1:
        raise ValueError(f"Target size must be positive; got {size}.")

    data = resample_axis(pixels.astype(np.float64), height, 0, kernel)
    data = resample_axis(data, width, 1, kernel)

    if np.issubdtype(pixels.dtype, np.integer):
        info = np.iinfo(pixels.dtype)
        data = np.clip(np.rint(data), info.min, info.max)
    return data.astype(pixels.dtype)
