"""
filters.py - Resampling filter identifiers.

The five supported kernels form a closed set. Four of them map onto Pillow's
built-in resampling filters; Gaussian has no Pillow counterpart and is
resampled by batchresize.kernels instead.
"""

__all__ = ["ResizeFilter",]

from enum import Enum
from typing import Optional

from PIL import Image

from .errors import InvalidFilterError


class ResizeFilter(Enum):
    NEAREST = "nearest"
    TRIANGLE = "triangle"
    CATMULLROM = "catmullrom"
    GAUSSIAN = "gaussian"
    LANCZOS3 = "lanczos3"

    @classmethod
    def from_name(cls, name: str) -> "ResizeFilter":
        """Resolve a case-insensitive filter name; no aliases, no prefixes."""
        try:
            return cls(name.lower())
        except ValueError:
            raise InvalidFilterError(name) from None

    @property
    def pil_resample(self) -> Optional[Image.Resampling]:
        """Pillow resampling constant, or None when Pillow lacks the kernel."""
        return _PIL_RESAMPLE.get(self)


_PIL_RESAMPLE = {
    ResizeFilter.NEAREST:    Image.Resampling.NEAREST,
    ResizeFilter.TRIANGLE:   Image.Resampling.BILINEAR,  # triangle, support 1
    ResizeFilter.CATMULLROM: Image.Resampling.BICUBIC,   # cubic with a = -0.5
    ResizeFilter.LANCZOS3:   Image.Resampling.LANCZOS,
}
