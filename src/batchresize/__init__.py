"""
batchresize - resize every image of a directory on a bounded thread pool.
"""

__version__ = "0.1.0"

from .dimensions import Sizing, compute_target_size, fit_dimensions
from .filters import ResizeFilter
from .config import ResizeConfig
from .orchestration import run

__all__ = [
    "Sizing",
    "compute_target_size",
    "fit_dimensions",
    "ResizeFilter",
    "ResizeConfig",
    "run",
]
