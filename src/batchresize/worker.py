"""
worker.py
---------

Per-file resize pipeline run on the pool threads by orchestration.py.

Responsibilities:
- decode one input file (format detected from content)
- compute the bounding box from the run's sizing options
- resample inside that box with the run's filter, keeping the aspect ratio
- encode to output_dir/<basename>, format chosen from the extension

Nothing here touches shared state; every call works on its own WorkItem.
"""

__all__ = [
    "WorkItem",
    "decode_image",
    "resample_image",
    "output_path_for",
    "encode_image",
    "process_image",
]

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image

from .dimensions import Sizing, compute_target_size, fit_dimensions
from .errors import BadNameError, DecodeError, EncodeError
from .filters import ResizeFilter
from .kernels import GAUSSIAN, resample_array

PathLike = Union[str, os.PathLike]
logger = logging.getLogger(__name__)

# Modes np.asarray()/Image.fromarray() round-trip without loss.
_ARRAY_MODES = {"L", "LA", "RGB", "RGBA", "I", "I;16", "F"}


@dataclass(frozen=True)
class WorkItem:
    """Everything one worker needs, captured by value at submission time."""
    input_path: PathLike
    output_dir: Path
    sizing: Sizing
    filter: ResizeFilter


# -------------------------------------------------------------------------
# decode
# -------------------------------------------------------------------------
def decode_image(path: PathLike) -> Image.Image:
    """
    Open and fully load an image. The caller owns the returned image and
    should close it (it is a context manager).
    """
    try:
        img = Image.open(path)
    except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as e:
        raise DecodeError(f"cannot decode image: {e}") from e
    try:
        img.load()
    except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as e:
        img.close()
        raise DecodeError(f"cannot decode image: {e}") from e
    return img


# -------------------------------------------------------------------------
# resample
# -------------------------------------------------------------------------
def resample_image(img: Image.Image, box: Tuple[int, int], resize_filter: ResizeFilter) -> Image.Image:
    """
    Fit `img` inside `box` (zero axis = unbounded) and resample with
    `resize_filter`. Returns a new image; `img` is left untouched.
    """
    size = fit_dimensions(img.size, box)
    if size == img.size:
        return img.copy()

    # palette indices and bilevel pixels cannot be interpolated; expand them
    if img.mode == "P":
        img = img.convert("RGBA" if img.has_transparency_data else "RGB")
    elif img.mode == "1":
        img = img.convert("L")

    resample = resize_filter.pil_resample
    if resample is not None:
        return img.resize(size, resample)
    return _kernel_resize(img, size)


def _kernel_resize(img: Image.Image, size: Tuple[int, int]) -> Image.Image:
    if img.mode not in _ARRAY_MODES:
        img = img.convert("RGBA" if img.has_transparency_data else "RGB")
    pixels = np.asarray(img)
    return Image.fromarray(resample_array(pixels, size, GAUSSIAN))


# -------------------------------------------------------------------------
# encode
# -------------------------------------------------------------------------
def output_path_for(input_path: PathLike, output_dir: PathLike) -> Path:
    """Mirror the input's basename (extension included) into `output_dir`."""
    name = os.path.basename(os.fspath(input_path))
    if name in ("", ".", ".."):
        raise BadNameError(f"Failed capturing file name of {os.fspath(input_path)!r}")
    return Path(output_dir) / name


def encode_image(img: Image.Image, path: PathLike) -> None:
    """Save `img`; Pillow picks the format from the extension and overwrites."""
    try:
        img.save(path)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"cannot encode image: {e}") from e


# -------------------------------------------------------------------------
# pipeline
# -------------------------------------------------------------------------
def process_image(item: WorkItem) -> Path:
    """Run decode -> size -> resample -> encode for one item; return the output path."""
    out_path = output_path_for(item.input_path, item.output_dir)
    with decode_image(item.input_path) as img:
        box = compute_target_size(img.size, item.sizing)
        logger.debug(f"{os.fspath(item.input_path)}: {img.size} -> box {box} "
                     f"({item.filter.value})")
        resized = resample_image(img, box, item.filter)
    with resized:
        encode_image(resized, out_path)
    return out_path
