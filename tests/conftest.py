"""
-------
conftest.py
-------
Shared pytest fixtures for batchresize tests.
"""

import logging

import numpy as np
import pytest
from PIL import Image

from batchresize.logging_utils import LOGGER_NAME


# -----------------------------------------------------------------------------
# Image fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_image():
  """
  Factory writing a small deterministic RGB gradient image to `path`.

  The format follows the extension of `path`.
  """
  def _make(path, size=(100, 200), mode="RGB"):
    w, h = size
    y, x = np.indices((h, w))
    r = (x * 255 // max(w - 1, 1)).astype(np.uint8)
    g = (y * 255 // max(h - 1, 1)).astype(np.uint8)
    b = ((x + y) % 256).astype(np.uint8)
    img = Image.fromarray(np.stack([r, g, b], axis=-1))
    if mode != "RGB":
      img = img.convert(mode)
    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path)
    return path
  return _make


@pytest.fixture
def input_dir(tmp_path):
  d = tmp_path / "in"
  d.mkdir()
  return d


@pytest.fixture
def output_dir(tmp_path):
  return tmp_path / "out"


@pytest.fixture
def gray_array():
  """A uniform 40x30 mid-gray RGB array."""
  return np.full((30, 40, 3), 128, dtype=np.uint8)


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_package_logger():
  """Drop handlers installed by configure_logging() between tests."""
  yield
  logger = logging.getLogger(LOGGER_NAME)
  for h in list(logger.handlers):
    logger.removeHandler(h)
    h.close()
  logger.setLevel(logging.NOTSET)
