"""
test_worker.py
--------------
Unit tests for the per-file resize pipeline.
"""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from batchresize.dimensions import Sizing
from batchresize.errors import BadNameError, DecodeError, EncodeError
from batchresize.filters import ResizeFilter
from batchresize.worker import (
    WorkItem,
    decode_image,
    encode_image,
    output_path_for,
    process_image,
    resample_image,
)


def _item(path, out_dir, filter=ResizeFilter.TRIANGLE, **sizing):
    return WorkItem(input_path=path, output_dir=out_dir, sizing=Sizing(**sizing), filter=filter)


# ---------------------------------------------------------------------------
# 1. Output path
# ---------------------------------------------------------------------------

def test_output_path_keeps_basename_and_extension(tmp_path):
    """The output keeps the input's name and extension."""
    assert output_path_for(Path("some/dir/a.PNG"), tmp_path) == tmp_path / "a.PNG"
    assert output_path_for("x.tar.gz", "out") == Path("out") / "x.tar.gz"


@pytest.mark.parametrize("name", ["some/dir/", "", "..", "a/."])
def test_output_path_bad_name(tmp_path, name):
    """Paths without a file name are rejected."""
    with pytest.raises(BadNameError):
        output_path_for(name, tmp_path)


# ---------------------------------------------------------------------------
# 2. Decode / encode
# ---------------------------------------------------------------------------

def test_decode_non_image(tmp_path):
    """A text file is a Decode failure."""
    p = tmp_path / "b.txt"
    p.write_text("not an image")
    with pytest.raises(DecodeError) as excinfo:
        decode_image(p)
    assert excinfo.value.kind == "Decode"
    assert not excinfo.value.fatal


def test_decode_missing_file(tmp_path):
    """A missing file is a Decode failure."""
    with pytest.raises(DecodeError):
        decode_image(tmp_path / "nope.png")


def test_decode_truncated_file(tmp_path, make_image):
    """A truncated image is a Decode failure."""
    p = make_image(tmp_path / "t.png", size=(64, 64))
    data = p.read_bytes()
    p.write_bytes(data[: len(data) // 2])
    with pytest.raises(DecodeError):
        decode_image(p)


def test_encode_unknown_extension(tmp_path):
    """An unknown extension fails without leaving a file."""
    img = Image.new("RGB", (4, 4))
    with pytest.raises(EncodeError):
        encode_image(img, tmp_path / "a.unknownext")
    assert not (tmp_path / "a.unknownext").exists()


def test_encode_into_missing_directory(tmp_path):
    """Writing into a missing directory is an Encode failure."""
    img = Image.new("RGB", (4, 4))
    with pytest.raises(EncodeError):
        encode_image(img, tmp_path / "missing" / "a.png")


# ---------------------------------------------------------------------------
# 3. Resample
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("resize_filter", list(ResizeFilter))
def test_resample_every_filter(resize_filter):
    """All five filters produce the fitted size."""
    img = Image.new("RGB", (100, 200), (10, 20, 30))
    out = resample_image(img, (50, 100), resize_filter)
    assert out.size == (50, 100)
    assert out.mode == "RGB"


def test_resample_same_size_is_copy():
    """A same-size fit copies instead of resampling."""
    img = Image.new("RGB", (64, 48), (1, 2, 3))
    out = resample_image(img, (64, 48), ResizeFilter.GAUSSIAN)
    assert out is not img
    assert out.tobytes() == img.tobytes()


def test_resample_zero_box_is_one_pixel():
    """A zero box yields a 1x1 image."""
    img = Image.new("RGB", (64, 48))
    assert resample_image(img, (0, 0), ResizeFilter.TRIANGLE).size == (1, 1)


@pytest.mark.parametrize("mode", ["L", "LA", "RGBA", "P", "1", "CMYK", "I", "F"])
def test_gaussian_handles_modes(mode):
    """The Gaussian path accepts the common Pillow modes."""
    img = Image.new("RGB", (40, 30), (200, 100, 50)).convert(mode)
    out = resample_image(img, (20, 0), ResizeFilter.GAUSSIAN)
    assert out.size == (20, 15)


def test_gaussian_keeps_uniform_color():
    """Gaussian resampling keeps a flat color exact."""
    img = Image.new("RGB", (40, 30), (200, 100, 50))
    out = resample_image(img, (13, 0), ResizeFilter.GAUSSIAN)
    assert np.all(np.asarray(out) == (200, 100, 50))


# ---------------------------------------------------------------------------
# 4. Full pipeline
# ---------------------------------------------------------------------------

def test_process_scale(tmp_path, make_image):
    """Scaled PNG output has the expected size and format."""
    src = make_image(tmp_path / "in" / "a.png", size=(100, 200))
    out = process_image(_item(src, tmp_path, scale=0.5))
    assert out == tmp_path / "a.png"
    with Image.open(out) as img:
        assert img.size == (50, 100)
        assert img.format == "PNG"


def test_process_width_only_jpeg(tmp_path, make_image):
    """Width only keeps the aspect ratio and the JPEG format."""
    src = make_image(tmp_path / "in" / "a.jpg", size=(400, 300))
    out = process_image(_item(src, tmp_path, width=200))
    with Image.open(out) as img:
        assert img.size == (200, 150)
        assert img.format == "JPEG"


def test_process_scale_wins(tmp_path, make_image):
    """Scale 1 keeps the source size even with a height given."""
    src = make_image(tmp_path / "in" / "img.png", size=(64, 48))
    out = process_image(_item(src, tmp_path, scale=1.0, height=50))
    with Image.open(out) as img:
        assert img.size == (64, 48)


def test_process_overwrites_existing(tmp_path, make_image):
    """An existing output file is overwritten."""
    src = make_image(tmp_path / "in" / "a.png", size=(40, 40))
    (tmp_path / "a.png").write_bytes(b"stale")
    process_image(_item(src, tmp_path, width=20))
    with Image.open(tmp_path / "a.png") as img:
        assert img.size == (20, 20)


def test_process_is_deterministic(tmp_path, make_image):
    """Two runs produce identical bytes."""
    src = make_image(tmp_path / "in" / "a.png", size=(90, 70))
    (tmp_path / "o1").mkdir()
    (tmp_path / "o2").mkdir()
    first = process_image(_item(src, tmp_path / "o1", filter=ResizeFilter.GAUSSIAN, width=33))
    second = process_image(_item(src, tmp_path / "o2", filter=ResizeFilter.GAUSSIAN, width=33))
    assert first.read_bytes() == second.read_bytes()


def test_process_leaves_input_untouched(tmp_path, make_image):
    """The input file is not modified."""
    src = make_image(tmp_path / "in" / "a.png", size=(40, 40))
    before = src.read_bytes()
    process_image(_item(src, tmp_path, scale=0.5))
    assert src.read_bytes() == before


def test_process_rgba_to_jpeg_fails_to_encode(tmp_path, make_image):
    """RGBA content cannot be written as JPEG."""
    src = make_image(tmp_path / "in" / "a.png", size=(40, 40), mode="RGBA")
    jpg = tmp_path / "in" / "b.jpg"
    src.rename(jpg)
    with pytest.raises(EncodeError):
        process_image(_item(jpg, tmp_path, scale=0.5))


# ---------------------------------------------------------------------------
# 5. Palette and bilevel sources
# ---------------------------------------------------------------------------

def _stripes(mode):
    """64x8 image of alternating black and white one-pixel columns."""
    cols = (np.arange(64) % 2 * 255).astype(np.uint8)
    arr = np.repeat(np.tile(cols, (8, 1))[..., None], 3, axis=-1)
    return Image.fromarray(arr).convert(mode)


@pytest.mark.parametrize("resize_filter", [
    ResizeFilter.TRIANGLE, ResizeFilter.CATMULLROM, ResizeFilter.GAUSSIAN, ResizeFilter.LANCZOS3,
])
def test_palette_source_uses_chosen_filter(resize_filter):
    """A palette image is filtered like its RGB equivalent, not nearest-sampled."""
    rgb = np.asarray(resample_image(_stripes("RGB"), (32, 0), resize_filter))
    pal_out = resample_image(_stripes("P"), (32, 0), resize_filter)
    assert pal_out.mode == "RGB"
    pal = np.asarray(pal_out)
    assert np.array_equal(pal, rgb)
    assert 100 < pal.mean() < 160


def test_palette_with_transparency_expands_to_rgba():
    """Transparent palette images keep their alpha channel after resampling."""
    img = Image.new("P", (40, 20), 0)
    img.info["transparency"] = 0
    out = resample_image(img, (20, 0), ResizeFilter.TRIANGLE)
    assert out.mode == "RGBA"
    assert out.size == (20, 10)


@pytest.mark.parametrize("resize_filter", [ResizeFilter.TRIANGLE, ResizeFilter.GAUSSIAN])
def test_bilevel_source_is_interpolated(resize_filter):
    """Bilevel images become grayscale so the filter can average pixels."""
    out = resample_image(_stripes("1"), (32, 0), resize_filter)
    assert out.mode == "L"
    assert 100 < np.asarray(out).mean() < 160
