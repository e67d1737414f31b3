"""Tests for the image encoder."""

import numpy as np
import pytest
from PIL import Image

from kaboom.encoder import encode_ppm, to_rgb8, write_image


def _gradient_frame(width: int = 4, height: int = 2) -> np.ndarray:
    frame = np.zeros((height, width, 3), dtype=np.float64)
    frame[..., 0] = np.linspace(0.0, 1.0, width)
    frame[..., 1] = 0.5
    frame[..., 2] = np.linspace(1.0, 0.0, height)[:, None]
    return frame


class TestToRgb8:
    def test_dtype_and_shape(self):
        result = to_rgb8(_gradient_frame())
        assert result.dtype == np.uint8
        assert result.shape == (2, 4, 3)

    def test_clamps_hot_and_negative(self):
        frame = np.array([[[1.7, -0.3, 1.0]]])
        np.testing.assert_array_equal(to_rgb8(frame), [[[255, 0, 255]]])

    def test_truncates(self):
        frame = np.array([[[0.5, 0.2, 0.999]]])
        np.testing.assert_array_equal(to_rgb8(frame), [[[127, 51, 254]]])


class TestEncodePpm:
    def test_header(self):
        data = encode_ppm(_gradient_frame(4, 2))
        assert data.startswith(b"P6\n4 2\n255\n")

    def test_payload_is_row_major_rgb(self):
        frame = _gradient_frame(4, 2)
        data = encode_ppm(frame)
        header = b"P6\n4 2\n255\n"
        assert len(data) == len(header) + 4 * 2 * 3
        assert data[len(header):] == to_rgb8(frame).tobytes()


class TestWriteImage:
    def test_no_suffix_matches_encoded_bytes(self, tmp_path):
        frame = _gradient_frame()
        output = write_image(frame, tmp_path / "frame")
        assert output.read_bytes() == encode_ppm(frame)

    def test_writes_ppm(self, tmp_path):
        frame = _gradient_frame()
        output = write_image(frame, tmp_path / "out.ppm")
        assert output.read_bytes() == encode_ppm(frame)

    def test_png_by_suffix(self, tmp_path):
        frame = _gradient_frame()
        output = write_image(frame, tmp_path / "out.png")
        with Image.open(output) as img:
            assert img.format == "PNG"
            np.testing.assert_array_equal(np.asarray(img), to_rgb8(frame))

    def test_creates_parent_dirs(self, tmp_path):
        output = write_image(_gradient_frame(), tmp_path / "a" / "b" / "out.ppm")
        assert output.exists()

    def test_unwritable_path_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(RuntimeError, match="Could not write image"):
            write_image(_gradient_frame(), blocker / "out.ppm")

    def test_unknown_format_raises(self, tmp_path):
        with pytest.raises(RuntimeError):
            write_image(_gradient_frame(), tmp_path / "out.notaformat")
