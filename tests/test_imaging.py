"""Tests for decoding/encoding, upload validation, pixel inspection and export naming."""

import io
from datetime import datetime

import numpy as np
import pytest
from PIL import Image

from filtering import PixelBuffer
from imaging import (
    INVALID_TYPE,
    KERNEL_SIZE_OPTIONS,
    NO_FILE,
    TOO_LARGE,
    ImageDecodeError,
    decode_image,
    download_filename,
    encode_png,
    format_file_size,
    inspect_pixel,
    load_image,
    rgb_to_hsl,
    save_image,
    validate_upload,
)
from conftest import png_bytes


class TestDecodeImage:
    def test_decodes_rgba_png(self, sample_buffer):
        assert decode_image(png_bytes(sample_buffer)) == sample_buffer

    def test_grayscale_png_gets_opaque_alpha(self):
        out = io.BytesIO()
        Image.new("L", (3, 2), color=77).save(out, format="PNG")
        buf = decode_image(out.getvalue())
        assert buf.size == (3, 2)
        assert buf.pixel(2, 1) == (77, 77, 77, 255)

    def test_rgb_jpeg_decodes_to_rgba(self):
        out = io.BytesIO()
        Image.new("RGB", (4, 4), color=(255, 255, 255)).save(out, format="JPEG")
        buf = decode_image(out.getvalue())
        assert buf.size == (4, 4)
        assert buf.pixel(0, 0)[3] == 255

    def test_garbage_raises(self):
        with pytest.raises(ImageDecodeError, match="Failed to decode"):
            decode_image(b"definitely not an image")

    def test_empty_raises(self):
        with pytest.raises(ImageDecodeError, match="No image data"):
            decode_image(b"")

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_image(b"\x00\x01")


class TestLoadAndSave:
    def test_load_image(self, sample_png, sample_buffer):
        assert load_image(sample_png) == sample_buffer

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "missing.png")

    def test_load_undecodable_names_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"nope")
        with pytest.raises(ImageDecodeError, match="broken.png"):
            load_image(path)

    def test_encode_png_keeps_alpha(self, sample_buffer):
        with Image.open(io.BytesIO(encode_png(sample_buffer))) as img:
            assert img.mode == "RGBA"
            assert np.array_equal(np.asarray(img), sample_buffer.as_array())

    def test_save_png_creates_parent_dirs(self, tmp_path, sample_buffer):
        path = save_image(sample_buffer, tmp_path / "nested" / "out.png")
        assert path.exists()
        assert load_image(path) == sample_buffer

    def test_save_jpeg_drops_alpha(self, tmp_path, sample_buffer):
        path = save_image(sample_buffer, tmp_path / "out.jpg")
        with Image.open(path) as img:
            assert img.mode == "RGB"
            assert img.size == sample_buffer.size

    def test_save_unknown_suffix_raises(self, tmp_path, sample_buffer):
        with pytest.raises(ValueError, match="Unsupported output format"):
            save_image(sample_buffer, tmp_path / "out.xyz")


class TestValidateUpload:
    def test_valid_image(self):
        result = validate_upload("photo.png", "image/png", 1024)
        assert result.success
        assert result.message == "File is valid"

    def test_no_file(self):
        result = validate_upload(None, None, None)
        assert not result
        assert result.message == "No file provided"

    def test_non_image_type(self):
        result = validate_upload("notes.txt", "text/plain", 10)
        assert not result.success
        assert result.message == "Invalid file type. Please upload an image file."

    def test_type_guessed_from_filename(self):
        assert validate_upload("photo.jpeg", None, 10).success
        assert not validate_upload("archive.zip", None, 10).success

    def test_too_large(self):
        result = validate_upload("big.png", "image/png", 10 * 1024 * 1024 + 1)
        assert not result.success
        assert result.message == "File is too large. Maximum size is 10MB."

    def test_exactly_at_limit_is_valid(self):
        assert validate_upload("big.png", "image/png", 10 * 1024 * 1024).success

    @pytest.mark.parametrize("args, reason", [
        ((None, None, None), NO_FILE),
        (("notes.txt", "text/plain", 10), INVALID_TYPE),
        (("big.png", "image/png", 10 * 1024 * 1024 + 1), TOO_LARGE),
        (("ok.png", "image/png", 10), None),
    ])
    def test_reason(self, args, reason):
        assert validate_upload(*args).reason == reason

    def test_custom_limit(self):
        result = validate_upload("a.png", "image/png", 3 * 1024 * 1024, max_size=2 * 1024 * 1024)
        assert result.message == "File is too large. Maximum size is 2MB."


class TestFormatFileSize:
    @pytest.mark.parametrize("num_bytes, expected", [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (10 * 1024 * 1024, "10 MB"),
        (int(2.25 * 1024 ** 3), "2.25 GB"),
    ])
    def test_format(self, num_bytes, expected):
        assert format_file_size(num_bytes) == expected


class TestInspectPixel:
    @pytest.fixture
    def buffer(self):
        pixels = np.zeros((2, 3, 4), dtype=np.uint8)
        pixels[0, 0] = (255, 0, 0, 255)
        pixels[1, 2] = (18, 52, 86, 128)
        return PixelBuffer.from_array(pixels)

    def test_reads_channels(self, buffer):
        info = inspect_pixel(buffer, 2, 1)
        assert (info.x, info.y) == (2, 1)
        assert (info.r, info.g, info.b, info.a) == (18, 52, 86, 128)
        assert info.hex == "#123456"

    def test_alpha_normalized(self, buffer):
        assert inspect_pixel(buffer, 2, 1).alpha == 0.5
        assert inspect_pixel(buffer, 0, 0).alpha == 1.0

    def test_coordinates_clamped_and_floored(self, buffer):
        assert (inspect_pixel(buffer, 99, -5).x, inspect_pixel(buffer, 99, -5).y) == (2, 0)
        info = inspect_pixel(buffer, 1.7, 0.9)
        assert (info.x, info.y) == (1, 0)

    def test_infinite_coordinates_clamped(self, buffer):
        info = inspect_pixel(buffer, float("inf"), float("-inf"))
        assert (info.x, info.y) == (2, 0)

    @pytest.mark.parametrize("x, y, name", [
        (float("nan"), 0, "x"),
        (0, float("nan"), "y"),
    ])
    def test_nan_coordinate_raises(self, buffer, x, y, name):
        with pytest.raises(ValueError, match=f"{name} coordinate"):
            inspect_pixel(buffer, x, y)

    def test_percentages(self, buffer):
        assert inspect_pixel(buffer, 0, 0).percentages == {"r": 100, "g": 0, "b": 0, "a": 100}

    def test_to_dict(self, buffer):
        data = inspect_pixel(buffer, 0, 0).to_dict()
        assert data["hsl"] == [0, 100, 50]
        assert data["percentages"]["r"] == 100

    @pytest.mark.parametrize("rgb, expected", [
        ((255, 0, 0), (0, 100, 50)),
        ((0, 255, 0), (120, 100, 50)),
        ((0, 0, 255), (240, 100, 50)),
        ((255, 255, 255), (0, 0, 100)),
        ((0, 0, 0), (0, 0, 0)),
        ((128, 128, 128), (0, 0, 50)),
    ])
    def test_rgb_to_hsl(self, rgb, expected):
        assert rgb_to_hsl(*rgb) == expected


class TestExport:
    def test_download_filename(self):
        name = download_filename(datetime(2024, 5, 1, 13, 45, 9))
        assert name == "smoothed-image-2024-05-01T13-45-09.png"

    def test_download_filename_defaults_to_now(self):
        assert download_filename().startswith("smoothed-image-")

    def test_kernel_size_options(self):
        assert [o.value for o in KERNEL_SIZE_OPTIONS] == [3, 5, 7, 9]
        assert KERNEL_SIZE_OPTIONS[0].label == "3×3 (Subtle)"
        assert KERNEL_SIZE_OPTIONS[-1].label == "9×9 (Extreme)"
