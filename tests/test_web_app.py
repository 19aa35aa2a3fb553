"""Tests for the Flask web app."""

import io

import pytest

from filtering import InvalidBufferError, grayscale, smooth
from imaging import TOO_LARGE, UploadValidation, decode_image
from web.app import create_app
from conftest import png_bytes


@pytest.fixture
def app():
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _upload(data: bytes, filename: str = "in.png", content_type: str = "image/png"):
    return (io.BytesIO(data), filename, content_type)


class TestIndex:
    def test_renders_form(self, client):
        response = client.get("/")
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'action="/api/process"' in html
        assert "3×3 (Subtle)" in html
        assert "10 MB" in html


class TestOptions:
    def test_options(self, client):
        data = client.get("/api/options").get_json()
        assert [o["value"] for o in data["kernel_sizes"]] == [3, 5, 7, 9]
        assert data["default_kernel_size"] == 3
        assert data["max_upload_bytes"] == 10 * 1024 * 1024
        assert data["max_upload_label"] == "10 MB"


class TestProcess:
    def test_defaults(self, client, sample_buffer):
        response = client.post(
            "/api/process",
            data={"image": _upload(png_bytes(sample_buffer))},
            content_type="multipart/form-data",
        )
        assert response.status_code == 200
        assert response.mimetype == "image/png"
        assert decode_image(response.data) == smooth(sample_buffer, 3)

    def test_grayscale_and_kernel(self, client, sample_buffer):
        response = client.post(
            "/api/process",
            data={
                "image": _upload(png_bytes(sample_buffer)),
                "kernel_size": "7",
                "grayscale": "on",
            },
            content_type="multipart/form-data",
        )
        assert response.status_code == 200
        assert decode_image(response.data) == smooth(grayscale(sample_buffer), 7)

    def test_download_headers(self, client, sample_buffer):
        response = client.post(
            "/api/process",
            data={"image": _upload(png_bytes(sample_buffer))},
            content_type="multipart/form-data",
        )
        disposition = response.headers["Content-Disposition"]
        assert disposition.startswith("attachment")
        assert "smoothed-image-" in disposition
        assert response.headers["X-Image-Size"] == "6x4"
        assert float(response.headers["X-Processing-Time-Ms"]) >= 0.0

    def test_disallowed_kernel_size(self, client, sample_buffer):
        response = client.post(
            "/api/process",
            data={"image": _upload(png_bytes(sample_buffer)), "kernel_size": "4"},
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
        assert "kernel_size must be one of" in response.get_json()["error"]

    def test_no_file(self, client):
        response = client.post(
            "/api/process", data={"kernel_size": "3"}, content_type="multipart/form-data",
        )
        assert response.status_code == 400
        assert response.get_json() == {"error": "No file provided"}

    def test_non_image_upload(self, client):
        response = client.post(
            "/api/process",
            data={"image": _upload(b"hello", "notes.txt", "text/plain")},
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
        assert response.get_json()["error"] == "Invalid file type. Please upload an image file."

    def test_undecodable_image(self, client):
        response = client.post(
            "/api/process",
            data={"image": _upload(b"not really a png")},
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
        assert "Failed to load the image" in response.get_json()["error"]

    def test_too_large(self, sample_buffer):
        client = create_app(max_upload_bytes=10).test_client()
        response = client.post(
            "/api/process",
            data={"image": _upload(png_bytes(sample_buffer))},
            content_type="multipart/form-data",
        )
        assert response.status_code == 413
        assert "too large" in response.get_json()["error"]


    def test_status_follows_rejection_reason(self, client, sample_buffer, monkeypatch):
        monkeypatch.setattr(
            "web.app.validate_upload",
            lambda *args, **kwargs: UploadValidation(False, "Over the limit", TOO_LARGE),
        )
        response = client.post(
            "/api/process",
            data={"image": _upload(png_bytes(sample_buffer))},
            content_type="multipart/form-data",
        )
        assert response.status_code == 413
        assert response.get_json() == {"error": "Over the limit"}

    def test_filter_error_is_unprocessable(self, client, sample_buffer, monkeypatch):
        def failing_pipeline(buffer, config):
            raise InvalidBufferError("data length 7 does not match 1x2x4 = 8")

        monkeypatch.setattr("web.app.run_pipeline", failing_pipeline)
        response = client.post(
            "/api/process",
            data={"image": _upload(png_bytes(sample_buffer))},
            content_type="multipart/form-data",
        )
        assert response.status_code == 422
        assert response.get_json() == {"error": "data length 7 does not match 1x2x4 = 8"}


class TestInspect:
    def test_pixel_values(self, client, sample_buffer):
        response = client.post(
            "/api/inspect",
            data={"image": _upload(png_bytes(sample_buffer)), "x": "2.6", "y": "1"},
            content_type="multipart/form-data",
        )
        assert response.status_code == 200
        data = response.get_json()
        r, g, b, a = sample_buffer.pixel(2, 1)
        assert (data["x"], data["y"]) == (2, 1)
        assert (data["r"], data["g"], data["b"], data["a"]) == (r, g, b, a)
        assert data["hex"] == f"#{r:02x}{g:02x}{b:02x}"
        assert (data["width"], data["height"]) == (6, 4)

    @pytest.mark.parametrize("x, y", [("nan", "0"), ("1", "NaN"), ("inf", "0")])
    def test_non_finite_coordinates(self, client, sample_buffer, x, y):
        response = client.post(
            "/api/inspect",
            data={"image": _upload(png_bytes(sample_buffer)), "x": x, "y": y},
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_missing_coordinates(self, client, sample_buffer):
        response = client.post(
            "/api/inspect",
            data={"image": _upload(png_bytes(sample_buffer))},
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
