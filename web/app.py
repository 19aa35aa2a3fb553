"""
Flask application for the image smoothing web interface.

Routes:
- /              - Upload form
- /api/options   - Kernel size options and upload limit (JSON)
- /api/process   - Filter an uploaded image, respond with a PNG download
- /api/inspect   - Channel values of one pixel of an uploaded image (JSON)
"""

import argparse
import io
import logging

from flask import Flask, current_app, jsonify, render_template_string, request, send_file
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import RequestEntityTooLarge

from config import DEFAULT_KERNEL_SIZE, MAX_UPLOAD_BYTES, WEB_HOST, WEB_PORT
from filtering import FilterConfig, FilterError, PixelBuffer, run_pipeline
from imaging import (
    KERNEL_SIZE_OPTIONS,
    TOO_LARGE,
    ImageDecodeError,
    decode_image,
    download_filename,
    encode_png,
    format_file_size,
    inspect_pixel,
    validate_upload,
)
from logging_utils import configure_logging, add_logging_args
from .schemas import (
    ErrorResponse,
    InspectForm,
    KernelSizeOut,
    OptionsResponse,
    PixelInfoResponse,
    ProcessForm,
)
from .templates import INDEX_TEMPLATE

logger = logging.getLogger(__name__)

# Headroom for multipart boundaries and form fields on top of the file itself
_FORM_OVERHEAD_BYTES = 64 * 1024


class UploadError(Exception):
    """Upload rejected before it reached the filter; message is user-facing."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error(message: str, status_code: int):
    return jsonify(ErrorResponse(error=message).model_dump()), status_code


def _parse_form(model: type[BaseModel]):
    fields = {k: v for k, v in request.form.items() if v != ""}
    try:
        return model.model_validate(fields)
    except ValidationError as e:
        raise UploadError(str(e))


def _read_upload() -> PixelBuffer:
    """Validate and decode the "image" file of the current request."""
    upload = request.files.get("image")
    if upload is None or not upload.filename:
        raise UploadError("No file provided")

    data = upload.read()
    validation = validate_upload(
        upload.filename,
        upload.mimetype,
        len(data),
        max_size=current_app.config["MAX_UPLOAD_BYTES"],
    )
    if not validation:
        status = 413 if validation.reason == TOO_LARGE else 400
        raise UploadError(validation.message, status)

    try:
        return decode_image(data)
    except ImageDecodeError as e:
        logger.warning("Could not decode upload %s: %s", upload.filename, e)
        raise UploadError("Failed to load the image. Please try with a different image.")


def options_response(max_upload_bytes: int) -> OptionsResponse:
    return OptionsResponse(
        kernel_sizes=[
            KernelSizeOut(value=o.value, label=o.label, description=o.description)
            for o in KERNEL_SIZE_OPTIONS
        ],
        default_kernel_size=DEFAULT_KERNEL_SIZE,
        max_upload_bytes=max_upload_bytes,
        max_upload_label=format_file_size(max_upload_bytes),
    )


def create_app(max_upload_bytes: int = MAX_UPLOAD_BYTES) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config["MAX_UPLOAD_BYTES"] = max_upload_bytes
    app.config["MAX_CONTENT_LENGTH"] = max_upload_bytes + _FORM_OVERHEAD_BYTES

    @app.errorhandler(UploadError)
    def handle_upload_error(e: UploadError):
        return _error(e.message, e.status_code)

    @app.errorhandler(FilterError)
    def handle_filter_error(e: FilterError):
        logger.error("Processing error: %s", e)
        return _error(str(e), 422)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        max_size_mb = round(app.config["MAX_UPLOAD_BYTES"] / (1024 * 1024))
        return _error(f"File is too large. Maximum size is {max_size_mb}MB.", 413)

    @app.route('/')
    def index():
        """Upload form."""
        options = options_response(app.config["MAX_UPLOAD_BYTES"])
        return render_template_string(
            INDEX_TEMPLATE,
            options=options.kernel_sizes,
            default_kernel_size=options.default_kernel_size,
            max_upload_label=options.max_upload_label,
        )

    @app.route('/api/options')
    def api_options():
        return jsonify(options_response(app.config["MAX_UPLOAD_BYTES"]).model_dump())

    @app.route('/api/process', methods=['POST'])
    def api_process():
        """Filter the uploaded image and return it as a PNG download."""
        form = _parse_form(ProcessForm)
        buffer = _read_upload()
        config = FilterConfig(grayscale=form.grayscale, kernel_size=form.kernel_size)
        result = run_pipeline(buffer, config)

        response = send_file(
            io.BytesIO(encode_png(result.processed)),
            mimetype="image/png",
            as_attachment=True,
            download_name=download_filename(),
        )
        response.headers["X-Processing-Time-Ms"] = f"{result.elapsed_ms:.2f}"
        response.headers["X-Image-Size"] = f"{result.processed.width}x{result.processed.height}"
        return response

    @app.route('/api/inspect', methods=['POST'])
    def api_inspect():
        """Channel values of the pixel at (x, y) of the uploaded image."""
        form = _parse_form(InspectForm)
        buffer = _read_upload()
        info = inspect_pixel(buffer, form.x, form.y)
        body = PixelInfoResponse(**info.to_dict(), width=buffer.width, height=buffer.height)
        return jsonify(body.model_dump())

    return app


def run_server(host: str = WEB_HOST, port: int = WEB_PORT) -> None:
    """Create the app and serve it until interrupted."""
    app = create_app()
    logger.info("Starting Image Smoothing Filter web app...")
    logger.info("Open http://%s:%s in your browser", host, port)
    logger.info("Press Ctrl+C to stop")
    app.run(host=host, port=port, debug=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"Launch the image smoothing web app (port {WEB_PORT})."
    )
    parser.add_argument("--host", default=WEB_HOST, help=f"Bind address (default: {WEB_HOST})")
    parser.add_argument("--port", type=int, default=WEB_PORT, help=f"Port (default: {WEB_PORT})")
    add_logging_args(parser)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the web server."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)
    run_server(host=args.host, port=args.port)
    return 0


if __name__ == '__main__':
    main()
