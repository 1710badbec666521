"""Errors raised while turning an image URL into colors.

Each error knows the HTTP status and the message shown to the user. The
message is fixed per error type so nothing from the underlying exception
reaches the response body.
"""
from typing import Optional


class ColorExtractionError(Exception):
    """Base error; also the generic 500 for unexpected failures"""
    status_code = 500
    message = "Failed to process image from URL."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail


class ValidationError(ColorExtractionError):
    """The request is missing the image URL"""
    status_code = 400
    message = "Image URL is required."


class UnsupportedFormatError(ColorExtractionError):
    """The bytes could not be decoded as a supported image"""
    status_code = 500
    message = "Unsupported image format. Please try a different image (e.g., JPEG, PNG, GIF)."


class FetchFailureError(ColorExtractionError):
    """The image could not be retrieved from its URL"""
    status_code = 500
    message = "Could not fetch the image from the provided URL. Please check the link and try again."


class FetchError(FetchFailureError):
    """Remote server answered with a non-2xx status"""

    def __init__(self, remote_status: int, detail: Optional[str] = None):
        super().__init__(detail or f"Remote server responded with HTTP {remote_status}")
        self.remote_status = remote_status


class NetworkError(FetchFailureError):
    """Connection or transport failure before a response arrived"""


class ExtractionEmptyError(ColorExtractionError):
    """The palette held no usable swatch"""
    status_code = 422
    message = "Could not extract any dominant colors from the image."
