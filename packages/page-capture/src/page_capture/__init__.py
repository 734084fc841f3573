"""
Capture a rendered web page as a PNG image or PDF document.

The capture runs a headless Chromium browser (Edge or Chrome) through
Playwright. See ``page_capture.cli`` for the command-line entry point.
"""

from .config import CaptureRequest, ParsedArgs, parse_args, validate
from .driver import capture_page
from .errors import CaptureError, ExportError, LaunchError, NavigationError, ValidationError

__all__ = [
    "CaptureError",
    "CaptureRequest",
    "ExportError",
    "LaunchError",
    "NavigationError",
    "ParsedArgs",
    "ValidationError",
    "capture_page",
    "parse_args",
    "validate",
]
