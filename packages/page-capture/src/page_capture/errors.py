"""Errors raised while capturing a page. Each one ends the invocation."""


class CaptureError(Exception):
    """Base class for every failure the CLI reports as a one-line message."""


class ValidationError(CaptureError):
    """Bad or missing command-line input, raised before any browser is launched."""


class LaunchError(CaptureError):
    """No browser channel could be started."""


class NavigationError(CaptureError):
    """The page did not load (or the target never came up)."""


class ExportError(CaptureError):
    """The image or document could not be written."""
