"""
Command-line parsing and validation for page captures.

The parser is a plain scan over the argument list rather than argparse:
unknown flags are ignored and a value flag with nothing after it keeps its
default, which argparse would reject.
"""

import math
import os
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from .errors import ValidationError

FORMATS = ("png", "pdf")
MIN_VIEWPORT = 320

# Schemes that only make sense with a host component.
NETWORK_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

OUTPUT_DIR_ENV = "CAPTURE_PAGE_OUTPUT_DIR"

USAGE = """Usage:
  capture-page --url <https://example.com> [--format png|pdf] [--output <path>]

Options:
  --url              URL to capture (required)
  --format           png (default) or pdf
  --output           Output file path
  --delay            Seconds to wait after load (default: 2)
  --timeout          Navigation timeout in seconds (default: 60)
  --width            Viewport width for capture (default: 1440)
  --height           Viewport height for capture (default: 2200)
  --no-auto-scroll   Disable auto-scroll before capture
  --wait-for-target  Seconds to wait for the URL to respond before launching
                     the browser (default: 0, disabled)
  --verbose, -v      Log progress to stderr
  --help, -h         Show help
"""

# flag -> (attribute, converter)
_STRING_FLAGS = {
    "--url": ("url", str),
    "--format": ("format", str.lower),
    "--output": ("output", str),
}
_NUMBER_FLAGS = {
    "--delay": "delay",
    "--timeout": "timeout",
    "--width": "width",
    "--height": "height",
    "--wait-for-target": "wait_for_target",
}


@dataclass
class ParsedArgs:
    """Raw values read from the command line, defaults pre-filled."""

    url: str = ""
    format: str = "png"
    output: str = ""
    delay: float = 2
    timeout: float = 60
    width: float = 1440
    height: float = 2200
    auto_scroll: bool = True
    wait_for_target: float = 0
    verbose: bool = False
    help: bool = False


@dataclass(frozen=True)
class CaptureRequest:
    """A validated capture request."""

    url: str
    format: str = "png"
    output: str | None = None
    delay: float = 2
    timeout: float = 60
    width: int = 1440
    height: int = 2200
    auto_scroll: bool = True
    wait_for_target: float = 0
    verbose: bool = False

    @property
    def viewport(self) -> dict:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class Settings:
    """Settings taken from the environment rather than the command line."""

    output_dir: Path = field(default_factory=lambda: Path.cwd() / "captures")

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        output_dir = environ.get(OUTPUT_DIR_ENV, "").strip()
        if output_dir:
            return cls(output_dir=Path(output_dir).expanduser())
        return cls()


def _to_number(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return math.nan


def parse_args(argv: list[str]) -> ParsedArgs:
    """Scan ``argv`` (without the program name) into a ParsedArgs draft."""
    parsed = ParsedArgs()
    i = 0
    while i < len(argv):
        key = argv[i]
        value = argv[i + 1] if i + 1 < len(argv) else ""

        if key in ("--help", "-h"):
            parsed.help = True
        elif key == "--no-auto-scroll":
            parsed.auto_scroll = False
        elif key in ("--verbose", "-v"):
            parsed.verbose = True
        elif key in _STRING_FLAGS and value:
            attr, convert = _STRING_FLAGS[key]
            setattr(parsed, attr, convert(value))
            i += 1
        elif key in _NUMBER_FLAGS and value:
            setattr(parsed, _NUMBER_FLAGS[key], _to_number(value))
            i += 1
        i += 1

    return parsed


def is_valid_url(url: str) -> bool:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, ValueError):
        return False
    if not parsed.scheme:
        return False
    if parsed.scheme in NETWORK_SCHEMES and not parsed.host:
        return False
    return True


def validate(args: ParsedArgs) -> CaptureRequest:
    """Check a draft against the capture bounds and freeze it.

    Raises:
        ValidationError: on the first rule the draft breaks.
    """
    if not args.url:
        raise ValidationError("Missing required argument: --url")

    if not is_valid_url(args.url):
        raise ValidationError(f"Invalid URL: {args.url}")

    if args.format not in FORMATS:
        raise ValidationError(f"--format must be one of: {', '.join(FORMATS)}")

    if not math.isfinite(args.delay) or args.delay < 0:
        raise ValidationError("--delay must be a non-negative number")

    if not math.isfinite(args.timeout) or args.timeout <= 0:
        raise ValidationError("--timeout must be a positive number")

    if not math.isfinite(args.width) or args.width < MIN_VIEWPORT:
        raise ValidationError(f"--width must be at least {MIN_VIEWPORT}")

    if not math.isfinite(args.height) or args.height < MIN_VIEWPORT:
        raise ValidationError(f"--height must be at least {MIN_VIEWPORT}")

    if not math.isfinite(args.wait_for_target) or args.wait_for_target < 0:
        raise ValidationError("--wait-for-target must be a non-negative number")

    return CaptureRequest(
        url=args.url,
        format=args.format,
        output=args.output or None,
        delay=args.delay,
        timeout=args.timeout,
        width=math.floor(args.width),
        height=math.floor(args.height),
        auto_scroll=args.auto_scroll,
        wait_for_target=args.wait_for_target,
        verbose=args.verbose,
    )
