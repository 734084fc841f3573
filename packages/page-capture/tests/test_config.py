import math
from pathlib import Path

import pytest

from page_capture.config import (
    CaptureRequest,
    ParsedArgs,
    Settings,
    is_valid_url,
    parse_args,
    validate,
)
from page_capture.errors import ValidationError


def request_for(*argv):
    return validate(parse_args(["--url", "https://example.com", *argv]))


def test_defaults():
    request = request_for()
    assert request == CaptureRequest(url="https://example.com")
    assert request.format == "png"
    assert request.output is None
    assert request.delay == 2
    assert request.timeout == 60
    assert request.viewport == {"width": 1440, "height": 2200}
    assert request.auto_scroll is True
    assert request.wait_for_target == 0


def test_all_flags():
    args = parse_args([
        "--url", "https://example.com/a",
        "--format", "PDF",
        "--output", "out/page.pdf",
        "--delay", "0.5",
        "--timeout", "10",
        "--width", "800",
        "--height", "600",
        "--no-auto-scroll",
        "--wait-for-target", "3",
        "--verbose",
    ])
    request = validate(args)
    assert request.format == "pdf"
    assert request.output == "out/page.pdf"
    assert request.delay == 0.5
    assert request.timeout == 10
    assert (request.width, request.height) == (800, 600)
    assert request.auto_scroll is False
    assert request.wait_for_target == 3
    assert request.verbose is True


def test_parsing_is_idempotent():
    argv = ["--url", "https://example.com", "--format", "pdf", "--delay", "1"]
    assert parse_args(argv) == parse_args(argv)
    assert validate(parse_args(argv)) == validate(parse_args(argv))


def test_help_flags():
    assert parse_args(["--help"]).help
    assert parse_args(["-h"]).help
    assert not parse_args(["--url", "https://example.com"]).help


def test_unknown_flags_are_ignored():
    args = parse_args(["--bogus", "--url", "https://example.com", "--quality", "80"])
    assert args.url == "https://example.com"
    assert args == ParsedArgs(url="https://example.com")


def test_value_flag_without_value_keeps_default():
    args = parse_args(["--url", "https://example.com", "--delay"])
    assert args.delay == 2
    args = parse_args(["--url", "https://example.com", "--format", ""])
    assert args.format == "png"


def test_non_numeric_value_becomes_nan():
    assert math.isnan(parse_args(["--width", "wide"]).width)


def test_missing_url():
    with pytest.raises(ValidationError, match="Missing required argument: --url"):
        validate(parse_args([]))


@pytest.mark.parametrize("url", ["not-a-url", "https://", "http:///path", "//example.com"])
def test_invalid_url(url):
    with pytest.raises(ValidationError, match="Invalid URL"):
        validate(parse_args(["--url", url]))


@pytest.mark.parametrize(
    "url",
    ["https://example.com", "http://localhost:5173/app?x=1", "file:///tmp/page.html", "about:blank"],
)
def test_valid_url(url):
    assert is_valid_url(url)


def test_unsupported_format():
    with pytest.raises(ValidationError, match="--format must be one of: png, pdf"):
        request_for("--format", "gif")


@pytest.mark.parametrize(
    "argv, message",
    [
        (["--delay", "-1"], "--delay must be a non-negative number"),
        (["--delay", "soon"], "--delay must be a non-negative number"),
        (["--timeout", "0"], "--timeout must be a positive number"),
        (["--timeout", "inf"], "--timeout must be a positive number"),
        (["--width", "319"], "--width must be at least 320"),
        (["--height", "319"], "--height must be at least 320"),
        (["--height", "nan"], "--height must be at least 320"),
        (["--wait-for-target", "-5"], "--wait-for-target must be a non-negative number"),
    ],
)
def test_bounds_rejected(argv, message):
    with pytest.raises(ValidationError) as excinfo:
        request_for(*argv)
    assert str(excinfo.value) == message


def test_bounds_accepted():
    request = request_for("--width", "320", "--height", "320", "--delay", "0")
    assert (request.width, request.height) == (320, 320)
    assert request.delay == 0


def test_fractional_viewport_is_floored():
    request = request_for("--width", "1024.7")
    assert request.width == 1024


def test_url_checked_before_format():
    with pytest.raises(ValidationError, match="Invalid URL"):
        validate(parse_args(["--url", "nope", "--format", "gif"]))


def test_settings_from_env(tmp_path):
    settings = Settings.from_env({"CAPTURE_PAGE_OUTPUT_DIR": str(tmp_path)})
    assert settings.output_dir == tmp_path


def test_settings_default_dir(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    settings = Settings.from_env({"CAPTURE_PAGE_OUTPUT_DIR": "  "})
    assert settings.output_dir == Path.cwd() / "captures"
