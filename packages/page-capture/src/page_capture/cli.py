"""
Capture a web page as a PNG or PDF using Playwright (Edge or Chrome).

Usage:
    capture-page --url https://example.com [--format png|pdf] [--output capture.png]

The written file's absolute path is printed on stdout. Errors and ``--verbose``
progress lines go to stderr, tagged ``[capture-page]``.
"""

import asyncio
import sys
from pathlib import Path

from playwright.async_api import Error as PlaywrightError, async_playwright

from .config import USAGE, CaptureRequest, parse_args, validate
from .driver import capture_page
from .errors import CaptureError
from .launcher import launch_browser
from .log import log, quiet
from .output import ensure_parent_dir, resolve_output_path
from .preflight import can_poll, wait_for_target


async def capture(request: CaptureRequest, output_path: Path) -> Path:
    """Wait for the target (if asked), launch a browser and capture into ``output_path``."""
    progress = log if request.verbose else quiet

    if request.wait_for_target > 0 and can_poll(request.url):
        await wait_for_target(request.url, request.wait_for_target, log=progress)

    async with async_playwright() as p:
        browser = await launch_browser(p.chromium, log=progress)
        return await capture_page(browser, request, output_path, log=progress)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    if args.help:
        print(USAGE)
        return 0

    if not args.url:
        print(USAGE)

    try:
        request = validate(args)
        output_path = resolve_output_path(request)
        ensure_parent_dir(output_path)

        written = asyncio.run(capture(request, output_path))
    except CaptureError as e:
        log(str(e))
        return 1
    except PlaywrightError as e:
        log(e.message)
        return 1
    except KeyboardInterrupt:
        log("Interrupted")
        return 130

    print(written)
    return 0


def run() -> None:
    sys.exit(main())
