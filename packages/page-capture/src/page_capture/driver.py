"""
Drive a single page capture in a launched browser.

Steps: open a context at the requested viewport, navigate and wait for the
network to go idle, optionally scroll to the bottom and back to trigger lazy
loading, wait the post-load delay, then write a full-page PNG or a PDF. The
browser is closed on every path out of ``capture_page``.
"""

import math
from pathlib import Path
from typing import Callable

from playwright.async_api import Browser, Error as PlaywrightError, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config import CaptureRequest
from .errors import ExportError, NavigationError
from .log import quiet

SCROLL_MIN_STEP = 400
SCROLL_STEP_RATIO = 0.8
SCROLL_INTERVAL_MS = 120
SCROLL_SETTLE_MS = 400
PDF_MARGIN = "0.4in"

# Injected into the page - runs in browser context. Resolves once the
# accumulated scroll distance covers the page height measured at the start.
AUTO_SCROLL_SCRIPT = """
([stepPx, intervalMs]) => new Promise((resolve) => {
  let total = 0;
  const max = Math.max(document.body.scrollHeight, document.documentElement.scrollHeight);
  const timer = setInterval(() => {
    window.scrollBy(0, stepPx);
    total += stepPx;
    if (total >= max) {
      clearInterval(timer);
      resolve();
    }
  }, intervalMs);
})
"""

SCROLL_TO_TOP_SCRIPT = "() => window.scrollTo(0, 0)"


def scroll_step(viewport_height: int) -> int:
    return max(SCROLL_MIN_STEP, math.floor(viewport_height * SCROLL_STEP_RATIO))


async def navigate(page: Page, url: str, timeout: float) -> None:
    try:
        await page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
    except PlaywrightTimeoutError as e:
        raise NavigationError(f"Navigation to {url} timed out after {timeout:g}s") from e
    except PlaywrightError as e:
        raise NavigationError(f"Navigation to {url} failed: {e.message}") from e


async def auto_scroll(page: Page, viewport_height: int) -> None:
    """Scroll to the bottom in viewport-sized steps, then back to the top.

    Best effort: content that keeps growing after the first measurement is not
    chased.
    """
    step = scroll_step(viewport_height)
    await page.evaluate(AUTO_SCROLL_SCRIPT, [step, SCROLL_INTERVAL_MS])
    await page.wait_for_timeout(SCROLL_SETTLE_MS)
    await page.evaluate(SCROLL_TO_TOP_SCRIPT)


async def export(page: Page, format: str, output_path: Path) -> None:
    try:
        if format == "png":
            await page.screenshot(path=output_path, full_page=True, type="png")
        else:
            await page.emulate_media(media="screen")
            await page.pdf(
                path=output_path,
                print_background=True,
                prefer_css_page_size=True,
                margin={
                    "top": PDF_MARGIN,
                    "right": PDF_MARGIN,
                    "bottom": PDF_MARGIN,
                    "left": PDF_MARGIN,
                },
            )
    except PlaywrightError as e:
        raise ExportError(f"Failed to write {format} to {output_path}: {e.message}") from e
    except OSError as e:
        raise ExportError(f"Failed to write {format} to {output_path}: {e}") from e


async def capture_page(
    browser: Browser,
    request: CaptureRequest,
    output_path: Path,
    log: Callable[[str], None] = quiet,
) -> Path:
    """Capture ``request.url`` into ``output_path`` and close ``browser``.

    Raises:
        NavigationError: the page did not reach network idle in time.
        ExportError: the screenshot or PDF could not be written.
    """
    try:
        context = await browser.new_context(
            viewport=request.viewport,
            java_script_enabled=True,
        )
        page = await context.new_page()

        log(f"Navigating to {request.url}")
        await navigate(page, request.url, request.timeout)

        if request.auto_scroll:
            log("Scrolling to trigger lazy-loaded content")
            await auto_scroll(page, request.height)

        if request.delay > 0:
            log(f"Waiting {request.delay:g}s")
            await page.wait_for_timeout(request.delay * 1000)

        log(f"Exporting {request.format} to {output_path}")
        await export(page, request.format, output_path)
        return output_path
    finally:
        log("Closing browser")
        await browser.close()
