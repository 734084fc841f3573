"""Start a headless Chromium browser from an installed Edge or Chrome."""

from dataclasses import dataclass
from typing import Callable

from playwright.async_api import Browser, BrowserType, Error as PlaywrightError

from .errors import LaunchError
from .log import quiet


@dataclass(frozen=True)
class LaunchAttempt:
    label: str
    channel: str


# Tried in order, once each.
BROWSER_CHANNELS = (
    LaunchAttempt(label="Microsoft Edge", channel="msedge"),
    LaunchAttempt(label="Google Chrome", channel="chrome"),
)


async def launch_browser(
    chromium: BrowserType,
    attempts: tuple[LaunchAttempt, ...] = BROWSER_CHANNELS,
    log: Callable[[str], None] = quiet,
) -> Browser:
    """Return the first browser that launches.

    Raises:
        LaunchError: when every channel fails, listing each failure on its own line.
    """
    failures = []

    for attempt in attempts:
        log(f"Launching {attempt.label} ({attempt.channel})")
        try:
            return await chromium.launch(headless=True, channel=attempt.channel)
        except PlaywrightError as e:
            log(f"{attempt.label} failed to launch")
            failures.append(f"{attempt.label}: {e.message}")

    raise LaunchError(
        "Unable to launch a Chromium browser. Ensure Edge or Chrome is installed.\n"
        + "\n".join(failures)
    )
