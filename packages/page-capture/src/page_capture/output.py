"""
Where captures are written.

Default file names look like ``example.com-2026-10-19T04-01-02-123Z.png``:
the URL host, a UTC timestamp with ``:`` and ``.`` swapped for ``-``, and the
format extension.
"""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import httpx

from .config import CaptureRequest, Settings
from .errors import ExportError

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


def safe_name(value: str) -> str:
    """Replace every character outside [A-Za-z0-9._-] with an underscore."""
    return _UNSAFE_CHARS.sub("_", value)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds, safe for file names."""
    iso = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    iso = iso.replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")


def default_output_path(
    url: str,
    format: str,
    output_dir: Path,
    now: Callable[[], datetime] = utc_now,
) -> Path:
    host = httpx.URL(url).raw_host.decode("ascii")
    if ":" in host:
        # IPv6 literal, keep the brackets the URL was written with
        host = f"[{host}]"
    file_name = f"{safe_name(host or 'page')}-{timestamp(now())}.{format}"
    return output_dir / file_name


def resolve_output_path(
    request: CaptureRequest,
    settings: Settings | None = None,
    now: Callable[[], datetime] = utc_now,
) -> Path:
    """Absolute path the capture will be written to."""
    if request.output:
        return Path(request.output).expanduser().resolve()

    settings = settings or Settings.from_env()
    path = default_output_path(request.url, request.format, settings.output_dir, now=now)
    return path.resolve()


def ensure_parent_dir(path: Path) -> None:
    directory = path.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportError(f"Unable to create output directory {directory}: {e}") from e
