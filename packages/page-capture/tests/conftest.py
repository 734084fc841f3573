"""Async stand-ins for the Playwright objects the capture code touches."""

from pathlib import Path

import pytest


class FakePage:
    def __init__(self, goto_error=None, export_error=None):
        self.calls = []
        self.goto_error = goto_error
        self.export_error = export_error

    async def goto(self, url, **kwargs):
        self.calls.append(("goto", url, kwargs))
        if self.goto_error:
            raise self.goto_error

    async def evaluate(self, script, arg=None):
        self.calls.append(("evaluate", script, arg))

    async def wait_for_timeout(self, timeout):
        self.calls.append(("wait_for_timeout", timeout))

    async def emulate_media(self, **kwargs):
        self.calls.append(("emulate_media", kwargs))

    async def screenshot(self, **kwargs):
        self.calls.append(("screenshot", kwargs))
        if self.export_error:
            raise self.export_error
        Path(kwargs["path"]).write_bytes(b"\x89PNG\r\n\x1a\n")

    async def pdf(self, **kwargs):
        self.calls.append(("pdf", kwargs))
        if self.export_error:
            raise self.export_error
        Path(kwargs["path"]).write_bytes(b"%PDF-1.4\n")

    def names(self):
        return [call[0] for call in self.calls]


class FakeContext:
    def __init__(self, page):
        self.page = page

    async def new_page(self):
        return self.page


class FakeBrowser:
    def __init__(self, page=None, context_error=None):
        self.page = page or FakePage()
        self.context_error = context_error
        self.context_kwargs = None
        self.closed = False

    async def new_context(self, **kwargs):
        self.context_kwargs = kwargs
        if self.context_error:
            raise self.context_error
        return FakeContext(self.page)

    async def close(self):
        self.closed = True


class FakeChromium:
    """Launches succeed for the channels in ``browsers``; others raise ``errors[channel]``."""

    def __init__(self, browsers=None, errors=None):
        self.browsers = browsers or {}
        self.errors = errors or {}
        self.launches = []

    async def launch(self, **kwargs):
        self.launches.append(kwargs)
        channel = kwargs["channel"]
        if channel in self.browsers:
            return self.browsers[channel]
        raise self.errors[channel]


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def fake_browser(fake_page):
    return FakeBrowser(fake_page)
