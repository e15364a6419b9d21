"""
Hand-written stand-ins for the Playwright objects the harness touches.

Only the attributes and methods the harness calls are implemented.
"""

import time
from typing import Callable, Dict, List, Optional, Tuple

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError


class FakeDialog:
    def __init__(self, message: str = "", type: str = "alert"):
        self.message = message
        self.type = type
        self.accepted = False
        self.dismissed = False
        self.prompt_text: Optional[str] = None

    def accept(self, prompt_text: Optional[str] = None) -> None:
        self.accepted = True
        self.prompt_text = prompt_text

    def dismiss(self) -> None:
        self.dismissed = True


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, index: int = 0):
        self.page = page
        self.selector = selector
        self.index = index

    def count(self) -> int:
        return self.page.elements.get(self.selector, 0)

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, 0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, index)

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self.page, f"{self.selector} >> {selector}")

    def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.page.waited_for.append((self.selector, state))
        if self.count() <= self.index:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")

    def click(self, timeout: Optional[float] = None, force: bool = False) -> None:
        self.page.actions.append(("click", self.selector, self.index))

    def check(self, timeout: Optional[float] = None) -> None:
        self.page.actions.append(("check", self.selector, self.index))

    def clear(self, timeout: Optional[float] = None) -> None:
        self.page.actions.append(("clear", self.selector, self.index))

    def fill(self, value: str, timeout: Optional[float] = None) -> None:
        self.page.actions.append(("fill", self.selector, value))

    def evaluate(self, script: str):
        self.page.evaluated.append((self.selector, self.index, script))
        handler = self.page.click_handlers.get(self.selector)
        if handler is not None:
            handler()


class FakePage:
    """
    Page with a poll counter instead of an event loop.

    ``wait_for_timeout`` really sleeps, counts the poll, and raises any dialog
    scheduled for that poll.
    """

    def __init__(self, url: str = "about:blank"):
        self.url = url
        self.elements: Dict[str, int] = {}
        self.click_handlers: Dict[str, Callable[[], None]] = {}
        self.listeners: Dict[str, List[Callable]] = {}
        self.evaluated: List[Tuple[str, int, str]] = []
        self.waited_for: List[Tuple[str, str]] = []
        self.actions: List[Tuple[str, str, object]] = []
        self.goto_calls: List[dict] = []
        self.screenshot_calls: List[dict] = []
        self.polls = 0
        self.waits: List[float] = []
        self._scheduled: List[Tuple[int, FakeDialog]] = []

    def on(self, event: str, handler: Callable) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Callable) -> None:
        self.listeners.get(event, []).remove(handler)

    def emit_dialog(self, dialog: FakeDialog) -> None:
        for handler in list(self.listeners.get("dialog", [])):
            handler(dialog)

    def schedule_dialog(self, dialog: FakeDialog, after_polls: int) -> None:
        self._scheduled.append((after_polls, dialog))

    def wait_for_timeout(self, timeout: float) -> None:
        self.waits.append(timeout)
        time.sleep(timeout / 1000)
        self.polls += 1
        due = [d for n, d in self._scheduled if n <= self.polls]
        self._scheduled = [(n, d) for n, d in self._scheduled if n > self.polls]
        for dialog in due:
            self.emit_dialog(dialog)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def goto(self, url: str, wait_until: Optional[str] = None) -> None:
        self.goto_calls.append({"url": url, "wait_until": wait_until})
        self.url = url

    def screenshot(self, **kwargs) -> bytes:
        self.screenshot_calls.append(kwargs)
        return b"\x89PNG"


class FakeContext:
    def __init__(self, pages: Optional[List[FakePage]] = None, close_error: Optional[Exception] = None):
        self.pages = pages if pages is not None else [FakePage()]
        self.close_error = close_error
        self.close_calls = 0
        self.default_timeout: Optional[float] = None
        self.default_navigation_timeout: Optional[float] = None
        self.new_page_calls = 0

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.default_navigation_timeout = timeout

    def new_page(self) -> FakePage:
        self.new_page_calls += 1
        page = FakePage()
        self.pages.append(page)
        return page

    def close(self) -> None:
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class FakeBrowserType:
    def __init__(self, context: FakeContext, launch_error: Optional[Exception] = None):
        self.context = context
        self.launch_error = launch_error
        self.launch_calls: List[Tuple[str, dict]] = []

    def launch_persistent_context(self, user_data_dir: str, **kwargs) -> FakeContext:
        self.launch_calls.append((user_data_dir, kwargs))
        if self.launch_error is not None:
            raise self.launch_error
        return self.context


class FakePlaywright:
    def __init__(self, chromium: FakeBrowserType, stop_error: Optional[Exception] = None):
        self.chromium = chromium
        self.stop_error = stop_error
        self.stop_calls = 0

    def stop(self) -> None:
        self.stop_calls += 1
        if self.stop_error is not None:
            raise self.stop_error


class FakePlaywrightFactory:
    """Mimics ``sync_playwright``: calling it returns an object with ``start()``."""

    def __init__(self, playwright: FakePlaywright):
        self.playwright = playwright
        self.start_calls = 0

    def __call__(self) -> "FakePlaywrightFactory":
        return self

    def start(self) -> FakePlaywright:
        self.start_calls += 1
        return self.playwright
