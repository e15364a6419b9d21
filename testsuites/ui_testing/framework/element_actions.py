# ================================================================================
# Element Actions Module
# ================================================================================
#
# This module provides the UI element interaction utilities used by the page
# objects, with retry logic, wait mechanisms and Allure integration.
#
# Key Features:
#   - Script-injected click that bypasses native hit-testing
#   - Retry with backoff for native actions on flaky elements
#   - Allure step integration
#
# ================================================================================

import time
from typing import Callable, Union
from functools import wraps

import allure
from loguru import logger
from playwright.sync_api import Page, Locator

from autotest_tools.report_tools.allure_utils import attach_png


# Deferred so that a click raising a blocking native dialog does not block evaluate()
SCRIPT_CLICK = "element => { window.setTimeout(() => element.click(), 0); }"


class ElementNotFoundError(Exception):
    """Raised when a locator matches no element on the current page."""

    def __init__(self, selector: str):
        super().__init__(f"No element matches locator: {selector}")
        self.selector = selector


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        delay_seconds: float = 0.5,
        backoff_multiplier: float = 2.0,
        max_delay_seconds: float = 5.0
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Maximum number of retry attempts
            delay_seconds: Initial delay between retries
            backoff_multiplier: Multiplier for exponential backoff
            max_delay_seconds: Maximum delay between retries
        """
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.backoff_multiplier = backoff_multiplier
        self.max_delay_seconds = max_delay_seconds


def with_retry(config: RetryConfig = None):
    """
    Decorator for adding retry logic to element actions.

    ElementNotFoundError is never retried.

    Args:
        config: RetryConfig object for controlling retry behavior
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None
            delay = config.delay_seconds

            for attempt in range(config.max_attempts):
                try:
                    return func(*args, **kwargs)
                except ElementNotFoundError:
                    raise
                except Exception as e:
                    last_exception = e
                    if attempt < config.max_attempts - 1:
                        logger.warning(
                            f"Attempt {attempt + 1}/{config.max_attempts} failed for "
                            f"{func.__name__}: {str(e)}. Retrying in {delay}s..."
                        )
                        time.sleep(delay)
                        delay = min(
                            delay * config.backoff_multiplier,
                            config.max_delay_seconds
                        )

            logger.error(
                f"All {config.max_attempts} attempts failed for {func.__name__}: "
                f"{str(last_exception)}"
            )
            raise last_exception

        return wrapper
    return decorator


class ElementActions:
    """
    Element interaction methods for a Playwright page.

    Example:
        actions = ElementActions(page)
        actions.click_via_script("xpath=//button[text()='Get password']")
        actions.fill_input("#company", "ACME", description="Company field")
    """

    def __init__(self, page: Page, default_timeout: int = 1000):
        """
        Initialize ElementActions with a Playwright page.

        Args:
            page: Playwright Page object
            default_timeout: Default timeout for operations in milliseconds
        """
        self.page = page
        self.default_timeout = default_timeout

    @allure.step("Click via script: {selector}")
    def click_via_script(self, selector: str) -> None:
        """
        Click an element by invoking its click() from injected script.

        No waiting and no retry: the element must already be in the DOM.

        Args:
            selector: Playwright selector (CSS or xpath=...)

        Raises:
            ElementNotFoundError: If nothing matches the selector
        """
        locator = self.page.locator(selector)
        count = locator.count()

        if count == 0:
            logger.error(f"Script click failed, element not found: {selector}")
            raise ElementNotFoundError(selector)
        if count > 1:
            logger.warning(f"{count} elements match {selector}, clicking the first")

        logger.info(f"Clicking via script: {selector}")
        locator.first.evaluate(SCRIPT_CLICK)

    @allure.step("Click element: {description}")
    @with_retry()
    def click_element(
        self,
        selector: Union[str, Locator],
        description: str = "",
        timeout: int = None,
        force: bool = False
    ) -> None:
        """
        Click on an element with retry logic.

        Args:
            selector: CSS selector or Locator object
            description: Human-readable description for reporting
            timeout: Click timeout in milliseconds
            force: Force click even if element is not actionable
        """
        timeout = timeout or self.default_timeout
        locator = self._get_locator(selector)

        logger.info(f"Clicking element: {description or selector}")

        locator.wait_for(state="visible", timeout=timeout)
        locator.click(timeout=timeout, force=force)

        logger.debug(f"Successfully clicked: {description or selector}")

    @allure.step("Fill input: {description}")
    @with_retry()
    def fill_input(
        self,
        selector: Union[str, Locator],
        value: str,
        description: str = "",
        clear_first: bool = True,
        timeout: int = None
    ) -> None:
        """
        Fill an input field with text.

        Args:
            selector: CSS selector or Locator object
            value: Text to enter
            description: Human-readable description for reporting
            clear_first: Clear existing content before filling
            timeout: Operation timeout in milliseconds
        """
        timeout = timeout or self.default_timeout
        locator = self._get_locator(selector)

        logger.info(f"Filling input: {description or selector} with '{value[:50]}'")

        locator.wait_for(state="visible", timeout=timeout)

        if clear_first:
            locator.clear(timeout=timeout)

        locator.fill(value, timeout=timeout)

    @allure.step("Check checkbox: {description}")
    def check_checkbox(
        self,
        selector: Union[str, Locator],
        description: str = "",
        timeout: int = None
    ) -> None:
        """
        Tick a checkbox once it is enabled and visible.

        Args:
            selector: CSS selector or Locator object
            description: Human-readable description for reporting
            timeout: Operation timeout in milliseconds
        """
        timeout = timeout or self.default_timeout
        locator = self._get_locator(selector)

        logger.info(f"Checking checkbox: {description or selector}")
        locator.check(timeout=timeout)

    @allure.step("Wait for element: {description}")
    def wait_for_element(
        self,
        selector: Union[str, Locator],
        description: str = "",
        state: str = "visible",
        timeout: int = None
    ) -> Locator:
        """
        Wait for an element to reach a specific state.

        Args:
            selector: CSS selector or Locator object
            description: Human-readable description for reporting
            state: Expected state - "visible", "hidden", "attached", "detached"
            timeout: Wait timeout in milliseconds

        Returns:
            The Locator object
        """
        timeout = timeout or self.default_timeout
        locator = self._get_locator(selector)

        logger.info(f"Waiting for {description or selector} to be {state}")

        locator.wait_for(state=state, timeout=timeout)
        return locator

    def count(self, selector: Union[str, Locator]) -> int:
        """Number of elements currently matching, without waiting."""
        return self._get_locator(selector).count()

    def is_visible(
        self,
        selector: Union[str, Locator],
        timeout: int = None
    ) -> bool:
        """
        Check if an element becomes visible within the timeout.

        Returns:
            True if visible, False otherwise
        """
        try:
            self._get_locator(selector).first.wait_for(
                state="visible", timeout=timeout or self.default_timeout
            )
            return True
        except Exception:
            return False

    def take_screenshot(self, name: str, full_page: bool = False, timeout: int = None) -> bytes:
        """
        Take a screenshot of the page and attach it to the report.

        Args:
            name: Attachment name
            full_page: Capture the full scrollable page
            timeout: Capture timeout in milliseconds

        Returns:
            Screenshot as bytes
        """
        screenshot = self.page.screenshot(
            full_page=full_page, timeout=timeout or self.default_timeout
        )
        attach_png(screenshot, name=name)
        return screenshot

    def _get_locator(self, selector: Union[str, Locator]) -> Locator:
        """Convert a selector string to a Locator; locators pass through."""
        if isinstance(selector, str):
            return self.page.locator(selector)
        return selector


__all__ = [
    "ElementActions",
    "ElementNotFoundError",
    "RetryConfig",
    "SCRIPT_CLICK",
    "with_retry",
]
