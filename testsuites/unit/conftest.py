from pathlib import Path
from typing import List

import pytest
from loguru import logger

from testsuites.ui_testing.framework.config import HarnessConfig
from testsuites.ui_testing.framework.driver_provisioner import reset_provisioning
from testsuites.ui_testing.framework.wait_helpers import WaitBudget
from testsuites.unit.fakes import (
    FakeBrowserType,
    FakeContext,
    FakePage,
    FakePlaywright,
    FakePlaywrightFactory,
)


@pytest.fixture
def log_messages() -> List[str]:
    """Collect loguru messages of WARNING and above."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def _reset_provisioning():
    reset_provisioning()
    yield
    reset_provisioning()


@pytest.fixture
def harness_config(tmp_path: Path) -> HarnessConfig:
    return HarnessConfig(
        base_url="http://kiwiduck.test/",
        profile_dir=tmp_path / "profile",
        alert_wait=WaitBudget(timeout=0.5, poll_interval=0.01),
        instant_wait=WaitBudget(timeout=0.02, poll_interval=0.01),
    )


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_context(fake_page: FakePage) -> FakeContext:
    return FakeContext(pages=[fake_page])


@pytest.fixture
def fake_chromium(fake_context: FakeContext) -> FakeBrowserType:
    return FakeBrowserType(fake_context)


@pytest.fixture
def fake_playwright(fake_chromium: FakeBrowserType) -> FakePlaywright:
    return FakePlaywright(fake_chromium)


@pytest.fixture
def playwright_factory(fake_playwright: FakePlaywright) -> FakePlaywrightFactory:
    return FakePlaywrightFactory(fake_playwright)
