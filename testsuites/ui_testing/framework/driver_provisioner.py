"""
================================================================================
Browser Provisioning
================================================================================

Resolves the configured browser version pin to a Playwright launch target and
installs the matching browser build before any session is launched.

Resolution rules:
    - No pin: bundled Playwright Chromium ("playwright install chromium")
    - Playwright channel name (chrome, msedge, ...): install and launch that channel
    - Path to an existing executable: launch it directly, nothing installed

Provisioning runs once per test run and the result is shared by every session.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from loguru import logger


# Channels accepted by BrowserType.launch(channel=...)
SUPPORTED_CHANNELS = frozenset({
    "chrome",
    "chrome-beta",
    "chrome-dev",
    "chrome-canary",
    "msedge",
    "msedge-beta",
    "msedge-dev",
    "msedge-canary",
})

INSTALL_TIMEOUT_SECONDS = 300

# Resolved targets keyed by version pin (None = unpinned)
_provisioned: Dict[Optional[str], "LaunchTarget"] = {}


class ProvisioningError(Exception):
    """Raised when the browser for the configured version cannot be provided."""
    pass


@dataclass(frozen=True)
class LaunchTarget:
    """
    Browser selection shared by every session in a run.

    Attributes:
        browser_name: Playwright browser type
        channel: Branded browser channel, if pinned
        executable_path: Explicit browser executable, if pinned
    """
    browser_name: str = "chromium"
    channel: Optional[str] = None
    executable_path: Optional[str] = None

    @property
    def install_name(self) -> Optional[str]:
        """Name passed to ``playwright install``; None when nothing is installed."""
        if self.executable_path:
            return None
        return self.channel or self.browser_name

    def launch_options(self) -> Dict[str, Any]:
        """Launch keyword arguments selecting this browser."""
        options: Dict[str, Any] = {}
        if self.channel:
            options["channel"] = self.channel
        if self.executable_path:
            options["executable_path"] = self.executable_path
        return options

    def describe(self) -> str:
        return self.executable_path or self.channel or f"bundled {self.browser_name}"


def resolve_launch_target(version: Optional[str]) -> LaunchTarget:
    """
    Map a version pin to a LaunchTarget without touching the network.

    Args:
        version: Configured ``browser.version`` (None or empty = unpinned)

    Raises:
        ProvisioningError: If the pin is neither a channel nor an existing path
    """
    pin = (version or "").strip()
    if not pin:
        return LaunchTarget()

    if pin.lower() in SUPPORTED_CHANNELS:
        return LaunchTarget(channel=pin.lower())

    if Path(pin).expanduser().is_file():
        return LaunchTarget(executable_path=str(Path(pin).expanduser()))

    raise ProvisioningError(
        f"Unsupported browser.version '{pin}'. Expected empty, one of "
        f"{sorted(SUPPORTED_CHANNELS)}, or a path to a browser executable."
    )


def install_browser(
    name: str,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> None:
    """
    Run ``python -m playwright install <name>``.

    Raises:
        ProvisioningError: If the installer fails or times out
    """
    cmd = [sys.executable, "-m", "playwright", "install", name]
    logger.info(f"Installing browser: {' '.join(cmd)}")

    try:
        result = runner(
            cmd,
            capture_output=True,
            text=True,
            timeout=INSTALL_TIMEOUT_SECONDS,
        )
    except subprocess.TimeoutExpired as e:
        raise ProvisioningError(
            f"playwright install {name} timed out after {INSTALL_TIMEOUT_SECONDS}s"
        ) from e
    except OSError as e:
        raise ProvisioningError(f"Unable to run playwright installer: {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "")[:500]
        raise ProvisioningError(
            f"playwright install {name} failed (rc={result.returncode}): {stderr}"
        )

    logger.info(f"Browser ready: {name}")


def provision_browser(
    version: Optional[str],
    auto_install: bool = True,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> LaunchTarget:
    """
    Resolve and install the browser for ``version``, once per run.

    Args:
        version: Configured version pin
        auto_install: Run the Playwright installer for installable targets
        runner: subprocess.run compatible callable

    Returns:
        LaunchTarget to pass to every session
    """
    key = (version or "").strip() or None
    if key in _provisioned:
        return _provisioned[key]

    target = resolve_launch_target(key)
    logger.info(f"Browser version pin: {key or '<latest>'} -> {target.describe()}")

    if auto_install and target.install_name:
        install_browser(target.install_name, runner=runner)

    _provisioned[key] = target
    return target


def reset_provisioning() -> None:
    """Forget resolved targets (used by unit tests)."""
    _provisioned.clear()


__all__ = [
    "LaunchTarget",
    "ProvisioningError",
    "SUPPORTED_CHANNELS",
    "install_browser",
    "provision_browser",
    "reset_provisioning",
    "resolve_launch_target",
]
