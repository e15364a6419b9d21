"""
================================================================================
Harness Configuration
================================================================================

YAML-based configuration with environment variable override support.

Features:
    - Single YAML source, loaded once per process
    - Environment variable override (BASE_URL overrides base.url)
    - Dot notation key lookup
    - Immutable HarnessConfig value passed to every component

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml
from loguru import logger

from .wait_helpers import WAIT_BUDGETS, WaitBudget


# Default configuration file path (repo root / config / application.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).parents[3] / "config" / "application.yaml"

# Environment variable pointing at an alternative configuration file
CONFIG_PATH_ENV = "HARNESS_CONFIG"

ALERTS_PAGE_SUFFIX = "alerts"
TABLE_PAGE_SUFFIX = "table"

# Keys that may be overridden from the environment, with their typed defaults
DEFAULTS: Dict[str, Any] = {
    "base.url": None,
    "browser.version": "",
    "browser.headless": True,
    "browser.auto_install": True,
    "browser.window.width": 1920,
    "browser.window.height": 1080,
    "profile.dir": "target/profile",
    "waits.alert.timeout": WAIT_BUDGETS["alert"].timeout,
    "waits.alert.poll_interval": WAIT_BUDGETS["alert"].poll_interval,
    "waits.instant.timeout": WAIT_BUDGETS["instant"].timeout,
    "waits.instant.poll_interval": WAIT_BUDGETS["instant"].poll_interval,
    "waits.element_timeout_ms": 1000,
    "waits.navigation_timeout_ms": 30000,
    "logging.level": "INFO",
    "logging.file": "",
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Navigate nested mappings by dot notation, returning None when absent."""
    value: Any = data
    for part in key.split("."):
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            return None
        if value is None:
            return None
    return value


def _set_nested(data: Dict[str, Any], key: str, value: Any) -> None:
    """Set a nested value using dot notation."""
    keys = key.split(".")
    current = data
    for k in keys[:-1]:
        if not isinstance(current.get(k), dict):
            current[k] = {}
        current = current[k]
    current[keys[-1]] = value


def _convert_type(value: str, reference: Any) -> Any:
    """
    Convert string value to match reference type.

    Used for environment variables which are always strings.
    """
    if reference is None:
        return value

    if isinstance(reference, bool):
        return value.lower() in ("true", "1", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError:
            return value
    if isinstance(reference, float):
        try:
            return float(value)
        except ValueError:
            return value

    return value


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    return value


@dataclass(frozen=True)
class HarnessConfig:
    """
    Immutable harness configuration.

    Built once by ``load_config()`` and passed explicitly to the session manager,
    page objects and fixtures.

    Usage:
        >>> config = load_config()
        >>> config.alerts_page_url
        'http://localhost:8080/alerts'
        >>> config.get("browser.version")
        ''
    """

    base_url: str
    browser_version: Optional[str] = None
    headless: bool = True
    auto_install: bool = True
    profile_dir: Path = Path("target/profile")
    window_width: int = 1920
    window_height: int = 1080
    alert_wait: WaitBudget = WAIT_BUDGETS["alert"]
    instant_wait: WaitBudget = WAIT_BUDGETS["instant"]
    element_timeout_ms: int = 1000
    navigation_timeout_ms: int = 30000
    log_level: str = "INFO"
    log_file: Optional[str] = None
    settings: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def alerts_page_url(self) -> str:
        return self.base_url + ALERTS_PAGE_SUFFIX

    @property
    def table_page_url(self) -> str:
        return self.base_url + TABLE_PAGE_SUFFIX

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key: Dot-notation path (e.g., "base.url")
            default: Returned when the key is not configured

        Returns:
            Configuration value or default
        """
        value = _lookup(self.settings, key)
        return default if value is None else value

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        base_dir: Optional[Path] = None,
    ) -> "HarnessConfig":
        """
        Build a HarnessConfig from an already-merged settings mapping.

        Args:
            data: Nested settings (YAML structure)
            base_dir: Directory relative profile paths are resolved against.
                      Defaults to the current working directory.

        Raises:
            ConfigurationError: If base.url is missing or a value is invalid
        """
        def setting(key: str) -> Any:
            value = _lookup(data, key)
            return DEFAULTS[key] if value is None else value

        base_url = _lookup(data, "base.url")
        if not base_url:
            raise ConfigurationError("Required configuration key 'base.url' is not set")

        profile_dir = Path(setting("profile.dir"))
        if not profile_dir.is_absolute():
            profile_dir = (base_dir or Path.cwd()) / profile_dir

        try:
            alert_wait = WaitBudget(
                timeout=float(setting("waits.alert.timeout")),
                poll_interval=float(setting("waits.alert.poll_interval")),
            )
            instant_wait = WaitBudget(
                timeout=float(setting("waits.instant.timeout")),
                poll_interval=float(setting("waits.instant.poll_interval")),
            )
            window_width = int(setting("browser.window.width"))
            window_height = int(setting("browser.window.height"))
            element_timeout_ms = int(setting("waits.element_timeout_ms"))
            navigation_timeout_ms = int(setting("waits.navigation_timeout_ms"))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e

        return cls(
            base_url=str(base_url),
            browser_version=str(setting("browser.version")).strip() or None,
            headless=bool(setting("browser.headless")),
            auto_install=bool(setting("browser.auto_install")),
            profile_dir=profile_dir,
            window_width=window_width,
            window_height=window_height,
            alert_wait=alert_wait,
            instant_wait=instant_wait,
            element_timeout_ms=element_timeout_ms,
            navigation_timeout_ms=navigation_timeout_ms,
            log_level=str(setting("logging.level")).upper(),
            log_file=setting("logging.file") or None,
            settings=_freeze(copy.deepcopy(dict(data))),
        )


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    """Return the configuration file path: argument, then env var, then default."""
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[Path] = None) -> HarnessConfig:
    """
    Load the harness configuration.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (BASE_URL, BROWSER_VERSION, ...)
        2. YAML configuration file
        3. Default values

    Args:
        config_path: Path to YAML configuration file. Falls back to the
                     HARNESS_CONFIG env var, then DEFAULT_CONFIG_PATH.

    Returns:
        Immutable HarnessConfig

    Raises:
        ConfigurationError: If the file is missing or invalid, or base.url is unset.
            Callers treat this as fatal for the whole run.
    """
    path = resolve_config_path(config_path)

    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Unable to read configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {path}")

    for key, default in DEFAULTS.items():
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            _set_nested(data, key, _convert_type(env_value, default))
            logger.debug(f"Configuration override from environment: {env_key}")

    config = HarnessConfig.from_mapping(data)
    logger.debug(f"Loaded configuration from: {path}")
    return config


__all__ = [
    "ALERTS_PAGE_SUFFIX",
    "TABLE_PAGE_SUFFIX",
    "ConfigurationError",
    "HarnessConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "resolve_config_path",
]
