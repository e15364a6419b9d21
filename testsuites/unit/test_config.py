import dataclasses
from pathlib import Path

import pytest
import yaml

from testsuites.ui_testing.framework.config import (
    DEFAULTS,
    ConfigurationError,
    HarnessConfig,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop overrides that may leak in from the developer/CI environment."""
    for key in DEFAULTS:
        monkeypatch.delenv(key.upper().replace(".", "_"), raising=False)
    monkeypatch.delenv("HARNESS_CONFIG", raising=False)


def write_config(path: Path, data) -> Path:
    path.write_text(yaml.dump(data, allow_unicode=True), encoding="utf-8")
    return path


def test_load_reads_yaml_values(tmp_path):
    config_path = write_config(
        tmp_path / "application.yaml",
        {
            "base": {"url": "https://kiwiduck.example/"},
            "browser": {"version": "chrome", "headless": False},
            "profile": {"dir": str(tmp_path / "profile")},
            "waits": {"alert": {"timeout": 5, "poll_interval": 0.2}},
        },
    )

    config = load_config(config_path)

    assert config.base_url == "https://kiwiduck.example/"
    assert config.browser_version == "chrome"
    assert config.headless is False
    assert config.profile_dir == tmp_path / "profile"
    assert config.alert_wait.timeout == 5.0
    assert config.alert_wait.poll_interval == 0.2
    # Unset keys fall back to defaults
    assert config.instant_wait.timeout == 0.1
    assert config.window_width == 1920
    assert config.element_timeout_ms == 1000
    assert config.navigation_timeout_ms == 30000


def test_page_urls_are_plain_concatenation(tmp_path):
    config = load_config(write_config(tmp_path / "c.yaml", {"base": {"url": "http://host/app/"}}))
    assert config.alerts_page_url == "http://host/app/alerts"
    assert config.table_page_url == "http://host/app/table"

    malformed = load_config(write_config(tmp_path / "m.yaml", {"base": {"url": "not a url"}}))
    assert malformed.alerts_page_url == "not a urlalerts"


def test_get_returns_value_or_default(tmp_path):
    config = load_config(write_config(tmp_path / "c.yaml", {"base": {"url": "http://h/"}}))

    assert config.get("base.url") == "http://h/"
    assert config.get("browser.version") is None
    assert config.get("browser.version", "") == ""
    assert config.get("base.url.deeper") is None


def test_empty_version_pin_is_absent(tmp_path):
    config = load_config(
        write_config(tmp_path / "c.yaml", {"base": {"url": "http://h/"}, "browser": {"version": "  "}})
    )
    assert config.browser_version is None


def test_env_override_and_type_conversion(monkeypatch, tmp_path):
    config_path = write_config(
        tmp_path / "c.yaml",
        {"base": {"url": "http://file.example/"}, "browser": {"headless": True}},
    )
    monkeypatch.setenv("BASE_URL", "http://env.example/")
    monkeypatch.setenv("BROWSER_HEADLESS", "false")
    monkeypatch.setenv("WAITS_ALERT_TIMEOUT", "7.5")
    monkeypatch.setenv("BROWSER_WINDOW_WIDTH", "1280")
    monkeypatch.setenv("WAITS_NAVIGATION_TIMEOUT_MS", "60000")

    config = load_config(config_path)

    assert config.base_url == "http://env.example/"
    assert config.headless is False
    assert config.alert_wait.timeout == 7.5
    assert config.window_width == 1280
    assert config.navigation_timeout_ms == 60000
    assert config.get("base.url") == "http://env.example/"


def test_config_path_from_env(monkeypatch, tmp_path):
    config_path = write_config(tmp_path / "other.yaml", {"base": {"url": "http://other/"}})
    monkeypatch.setenv("HARNESS_CONFIG", str(config_path))

    assert load_config().base_url == "http://other/"


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_invalid_yaml_is_fatal(tmp_path):
    config_path = tmp_path / "broken.yaml"
    config_path.write_text("base: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config(config_path)


def test_missing_base_url_is_fatal(tmp_path):
    config_path = write_config(tmp_path / "c.yaml", {"browser": {"version": ""}})

    with pytest.raises(ConfigurationError, match="base.url"):
        load_config(config_path)


def test_invalid_budget_is_rejected(tmp_path):
    config_path = write_config(
        tmp_path / "c.yaml",
        {"base": {"url": "http://h/"}, "waits": {"alert": {"poll_interval": 0}}},
    )

    with pytest.raises(ConfigurationError):
        load_config(config_path)


def test_relative_profile_dir_resolved_against_base_dir(tmp_path):
    config = HarnessConfig.from_mapping({"base": {"url": "http://h/"}}, base_dir=tmp_path)
    assert config.profile_dir == tmp_path / "target" / "profile"


def test_config_is_immutable(tmp_path):
    config = load_config(write_config(tmp_path / "c.yaml", {"base": {"url": "http://h/"}}))

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.base_url = "http://changed/"
    with pytest.raises(TypeError):
        config.settings["base"]["url"] = "http://changed/"


def test_repo_config_file_loads():
    config = load_config()
    assert config.base_url.endswith("/")
    assert config.alert_wait.timeout == 3.0
    assert config.alert_wait.poll_interval == 0.1
