from pathlib import Path

import pytest

from lmi_providers.config import get_settings, host_config_path
from lmi_providers.config.env import env_flag, is_placeholder, resolve_credential


def test_defaults():
    s = get_settings()
    assert s.catalog_path is None and s.use_mocks is False  # nosec B101
    assert s.workers == 1 and s.max_retries == 2  # nosec B101


def test_environment_and_overrides(monkeypatch):
    monkeypatch.setenv("LMI_USE_MOCKS", "yes")
    monkeypatch.setenv("LMI_BRIDGE_WORKERS", "4")
    monkeypatch.setenv("LMI_PROVIDERS_CATALOG", "/tmp/catalog.yaml")
    s = get_settings({"workers": 8, "catalog_path": None})
    assert s.use_mocks is True  # nosec B101
    assert s.workers == 8  # nosec B101
    assert s.catalog_path == "/tmp/catalog.yaml"  # nosec B101


@pytest.mark.parametrize("raw", ["0", "-3", "many"])
def test_invalid_worker_counts_fall_back(monkeypatch, raw):
    monkeypatch.setenv("LMI_BRIDGE_WORKERS", raw)
    assert get_settings().workers == 1  # nosec B101


def test_host_config_path(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert host_config_path() == tmp_path / ".icodex" / "config.toml"  # nosec B101
    monkeypatch.setenv("LMI_HOST_CONFIG", "~/custom.toml")
    assert host_config_path() == tmp_path / "custom.toml"  # nosec B101
    assert host_config_path("/etc/x.toml") == Path("/etc/x.toml")  # nosec B101


def test_resolve_credential(monkeypatch):
    monkeypatch.setenv("ACME_API_KEY", "  sk-real  ")
    assert resolve_credential("ACME_API_KEY") == "sk-real"  # nosec B101
    for fake in ("", "changeme", "your-key-placeholder", "test_123"):
        monkeypatch.setenv("ACME_API_KEY", fake)
        assert resolve_credential("ACME_API_KEY") is None  # nosec B101
    monkeypatch.delenv("ACME_API_KEY")
    assert resolve_credential("ACME_API_KEY") is None  # nosec B101
    assert resolve_credential(None) is None  # nosec B101


def test_placeholder_and_flags(monkeypatch):
    assert is_placeholder("EXAMPLE-key") and not is_placeholder("sk-live")  # nosec B101
    assert not is_placeholder(None)  # nosec B101
    monkeypatch.setenv("FLAG_X", "On")
    assert env_flag("FLAG_X") is True  # nosec B101
    monkeypatch.setenv("FLAG_X", "0")
    assert env_flag("FLAG_X", default=True) is False  # nosec B101
    monkeypatch.setenv("FLAG_X", " ")
    assert env_flag("FLAG_X", default=True) is True  # nosec B101
