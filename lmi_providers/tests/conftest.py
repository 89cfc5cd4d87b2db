"""Pytest configuration for the lmi_providers test suite.

Provides environment isolation, a small sample catalog/registry, the mock
toggle and a scriptable fake invoker.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator

import pytest

from lmi_providers.base.http import close_all_clients
from lmi_providers.registry import ProviderRegistry, parse_catalog
from lmi_providers.tests.utils import FakeInvoker

_ISOLATED_ENV = (
    "LMI_PROVIDERS_CATALOG",
    "LMI_HOST_CONFIG",
    "LMI_USE_MOCKS",
    "LMI_BRIDGE_WORKERS",
    "LMI_LOG_LEVEL",
    "LMI_MAX_RETRIES",
)

SAMPLE_CATALOG: Dict[str, Dict[str, Any]] = {
    "openai": {"name": "iEchor", "base_url": "https://api.openai.com/v1", "env_key": "OPENAI_API_KEY"},
    "anthropic": {"name": "Anthropic", "base_url": "https://api.anthropic.com/v1/", "env_key": "ANTHROPIC_API_KEY"},
    "acme": {"name": "Acme AI", "base_url": "https://api.acme.test/v1", "env_key": "ACME_API_KEY"},
    "ollama": {"name": "Ollama", "base_url": "http://localhost:11434/v1"},
}


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop package environment toggles so tests see built-in defaults."""

    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    yield
    close_all_clients()


@pytest.fixture()
def enable_mock_invoker(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Enable the mock invoker via environment toggle for the duration of a test."""

    monkeypatch.setenv("LMI_USE_MOCKS", "1")
    yield
    monkeypatch.delenv("LMI_USE_MOCKS", raising=False)


@pytest.fixture()
def sample_catalog():
    return parse_catalog(SAMPLE_CATALOG)


@pytest.fixture()
def registry(sample_catalog) -> ProviderRegistry:
    return ProviderRegistry(sample_catalog)


@pytest.fixture()
def fake_invoker() -> FakeInvoker:
    return FakeInvoker()
