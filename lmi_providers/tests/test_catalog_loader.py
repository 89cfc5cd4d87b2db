"""Catalog loading: bundled resource, external files and validation failures."""

from __future__ import annotations

import json

import pytest

from lmi_providers.base.dto import CatalogEntry
from lmi_providers.base.errors import ConfigurationError
from lmi_providers.registry import default_catalog_path, load_catalog, parse_catalog


def test_bundled_catalog_loads_and_validates():
    catalog = load_catalog()
    assert default_catalog_path().name == "providers.yaml"  # nosec B101
    assert "openai" in catalog and "ollama" in catalog  # nosec B101
    assert all(isinstance(e, CatalogEntry) for e in catalog.values())  # nosec B101
    assert catalog["ollama"].env_key is None  # nosec B101
    assert catalog["openai"].env_key == "OPENAI_API_KEY"  # nosec B101


def test_external_json_catalog(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"providers": {"mine": {"name": "Mine", "env_key": "MINE_KEY"}}}), encoding="utf-8")
    catalog = load_catalog(path)
    assert list(catalog) == ["mine"]  # nosec B101
    assert catalog["mine"].base_url is None  # nosec B101


def test_env_var_selects_external_yaml_catalog(tmp_path, monkeypatch):
    path = tmp_path / "catalog.yaml"
    path.write_text("alpha:\n  name: Alpha\n  base_url: ''\nbeta:\n  name: Beta\n", encoding="utf-8")
    monkeypatch.setenv("LMI_PROVIDERS_CATALOG", str(path))
    catalog = load_catalog()
    assert list(catalog) == ["alpha", "beta"]  # nosec B101
    assert catalog["alpha"].base_url is None  # nosec B101


def test_unknown_entry_fields_are_ignored():
    catalog = parse_catalog({"x": {"name": "X", "wire_api": "chat", "extra": 1}})
    assert catalog["x"].name == "X"  # nosec B101


def test_missing_name_is_configuration_error():
    with pytest.raises(ConfigurationError) as ei:
        parse_catalog({"broken": {"base_url": "https://x"}})
    assert "broken" in ei.value.message  # nosec B101


@pytest.mark.parametrize("key", ["has space", "dot.ted", "", "brä"])
def test_invalid_key_is_configuration_error(key):
    with pytest.raises(ConfigurationError):
        parse_catalog({key: {"name": "X"}})


def test_non_mapping_document_is_configuration_error():
    with pytest.raises(ConfigurationError):
        parse_catalog(["openai"])


def test_unreadable_file_is_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError) as ei:
        load_catalog(tmp_path / "missing.yaml")
    assert ei.value.source.endswith("missing.yaml")  # nosec B101


def test_malformed_yaml_is_configuration_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("providers: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_catalog(path)
