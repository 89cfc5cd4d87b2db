"""Rendering and merging provider blocks into host configuration documents."""

from __future__ import annotations

import tomllib

import pytest

from lmi_providers.base.errors import ConfigurationError
from lmi_providers.registry import ProviderRegistry, parse_catalog
from lmi_providers.service.config_emitter import add_to_config, merge, render, write_config

EXPECTED_OPENAI_BLOCK = """\
[model_providers.lmi_openai]
name = "iEchor"
base_url = "https://api.openai.com/v1"
env_key = "OPENAI_API_KEY"
env_key_instructions = "Get your API key from https://platform.openai.com/api-keys"
wire_api = "lmi_bridge"
requires_openai_auth = false
"""


def test_render_block_format(registry):
    text = render(registry)
    assert text.startswith(EXPECTED_OPENAI_BLOCK + "\n[model_providers.lmi_anthropic]\n")  # nosec B101
    assert "[model_providers]\n" not in text  # nosec B101


def test_render_omits_absent_fields(registry):
    text = render(registry)
    ollama = text[text.index("[model_providers.lmi_ollama]"):]
    assert "base_url = \"http://localhost:11434/v1\"" in ollama  # nosec B101
    assert "env_key =" not in ollama  # nosec B101


def test_render_is_deterministic(sample_catalog):
    assert render(ProviderRegistry(sample_catalog)) == render(ProviderRegistry(sample_catalog))  # nosec B101


def test_render_is_valid_toml_with_escaping():
    registry = ProviderRegistry(
        parse_catalog(
            {
                "weird": {"name": 'Acme "Quoted" \\ Co\tü', "env_key": "WEIRD_KEY", "requires_openai_auth": True},
                "ollama": {"name": "Ollama", "base_url": "http://localhost:11434/v1"},
            }
        )
    )
    data = tomllib.loads(render(registry))
    block = data["model_providers"]["lmi_weird"]
    assert block["name"] == 'Acme "Quoted" \\ Co\tü'  # nosec B101
    assert block["requires_openai_auth"] is True  # nosec B101
    assert block["env_key_instructions"] == 'Get your API key from the Acme "Quoted" \\ Co\tü website'  # nosec B101
    assert "base_url" not in block  # nosec B101


def test_merge_appends_after_section_comment(registry):
    existing = 'model = "o3"\n'
    result = merge(existing, registry)
    assert result.changed is True  # nosec B101
    assert result.document.startswith(existing + "\n\n# Large Models Interface Providers\n")  # nosec B101
    assert result.document.endswith(render(registry))  # nosec B101


def test_merge_is_idempotent(registry):
    once = merge('model = "o3"\n', registry)
    twice = merge(once.document, registry)
    assert twice.changed is False  # nosec B101
    assert twice.document == once.document  # nosec B101


def test_merge_into_document_with_native_providers_parses(registry):
    existing = '[model_providers.local]\nname = "Local"\nbase_url = "http://localhost:9000"\n'
    data = tomllib.loads(merge(existing, registry).document)
    assert set(data["model_providers"]) >= {"local", "lmi_openai", "lmi_ollama"}  # nosec B101


def test_write_config_writes_rendered_document(tmp_path, registry):
    target = write_config(tmp_path / "lmi.toml", registry)
    assert target.read_text(encoding="utf-8") == render(registry)  # nosec B101


def test_write_config_unwritable_path(tmp_path, registry):
    with pytest.raises(ConfigurationError):
        write_config(tmp_path / "missing-dir" / "lmi.toml", registry)


def test_add_to_config_missing_file(tmp_path, registry):
    with pytest.raises(ConfigurationError) as ei:
        add_to_config(tmp_path / "config.toml", registry)
    assert ei.value.source == str(tmp_path / "config.toml")  # nosec B101


def test_add_to_config_updates_once(tmp_path, registry):
    path = tmp_path / "config.toml"
    path.write_text('model = "o3"\n', encoding="utf-8")
    first = add_to_config(path, registry)
    content = path.read_text(encoding="utf-8")
    second = add_to_config(path, registry)
    assert first.changed is True and second.changed is False  # nosec B101
    assert path.read_text(encoding="utf-8") == content  # nosec B101
    assert tomllib.loads(content)["model_providers"]["lmi_openai"]["wire_api"] == "lmi_bridge"  # nosec B101


def test_merge_with_empty_registry_leaves_document_untouched():
    empty = ProviderRegistry({})
    assert render(empty) == ""  # nosec B101
    once = merge('model = "x"\n', empty)
    twice = merge(once.document, empty)
    assert once.changed is False and twice.changed is False  # nosec B101
    assert twice.document == once.document == 'model = "x"\n'  # nosec B101
