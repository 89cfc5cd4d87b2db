import json

import pytest

from lmi_providers.base.models import BridgeResponse, ModelInfo


def test_success_line_shape():
    line = BridgeResponse.ok({"models": ["a"]}).to_line()
    assert line.endswith("\n") and line.count("\n") == 1  # nosec B101
    assert json.loads(line) == {"success": True, "data": {"models": ["a"]}}  # nosec B101


def test_failure_stack_only_when_set():
    assert json.loads(BridgeResponse.fail("nope").to_line()) == {"success": False, "error": "nope"}  # nosec B101
    with_stack = json.loads(BridgeResponse.fail("bad", stack="trace").to_line())
    assert with_stack["stack"] == "trace"  # nosec B101


def test_line_is_ascii_and_single_line():
    text = "caf\u00e9\u2028line\nbreak"
    line = BridgeResponse.ok({"text": text}).to_line()
    assert line.isascii()  # nosec B101
    assert "\n" not in line[:-1]  # nosec B101
    assert json.loads(line)["data"]["text"] == text  # nosec B101


def test_non_json_payloads_are_coerced():
    info = ModelInfo(id="m", name="m", provider="p")
    line = BridgeResponse.ok({"info": info, "tags": frozenset({"x"})}).to_line()
    data = json.loads(line)["data"]
    assert data["info"]["provider"] == "p"  # nosec B101
    assert data["tags"] == ["x"]  # nosec B101


def test_provider_config_host_dict(registry):
    cfg = registry.resolve("lmi_ollama")
    assert cfg.to_host_dict() == {  # nosec B101
        "name": "Ollama",
        "base_url": "http://localhost:11434/v1",
        "env_key": None,
        "env_key_instructions": "Get your API key from the Ollama website",
        "wire_api": "lmi_bridge",
        "requires_openai_auth": False,
    }
    assert cfg.requires_credential is False  # nosec B101


def test_unknown_payload_types_raise():
    with pytest.raises(TypeError):
        BridgeResponse.ok({"blob": b"\x00"}).to_line()
