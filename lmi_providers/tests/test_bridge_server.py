"""In-process tests for the bridge dispatch loop (serial and worker modes)."""

from __future__ import annotations

import io
import json

import pytest

from lmi_providers.base.errors import ErrorCode, ProviderError
from lmi_providers.base.models import ModelInfo
from lmi_providers.bridge.server import BridgeServer
from lmi_providers.tests.utils import FakeInvoker, serve_lines


def _chat(provider: str, content: str, **options) -> str:
    return json.dumps(
        {
            "type": "chat_completion",
            "provider": provider,
            "model": "m",
            "messages": [{"role": "user", "content": content}],
            "options": options,
        }
    )


def test_list_providers_end_to_end(fake_invoker):
    code, responses = serve_lines(fake_invoker, ['{"type":"list_providers"}'])
    assert code == 0  # nosec B101
    assert responses == [{"success": True, "data": ["openai", "anthropic"]}]  # nosec B101


def test_provider_not_found_then_valid_request_succeeds(fake_invoker):
    code, responses = serve_lines(fake_invoker, [_chat("missing", "hi"), '{"type":"list_providers"}'])
    assert code == 0  # nosec B101
    assert responses[0] == {"success": False, "error": "provider not found"}  # nosec B101
    assert responses[1] == {"success": True, "data": ["openai", "anthropic"]}  # nosec B101


def test_provider_error_reports_message_only():
    invoker = FakeInvoker(
        errors={"openai": ProviderError(code=ErrorCode.RATE_LIMIT, message="rate limit exceeded", provider="openai")}
    )
    _, responses = serve_lines(invoker, [_chat("openai", "hi")])
    assert responses == [{"success": False, "error": "rate limit exceeded"}]  # nosec B101


def test_invalid_json_yields_one_failure_and_server_keeps_serving(fake_invoker):
    _, responses = serve_lines(fake_invoker, ["{not json", "", '{"type":"list_providers"}'])
    assert len(responses) == 3  # nosec B101
    for failure in responses[:2]:
        assert failure["success"] is False and failure["error"] == "parse error"  # nosec B101
        assert failure["stack"]  # nosec B101
    assert responses[2]["success"] is True  # nosec B101


def test_unknown_type_and_invalid_fields_are_input_errors(fake_invoker):
    _, responses = serve_lines(fake_invoker, ['{"type":"embed"}', '{"type":"list_models"}'])
    assert responses[0]["error"] == "unknown request type: 'embed'"  # nosec B101
    assert responses[1]["error"].startswith("invalid request:")  # nosec B101
    assert all("stack" in r for r in responses)  # nosec B101
    assert fake_invoker.calls == []  # nosec B101


def test_namespaced_provider_is_stripped_before_dispatch(fake_invoker):
    _, responses = serve_lines(
        fake_invoker, [_chat("lmi_openai", "hi"), '{"type":"list_models","provider":"lmi_anthropic"}']
    )
    assert responses[0]["data"]["provider"] == "openai"  # nosec B101
    assert responses[1]["data"] == [{"id": "anthropic-model"}]  # nosec B101
    assert fake_invoker.calls[0][1][0] == "openai"  # nosec B101
    assert fake_invoker.calls[1] == ("list_models", ("anthropic",))  # nosec B101


def test_tools_are_forwarded_in_options(fake_invoker):
    line = json.dumps(
        {
            "type": "chat_completion",
            "provider": "openai",
            "messages": [],
            "options": {"temperature": 0.5},
            "tools": [{"type": "function", "function": {"name": "f"}}],
        }
    )
    serve_lines(fake_invoker, [line])
    _, (_, model, _, options) = fake_invoker.calls[0]
    assert model is None  # nosec B101
    assert options == {"temperature": 0.5, "tools": [{"type": "function", "function": {"name": "f"}}]}  # nosec B101


@pytest.mark.parametrize("workers", [1, 4])
def test_responses_follow_request_order_with_varying_latency(fake_invoker, workers):
    delays = [0.15, 0.0, 0.1, 0.02, 0.0, 0.05]
    lines = [_chat("openai", str(i), delay=d) for i, d in enumerate(delays)]
    lines.insert(3, "garbage")
    code, responses = serve_lines(fake_invoker, lines, workers=workers)
    assert code == 0  # nosec B101
    assert len(responses) == len(lines)  # nosec B101
    assert responses[3]["error"] == "parse error"  # nosec B101
    echoes = [r["data"]["echo"] for r in responses if r["success"]]
    assert echoes == [str(i) for i in range(len(delays))]  # nosec B101


def test_unserializable_payload_is_server_error():
    class Circular(FakeInvoker):
        def list_providers(self):
            data = {}
            data["self"] = data
            return data

    _, responses = serve_lines(Circular(), ['{"type":"list_providers"}', '{"type":"list_models","provider":"openai"}'])
    assert responses[0]["success"] is False  # nosec B101
    assert responses[0]["error"].startswith("internal bridge error")  # nosec B101
    assert "Traceback" in responses[0]["stack"]  # nosec B101
    assert responses[1]["success"] is True  # nosec B101


def test_non_json_payload_objects_are_converted():
    class Objects(FakeInvoker):
        def list_providers(self):
            return {"tags": {"a"}, "info": ModelInfo(id="m", name="m", provider="p")}

    _, responses = serve_lines(Objects(), ['{"type":"list_providers"}'])
    assert responses[0]["success"] is True  # nosec B101
    assert responses[0]["data"]["tags"] == ["a"]  # nosec B101
    assert responses[0]["data"]["info"]["provider"] == "p"  # nosec B101


def test_unknown_payload_types_are_server_errors():
    class RawBytes(FakeInvoker):
        def list_providers(self):
            return {"blob": b"\x00\x01"}

    _, responses = serve_lines(RawBytes(), ['{"type":"list_providers"}', '{"type":"list_providers"}'])
    assert responses[0]["success"] is False  # nosec B101
    assert "not JSON serializable" in responses[0]["error"]  # nosec B101
    assert len(responses) == 2  # nosec B101


def test_eof_runs_cleanup(fake_invoker):
    code, responses = serve_lines(fake_invoker, [])
    assert code == 0 and responses == []  # nosec B101
    assert fake_invoker.closed is True  # nosec B101


class _ClosedOutput(io.StringIO):
    def write(self, s):  # type: ignore[override]
        raise BrokenPipeError("reader went away")

    def flush(self):
        raise BrokenPipeError("reader went away")


@pytest.mark.parametrize("workers", [1, 2])
def test_closed_output_exits_with_code_one(fake_invoker, workers):
    server = BridgeServer(
        fake_invoker,
        stdin=io.StringIO('{"type":"list_providers"}\n{"type":"list_providers"}\n'),
        stdout=_ClosedOutput(),
        workers=workers,
    )
    assert server.serve() == 1  # nosec B101
    assert fake_invoker.closed is True  # nosec B101


def test_termination_signal_stops_without_answering():
    stdout = io.StringIO()
    invoker = FakeInvoker()
    stdin = io.StringIO('{"type":"list_providers"}\n{"type":"list_providers"}\n')
    server = BridgeServer(invoker, stdin=stdin, stdout=stdout)

    def _interrupted():
        server.handle_signal(15)
        return ["never"]

    invoker.list_providers = _interrupted  # type: ignore[method-assign]
    assert server.serve() == 0  # nosec B101
    assert stdout.getvalue() == ""  # nosec B101
    assert invoker.closed is True  # nosec B101
    # A second signal during or after cleanup is ignored.
    server.handle_signal(15)


def test_closed_file_object_counts_as_closed_output(fake_invoker):
    stdout = io.StringIO()
    stdout.close()
    server = BridgeServer(fake_invoker, stdin=io.StringIO('{"type":"list_providers"}\n'), stdout=stdout)
    assert server.serve() == 1  # nosec B101


def test_failing_invoker_close_does_not_block_shutdown():
    invoker = FakeInvoker()

    def _boom():
        raise RuntimeError("close failed")

    invoker.close = _boom  # type: ignore[method-assign]
    code, responses = serve_lines(invoker, ['{"type":"list_providers"}'])
    assert code == 0 and responses[0]["success"] is True  # nosec B101


class _StrictInput(io.StringIO):
    """Text input whose first line cannot be decoded."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self._failed = False

    def readline(self, *args):  # type: ignore[override]
        if not self._failed:
            self._failed = True
            raise UnicodeDecodeError("utf-8", b"\xff\xfe", 0, 1, "invalid start byte")
        return super().readline(*args)


def test_undecodable_line_is_answered_as_parse_error(fake_invoker):
    stdout = io.StringIO()
    server = BridgeServer(fake_invoker, stdin=_StrictInput('{"type":"list_providers"}\n'), stdout=stdout)
    assert server.serve() == 0  # nosec B101
    first, second = (json.loads(x) for x in stdout.getvalue().splitlines())
    assert first["success"] is False and first["error"] == "parse error"  # nosec B101
    assert second == {"success": True, "data": ["openai", "anthropic"]}  # nosec B101
