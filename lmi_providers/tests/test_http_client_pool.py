from lmi_providers.base.http import close_all_clients, get_httpx_client
from lmi_providers.base.timeouts import get_timeout_config


def test_clients_are_pooled_per_purpose():
    a = get_httpx_client("bridge")
    assert get_httpx_client("bridge") is a  # nosec B101
    assert get_httpx_client("other") is not a  # nosec B101


def test_close_all_clients_closes_and_forgets():
    a = get_httpx_client("bridge")
    close_all_clients()
    assert a.is_closed  # nosec B101
    b = get_httpx_client("bridge")
    assert b is not a and not b.is_closed  # nosec B101
    close_all_clients()
    close_all_clients()


def test_timeouts_follow_environment(monkeypatch):
    monkeypatch.setenv("LMI_TIMEOUT_HTTP_SECONDS", "30")
    monkeypatch.setenv("LMI_TIMEOUT_CONNECT_SECONDS", "nope")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 30.0  # nosec B101
    assert cfg.connect_timeout_seconds == 10.0  # nosec B101
    client = get_httpx_client("timeouts")
    assert client.timeout.read == 30.0  # nosec B101
