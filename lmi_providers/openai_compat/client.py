"""OpenAI-compatible invoker.

Every cataloged backend exposes the OpenAI chat-completions dialect, so one
adapter covers them all: an ``openai.OpenAI`` client per provider key, pointed
at the entry's ``base_url`` and authenticated with the credential read from
its ``env_key``. Clients share the pooled ``httpx.Client`` from
:mod:`lmi_providers.base.http`.

Retry semantics
---------------
SDK-internal retries are disabled (``max_retries=0``); transient failures are
retried by the shared :func:`~lmi_providers.base.resilience.retry` policy so
attempts are logged consistently. SDK exceptions are normalized through
:func:`classify_exception` into :class:`ProviderError`.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from openai import OpenAI

from ..base.errors import ErrorCode, ProviderError, classify_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ModelInfo, ProviderConfig
from ..base.resilience.retry import RetryConfig, retry
from ..config import get_settings
from ..config.defaults import LOCAL_BACKEND_API_KEY
from ..config.env import resolve_credential
from ..registry import ProviderRegistry

ClientFactory = Callable[[ProviderConfig, str], Any]

_HTTP_POOL = "bridge"


def _default_client_factory(cfg: ProviderConfig, api_key: str) -> Any:
    return OpenAI(
        api_key=api_key,
        base_url=cfg.base_url,
        max_retries=0,
        http_client=get_httpx_client(_HTTP_POOL),
    )


class OpenAICompatibleInvoker:
    """Invoke cataloged providers through the openai SDK."""

    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        retry_config: Optional[RetryConfig] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self._registry = registry
        self._retry_config = retry_config or RetryConfig(max_attempts=get_settings().max_retries)
        self._client_factory = client_factory or _default_client_factory
        self._clients: Dict[Tuple[str, str], Any] = {}
        self._lock = threading.Lock()
        self._logger = get_logger("openai_compat")

    # ----- ProviderInvoker surface -----
    def list_providers(self) -> List[str]:
        return self._registry.keys()

    def list_models(self, provider: str) -> List[Dict[str, Any]]:
        cfg = self._config(provider)
        client = self._client(cfg)
        ctx = LogContext(provider=provider, request_type="list_models")

        def _fetch() -> List[Dict[str, Any]]:
            return [self._model_info(provider, m).to_dict() for m in client.models.list()]

        return self._invoke(ctx, _fetch)

    def chat_completion(
        self,
        provider: str,
        model: Optional[str],
        messages: Sequence[Any],
        options: Mapping[str, Any],
    ) -> Any:
        cfg = self._config(provider)
        if not model:
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message="model is required for chat_completion",
                provider=provider,
            )
        client = self._client(cfg)
        params = {k: v for k, v in dict(options or {}).items() if v is not None}
        # Responses are single JSON lines; streaming is never forwarded.
        params["stream"] = False
        ctx = LogContext(provider=provider, model=model, request_type="chat_completion")

        def _create() -> Any:
            resp = client.chat.completions.create(model=model, messages=list(messages), **params)
            dump = getattr(resp, "model_dump", None)
            return dump(mode="json") if callable(dump) else resp

        return self._invoke(ctx, _create)

    def close(self) -> None:
        # SDK clients borrow the pooled httpx client; the pool owns closing it.
        with self._lock:
            self._clients.clear()

    # ----- Helpers -----
    def _config(self, provider: str) -> ProviderConfig:
        cfg = self._registry.by_key(provider)
        if cfg is None:
            raise ProviderError(
                code=ErrorCode.NOT_FOUND,
                message=f"provider not found: {provider}",
                provider=provider,
            )
        return cfg

    def _api_key(self, cfg: ProviderConfig) -> str:
        if not cfg.requires_credential:
            return LOCAL_BACKEND_API_KEY
        key = resolve_credential(cfg.credential_env_var)
        if key is None:
            raise ProviderError(
                code=ErrorCode.AUTH,
                message=f"missing API key: set {cfg.credential_env_var}. {cfg.credential_hint}",
                provider=cfg.key,
            )
        return key

    def _client(self, cfg: ProviderConfig) -> Any:
        api_key = self._api_key(cfg)
        cache_key = (cfg.key, api_key)
        with self._lock:
            client = self._clients.get(cache_key)
            if client is None:
                client = self._client_factory(cfg, api_key)
                self._clients[cache_key] = client
            return client

    def _invoke(self, ctx: LogContext, fn: Callable[[], Any]) -> Any:
        def _attempt() -> Any:
            try:
                return fn()
            except ProviderError:
                raise
            except Exception as exc:  # noqa: BLE001 - SDK/transport errors are normalized here
                code = classify_exception(exc)
                raise ProviderError(
                    code=code,
                    message=str(exc) or type(exc).__name__,
                    provider=ctx.provider or "",
                    model=ctx.model,
                    retryable=code in self._retry_config.retryable_codes,
                    raw=exc,
                ) from exc

        normalized_log_event(self._logger, "invoke.start", ctx, phase="start", level=logging.DEBUG)
        result = retry(self._retry_config_for(ctx))(_attempt)()
        normalized_log_event(self._logger, "invoke.end", ctx, phase="finalize", emitted=True, level=logging.DEBUG)
        return result

    def _retry_config_for(self, ctx: LogContext) -> RetryConfig:
        def _log_attempt(*, attempt: int, max_attempts: int, delay: float | None, error: ProviderError | None) -> None:
            if error is None:
                return
            will_retry = delay is not None and error.code in self._retry_config.retryable_codes
            normalized_log_event(
                self._logger,
                "invoke.retry" if will_retry else "invoke.error",
                ctx,
                phase="start",
                attempt=attempt + 1,
                error_code=error.code.value,
                emitted=False,
                level=logging.WARNING,
                max_attempts=max_attempts,
                delay=delay,
                message=error.message,
            )

        return replace(self._retry_config, attempt_logger=_log_attempt)

    @staticmethod
    def _model_info(provider: str, raw: Any) -> ModelInfo:
        if isinstance(raw, Mapping):
            get = raw.get
        else:
            def get(name: str, default: Any = None) -> Any:
                return getattr(raw, name, default)
        model_id = str(get("id") or get("name") or raw)
        return ModelInfo(
            id=model_id,
            name=str(get("name") or model_id),
            provider=provider,
            owned_by=get("owned_by"),
            created=get("created"),
        )


__all__ = ["OpenAICompatibleInvoker", "ClientFactory"]
