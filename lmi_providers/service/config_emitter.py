"""Host configuration emitter.

Serializes the provider registry into TOML provider blocks and merges those
blocks into an existing host configuration document::

    [model_providers.lmi_openai]
    name = "OpenAI"
    base_url = "https://api.openai.com/v1"
    env_key = "OPENAI_API_KEY"
    env_key_instructions = "Get your API key from https://platform.openai.com/api-keys"
    wire_api = "lmi_bridge"
    requires_openai_auth = false

Only dotted ``[model_providers.<id>]`` tables are written; the bare
``[model_providers]`` header is implied by them and writing it would clash
with a host document that already declares the table.

Merge caveat: the "already present" check is a substring test on
``[model_providers.lmi_``. Removing that marker by hand makes the next merge
append the blocks again.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Union

from ..base.errors import ConfigurationError
from ..base.logging import get_logger, log_event
from ..base.models import ProviderConfig
from ..config.defaults import HOST_CONFIG_MARKER, HOST_CONFIG_SECTION_COMMENT, HOST_PROVIDERS_TABLE

_logger = get_logger("service.config_emitter")

ProviderSource = Union[Iterable[ProviderConfig], Mapping[str, ProviderConfig]]


@dataclass(frozen=True)
class MergeResult:
    """Outcome of :func:`merge`.

    Attributes:
        document: The merged document (the input itself when unchanged).
        changed: False when the provider blocks were already present.
    """

    document: str
    changed: bool


def _toml_string(value: str) -> str:
    # JSON string escapes are a subset of TOML basic-string escapes; DEL is the
    # one control character JSON leaves raw.
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007F")


def _configs(providers: ProviderSource) -> List[ProviderConfig]:
    if isinstance(providers, Mapping):
        return list(providers.values())
    return list(providers)


def render_block(cfg: ProviderConfig) -> str:
    """Render one provider block (newline-terminated)."""
    lines = [
        f"[{HOST_PROVIDERS_TABLE}.{cfg.id}]",
        f"name = {_toml_string(cfg.display_name)}",
    ]
    if cfg.base_url:
        lines.append(f"base_url = {_toml_string(cfg.base_url)}")
    if cfg.credential_env_var:
        lines.append(f"env_key = {_toml_string(cfg.credential_env_var)}")
    if cfg.credential_hint:
        lines.append(f"env_key_instructions = {_toml_string(cfg.credential_hint)}")
    lines.append(f"wire_api = {_toml_string(cfg.wire_protocol)}")
    lines.append(f"requires_openai_auth = {'true' if cfg.requires_host_auth else 'false'}")
    return "\n".join(lines) + "\n"


def render(providers: ProviderSource) -> str:
    """Render every provider block in registry order, one blank line apart.

    Deterministic: the same registry always renders byte-identical text.
    """
    return "\n".join(render_block(cfg) for cfg in _configs(providers))


def merge(existing: str, providers: ProviderSource) -> MergeResult:
    """Append the rendered blocks to ``existing`` unless already present."""
    if HOST_CONFIG_MARKER in existing:
        return MergeResult(document=existing, changed=False)
    blocks = render(providers)
    if not blocks:
        # No blocks to add: leave the document untouched.
        return MergeResult(document=existing, changed=False)
    document = f"{existing}\n\n{HOST_CONFIG_SECTION_COMMENT}\n{blocks}"
    return MergeResult(document=document, changed=True)


def write_config(path: Union[str, Path], providers: ProviderSource) -> Path:
    """Write the rendered document to ``path`` and return the resolved path."""
    target = Path(path).expanduser()
    try:
        target.write_text(render(providers), encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot write configuration: {exc}", source=str(target)) from exc
    log_event(_logger, "emitter.write", level=logging.DEBUG, path=str(target))
    return target


def add_to_config(path: Union[str, Path], providers: ProviderSource) -> MergeResult:
    """Merge the provider blocks into the host configuration file at ``path``.

    The file must already exist. Nothing is written when the blocks are
    already present.

    Raises
    ------
    ConfigurationError
        When the file is missing, unreadable or unwritable.
    """
    target = Path(path).expanduser()
    if not target.is_file():
        raise ConfigurationError("configuration file not found", source=str(target))
    try:
        existing = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot read configuration: {exc}", source=str(target)) from exc

    result = merge(existing, providers)
    if result.changed:
        try:
            target.write_text(result.document, encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"cannot write configuration: {exc}", source=str(target)) from exc
    log_event(_logger, "emitter.merge", level=logging.DEBUG, path=str(target), changed=result.changed)
    return result


__all__ = [
    "MergeResult",
    "render",
    "render_block",
    "merge",
    "write_config",
    "add_to_config",
]
