"""Provider catalog loader.

Reads the static provider catalog (bundled ``lmi_providers/catalog/providers.yaml``
or an external JSON/YAML file named by ``LMI_PROVIDERS_CATALOG``) and validates
every entry into a :class:`CatalogEntry`.

Document Shape
--------------

.. code-block:: yaml

    providers:
      openai:
        name: OpenAI
        base_url: https://api.openai.com/v1
        env_key: OPENAI_API_KEY
      ollama:
        name: Ollama
        base_url: http://localhost:11434/v1

A bare mapping of keys to entries (no ``providers`` wrapper) is accepted too.
Keys must be valid TOML bare keys (``[A-Za-z0-9_-]+``) because they are written
verbatim into the host configuration.

Failure Modes
-------------
Any unreadable file, malformed document, invalid key or invalid entry raises
:class:`ConfigurationError`; the loader never returns a partial catalog.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from ..base.dto.catalog_entry import CatalogEntry
from ..base.errors import ConfigurationError
from ..config import get_settings
from ..config.defaults import CATALOG_RESOURCE_NAME

_KEY_RE = re.compile(r"[A-Za-z0-9_-]+")


def default_catalog_path() -> Path:
    """Return the bundled catalog path (``lmi_providers/catalog/providers.yaml``).

    Computed relative to this file so the working directory never matters.
    """
    # parents[0] - registry/
    # parents[1] - lmi_providers/
    return Path(__file__).resolve().parents[1] / "catalog" / CATALOG_RESOURCE_NAME


def _read_document(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot read provider catalog: {exc}", source=str(path)) from exc
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"malformed provider catalog: {exc}", source=str(path)) from exc


def format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "entry"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def parse_catalog(data: Any, *, source: Optional[str] = None) -> Dict[str, CatalogEntry]:
    """Validate a decoded catalog document.

    Parameters
    ----------
    data:
        Decoded JSON/YAML document: ``{"providers": {...}}`` or a bare mapping.
    source:
        Optional origin (file path) attached to raised errors.

    Returns
    -------
    Dict[str, CatalogEntry]
        Entries keyed by provider key, in document order.
    """
    if isinstance(data, Mapping) and isinstance(data.get("providers"), Mapping):
        data = data["providers"]
    if not isinstance(data, Mapping):
        raise ConfigurationError("provider catalog must be a mapping of provider keys", source=source)

    catalog: Dict[str, CatalogEntry] = {}
    for key, raw in data.items():
        if not isinstance(key, str) or not _KEY_RE.fullmatch(key):
            raise ConfigurationError(f"invalid provider key: {key!r}", source=source)
        if isinstance(raw, CatalogEntry):
            catalog[key] = raw
            continue
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"catalog entry '{key}' must be a mapping", source=source)
        try:
            catalog[key] = CatalogEntry.model_validate(dict(raw))
        except ValidationError as exc:
            raise ConfigurationError(
                f"invalid catalog entry '{key}': {format_validation_error(exc)}", source=source
            ) from exc
    return catalog


def load_catalog(path: str | Path | None = None) -> Dict[str, CatalogEntry]:
    """Load and validate the provider catalog.

    Resolution order: explicit ``path`` -> ``LMI_PROVIDERS_CATALOG`` -> bundled
    ``providers.yaml``.
    """
    if path is None:
        path = get_settings().catalog_path or default_catalog_path()
    resolved = Path(path).expanduser()
    return parse_catalog(_read_document(resolved), source=str(resolved))


__all__ = ["default_catalog_path", "format_validation_error", "parse_catalog", "load_catalog"]
