"""
Pydantic DTO for one raw provider catalog entry.

Catalog documents (bundled YAML or an external JSON/YAML file) map a provider
key to an entry of this shape::

    deepseek:
      name: DeepSeek
      base_url: https://api.deepseek.com/v1
      env_key: DEEPSEEK_API_KEY
      requires_openai_auth: false

Only ``name`` is required. Empty strings for ``base_url``/``env_key`` mean
"absent". Unknown keys (for example a legacy ``wire_api``) are ignored: the
registry assigns the wire protocol itself.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogEntry(BaseModel):
    """Validated raw metadata for one catalog provider."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., min_length=1)
    base_url: Optional[str] = None
    env_key: Optional[str] = None
    requires_openai_auth: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("base_url", "env_key", mode="before")
    @classmethod
    def _blank_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


__all__ = ["CatalogEntry"]
