"""
ModelInfo DTO for ``list_models`` results.

Each invoker normalizes its backend's model listing to this shape before the
bridge serializes it, so hosts see one model schema for every provider.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class ModelInfo:
    """A single model listing entry.

    Attributes:
        id: Model identifier as accepted by ``chat_completion``.
        name: Human-friendly display name (defaults to ``id`` upstream).
        provider: Provider key owning this model.
        owned_by: Optional owner/organization reported by the backend.
        created: Optional creation timestamp (epoch seconds).
        capabilities: Opaque map of backend-specific details.
    """

    id: str
    name: str
    provider: str
    owned_by: Optional[str] = None
    created: Optional[int] = None
    capabilities: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


__all__ = ["ModelInfo"]
