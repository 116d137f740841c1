"""Response Envelope: the single JSON shape every endpoint answers with.

Invariants:
    - success=True never carries "error"
    - success=False always carries "error" and never "data"
    - Optional keys are omitted, not serialized as null
"""

from typing import Any

_UNSET: Any = object()


def success(data: Any = _UNSET, meta: Any = None) -> dict:
    """Build a success envelope. data=None is kept (JSON null), absent data is omitted."""
    envelope: dict[str, Any] = {"success": True}
    if data is not _UNSET:
        envelope["data"] = data
    if meta is not None:
        envelope["meta"] = meta
    return envelope


def failure(error: str, meta: Any = None) -> dict:
    """Build a failure envelope."""
    envelope: dict[str, Any] = {"success": False, "error": error}
    if meta is not None:
        envelope["meta"] = meta
    return envelope
