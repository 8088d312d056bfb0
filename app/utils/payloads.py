"""Lookups over loosely-typed JSON payloads from the wallet side."""
from __future__ import annotations

from typing import Any, Iterable, Sequence

Path = Sequence[str]


def is_present(value: Any) -> bool:
    """Treat ``None`` and empty strings as absent."""

    return value is not None and value != ""


def dig(payload: Any, path: Path) -> Any:
    """Walk ``path`` through nested mappings, returning ``None`` on any miss."""

    current = payload
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def first_present(payload: Any, paths: Iterable[Path], default: Any = None) -> Any:
    """Return the first present value among ``paths`` or ``default``."""

    for path in paths:
        value = dig(payload, path)
        if is_present(value):
            return value
    return default


__all__ = ["Path", "is_present", "dig", "first_present"]
