"""Value coercion helpers shared by the renderer configuration loader."""

from __future__ import annotations

import typing as typ

from .models import RendererConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(value: object, field: str) -> str:
    """Return ``value`` when it is a string, otherwise fail for ``field``."""
    if not isinstance(value, str):
        msg = f"'{field}' must be a string, got {type(value).__name__}."
        raise RendererConfigError(msg)
    return value


def _require_bool(value: object, field: str) -> bool:
    if not isinstance(value, bool):
        msg = f"'{field}' must be true or false."
        raise RendererConfigError(msg)
    return value


def _require_positive_int(value: object, field: str) -> int:
    """Return ``value`` as an int of at least one."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"'{field}' must be a positive integer."
        raise RendererConfigError(msg)
    return value


def _str_list(value: object | None, field: str) -> list[str]:
    """Normalize a string or list of strings into a list of non-empty strings."""
    match value:
        case None:
            return []
        case str():
            return [value] if value.strip() else []
        case list():
            items = typ.cast("list[object]", value)
            normalized: list[str] = []
            for item in items:
                text = _optional_str(item)
                if text:
                    normalized.append(text)
            return normalized
        case _:
            msg = f"'{field}' must be a string or a list of strings."
            raise RendererConfigError(msg)


__all__ = [
    "_optional_str",
    "_require_bool",
    "_require_positive_int",
    "_require_str",
    "_str_list",
]
