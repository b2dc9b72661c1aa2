"""Utility helpers shared by the render configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from apidoc_pages.errors import ConfigError


def _as_bool(key: str, value: object, default: bool) -> bool:
    """Return ``value`` as a bool, rejecting anything but true/false."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    msg = f"'{key}' must be true or false; got {value!r}."
    raise ConfigError(msg)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_packages(value: str | list[object] | None) -> tuple[str, ...]:
    """Normalize ``no_qualifier`` into package names.

    Accepts a colon-separated string (``pkg:other.pkg``) or a list.
    """
    if isinstance(value, str):
        return tuple(segment.strip() for segment in value.split(":") if segment.strip())
    if isinstance(value, list):
        normalized: list[str] = []
        for segment in value:
            text = str(segment).strip()
            if text:
                normalized.append(text)
        return tuple(normalized)
    if value is None:
        return ()
    msg = f"'no_qualifier' must be a list or colon-separated string; got {value!r}."
    raise ConfigError(msg)


def _normalize_labels(value: object | None) -> dict[str, str]:
    """Return label overrides as a plain ``str`` mapping."""
    if value is None:
        return {}
    if not isinstance(value, typ.Mapping):
        msg = "'labels' must be a mapping of label keys to text."
        raise ConfigError(msg)
    return {str(key): str(text) for key, text in value.items()}


def _resolve_path(value: object | None, base_dir: Path, default: Path) -> Path:
    """Resolve ``value`` relative to the configuration file's directory."""
    if value is None:
        return default
    path = Path(str(value))
    return path if path.is_absolute() else base_dir / path


__all__ = [
    "_as_bool",
    "_normalize_labels",
    "_normalize_packages",
    "_optional_str",
    "_resolve_path",
]
