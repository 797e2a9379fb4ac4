"""Shared msgspec policy and helpers."""

from __future__ import annotations

import re
from typing import Any

import msgspec


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Base struct for strict contracts."""


_VALIDATION_RE = re.compile(r"^(?P<summary>.*?)(?:\s+-\s+at\s+`(?P<path>[^`]+)`)?$")


def convert_strict[T](payload: object, *, target_type: type[T]) -> T:
    """Convert a builtins payload into a strict msgspec type.

    Returns
    -------
    T
        Converted value.
    """
    return msgspec.convert(payload, type=target_type, strict=True)


def to_builtins(obj: Any) -> Any:
    """Return a builtins representation with string keys.

    Returns
    -------
    Any
        Builtins payload suitable for JSON rendering.
    """
    return msgspec.to_builtins(obj, str_keys=True)


def dumps_json(obj: Any, *, pretty: bool = False) -> str:
    """Encode an object as JSON text.

    Returns
    -------
    str
        JSON text.
    """
    raw = msgspec.json.encode(obj, order="deterministic")
    if pretty:
        raw = msgspec.json.format(raw, indent=2)
    return raw.decode("utf-8")


def validation_error_payload(exc: msgspec.ValidationError) -> dict[str, str]:
    """Normalize a msgspec ValidationError for diagnostics.

    Parameters
    ----------
    exc
        ValidationError raised by msgspec decoding/conversion.

    Returns
    -------
    dict[str, str]
        Normalized error payload containing type, summary, and optional path.
    """
    message = str(exc).strip()
    match = _VALIDATION_RE.match(message)
    payload: dict[str, str] = {"type": exc.__class__.__name__}
    if match:
        summary = (match.group("summary") or "").strip()
        if summary:
            payload["summary"] = summary
        path = match.group("path")
        if path:
            payload["path"] = path
        return payload
    payload["summary"] = message
    return payload


__all__ = [
    "StructBaseStrict",
    "convert_strict",
    "dumps_json",
    "to_builtins",
    "validation_error_payload",
]
