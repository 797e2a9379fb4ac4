"""Shared type aliases and small typing helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Annotated

from msgspec import Meta

type PathLike = str | Path

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | Mapping[str, JsonValue] | Sequence[JsonValue]

AbbreviatedLength = Annotated[
    int,
    Meta(
        ge=4,
        le=39,
        title="Abbreviated length",
        description="Length of an abbreviated commit identifier.",
    ),
]
NonEmptyStr = Annotated[str, Meta(min_length=1)]


def ensure_path(p: PathLike) -> Path:
    """Return a normalized ``Path`` for the provided value.

    Parameters
    ----------
    p:
        String or ``Path`` input to normalize.

    Returns
    -------
    pathlib.Path
        Normalized path instance.
    """
    return p if isinstance(p, Path) else Path(p)


__all__ = [
    "AbbreviatedLength",
    "JsonPrimitive",
    "JsonValue",
    "NonEmptyStr",
    "PathLike",
    "ensure_path",
]
