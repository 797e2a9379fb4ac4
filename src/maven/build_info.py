"""Read the build-metadata record written by the last build."""

from __future__ import annotations

import logging
import re
import string
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from errors import BuildInfoMissingError, ConfigurationError
from utils.file_io import read_text

_LOGGER = logging.getLogger(__name__)

DEFAULT_BUILD_INFO_PATH = "target/classes/build-info.properties"
DEFAULT_COMMIT_KEY = "build.number"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_COMMENT_PREFIXES = "#!"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


@dataclass(frozen=True)
class BuildInfo:
    """Key/value properties of the last build."""

    path: Path
    properties: Mapping[str, str]

    def commit(self, key: str = DEFAULT_COMMIT_KEY) -> str:
        """Return the commit recorded under ``key``.

        Returns
        -------
        str
            Recorded commit identifier.

        Raises
        ------
        ConfigurationError
            Raised when the key is absent or empty.
        """
        value = self.properties.get(key, "").strip()
        if not value:
            msg = f"cannot find {key} in {self.path}"
            raise ConfigurationError(msg)
        return value


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java ``.properties`` text into a mapping.

    Follows ``java.util.Properties.load``: leading whitespace is ignored,
    ``#`` and ``!`` start comment lines, a key ends at the first unescaped
    ``=``, ``:`` or whitespace, and a line ending in an odd number of
    backslashes continues on the next line. ``\\t``, ``\\n``, ``\\r``,
    ``\\f`` and ``\\uXXXX`` escapes are decoded; any other escaped character
    stands for itself. A repeated key keeps its last value.

    Returns
    -------
    dict[str, str]
        Parsed properties.
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        properties[key] = value
    return properties


def _logical_lines(text: str) -> Iterator[str]:
    pending: str | None = None
    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in _COMMENT_PREFIXES):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        continued = trailing % 2 == 1
        if continued:
            line = line[:-1]
        pending = line if pending is None else pending + line
        if not continued:
            yield pending
            pending = None
    if pending is not None:
        yield pending


def _split_entry(line: str) -> tuple[str, str]:
    end = 0
    escaped = False
    while end < len(line):
        char = line[end]
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _SEPARATORS or char in _WHITESPACE:
            break
        end += 1
    rest = line[end:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(line[:end]), _unescape(rest)


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text
    chars: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        index += 1
        if char != "\\":
            chars.append(char)
            continue
        if index == len(text):
            break
        code = text[index]
        index += 1
        if code != "u":
            chars.append(_ESCAPES.get(code, code))
            continue
        digits = text[index : index + 4]
        if len(digits) != 4 or any(digit not in string.hexdigits for digit in digits):
            msg = f"Malformed \\uXXXX escape in {text!r}."
            raise ValueError(msg)
        chars.append(chr(int(digits, 16)))
        index += 4
    return "".join(chars)


def read_build_info(path: Path) -> BuildInfo:
    """Load the build-metadata record at ``path``.

    Returns
    -------
    BuildInfo
        Parsed record.

    Raises
    ------
    BuildInfoMissingError
        Raised when no record exists.
    ConfigurationError
        Raised when the record cannot be parsed.
    """
    if not path.is_file():
        msg = f"no build metadata found at {path}"
        raise BuildInfoMissingError(msg)
    try:
        properties = parse_properties(read_text(path))
    except (OSError, ValueError) as exc:
        msg = f"cannot parse build metadata {path}: {exc}"
        raise ConfigurationError(msg) from exc
    _LOGGER.debug("Loaded %d build properties from %s", len(properties), path)
    return BuildInfo(path=path, properties=properties)


__all__ = [
    "DEFAULT_BUILD_INFO_PATH",
    "DEFAULT_COMMIT_KEY",
    "BuildInfo",
    "parse_properties",
    "read_build_info",
]
