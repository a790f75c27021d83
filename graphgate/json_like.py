"""Navigation, grouping and rendering helpers for JSON-like Python values."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

_INDEX = re.compile(r"\+?[0-9]+")


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def get_key(value: Any, key: str) -> Any:
    """Return ``value[key]`` if ``value`` is an object holding ``key``, else ``None``."""
    if isinstance(value, Mapping):
        return value.get(key)
    return None


def get_path(value: Any, path: Sequence[str]) -> Any:
    """Walk ``path`` through objects and lists; ``None`` when it leads nowhere."""
    current = value
    for token in path:
        if _is_list(current):
            if not _INDEX.fullmatch(token):
                return None
            index = int(token)
            if index >= len(current):
                return None
            current = current[index]
        elif isinstance(current, Mapping):
            if token not in current:
                return None
            current = current[token]
        else:
            return None
    return current


def gather_path_matches(root: Any, path: Sequence[str]) -> list[tuple[Any, Any]]:
    """Collect ``(value, parent)`` pairs at ``path``, descending into every list."""
    matches: list[tuple[Any, Any]] = []
    _gather(root, list(path), matches)
    return matches


def _gather(root: Any, path: list[str], matches: list[tuple[Any, Any]]) -> None:
    if _is_list(root):
        for item in root:
            _gather(item, path, matches)
    elif path and isinstance(root, Mapping) and path[0] in root:
        value = root[path[0]]
        tail = path[1:]
        if tail:
            _gather(value, tail, matches)
        else:
            matches.append((value, root))


def _format_float(number: float) -> str:
    if number == 0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"
    if number.is_integer() and abs(number) < 1e16:
        return str(int(number))
    return format(Decimal(repr(number)), "f")


def _key_string(key: Any) -> str | None:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return None
    if isinstance(key, (int, float)):
        return _format_float(float(key))
    return None


def group_by_key(pairs: Sequence[tuple[Any, Any]]) -> dict[str, list[Any]]:
    """Group values by their string or numeric key; other keys are dropped."""
    groups: dict[str, list[Any]] = {}
    for key, value in pairs:
        name = _key_string(key)
        if name is not None:
            groups.setdefault(name, []).append(value)
    return groups


def group_by(value: Any, path: Sequence[str]) -> dict[str, list[Any]]:
    """Group the objects found along ``path`` by the value at its end."""
    return group_by_key(gather_path_matches(value, path))


def _number_string(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    return repr(value)


def path_string(value: Any, path: Sequence[str]) -> str | None:
    """Render the scalar at ``path`` as plain text; ``None`` for anything else."""
    found = get_path(value, path)
    if isinstance(found, str):
        return found
    if isinstance(found, bool):
        return "true" if found else "false"
    if isinstance(found, (int, float)):
        return _number_string(found)
    return None


_ESCAPES = {"\r": "\\r", "\n": "\\n", "\t": "\\t", '"': '\\"', "\\": "\\\\"}


def _quote(text: str) -> str:
    out = []
    for char in text:
        if char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif ord(char) < 0x20 or 0x7F <= ord(char) <= 0x9F:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


def to_graphql(value: Any) -> str:
    """Render ``value`` as a GraphQL literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number_string(value)
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, Mapping):
        fields = ", ".join(f"{name}: {to_graphql(item)}" for name, item in value.items())
        return "{" + fields + "}"
    if _is_list(value):
        return "[" + ", ".join(to_graphql(item) for item in value) + "]"
    raise TypeError(f"cannot render {type(value).__name__} as GraphQL")