"""The context resolvers evaluate in, and path lookups for templates."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Iterable, Protocol

from .json_like import to_graphql
from .request_context import RequestContext

log = logging.getLogger(__name__)

_INDEX = re.compile(r"\+?[0-9]+")
_MISSING = object()


@dataclass(frozen=True)
class SelectionField:
    """A field selected in a GraphQL operation, with its arguments and sub-selection."""

    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)
    selection_set: tuple[SelectionField, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "selection_set", tuple(self.selection_set))


class ResolverContextLike(Protocol):
    """What the evaluator needs from the GraphQL resolver it runs in."""

    def value(self) -> Any: ...

    def args(self) -> Mapping[str, Any] | None: ...

    def field(self) -> SelectionField | None: ...

    def add_error(self, error: Any) -> None: ...


@dataclass
class EmptyResolverContext:
    """A resolver context with, by default, no parent value, no arguments and no field."""

    parent_value: Any = None
    arguments: Mapping[str, Any] | None = None
    selected: SelectionField | None = None
    errors: list[Any] = field(default_factory=list)

    def value(self) -> Any:
        return self.parent_value

    def args(self) -> Mapping[str, Any] | None:
        return self.arguments

    def field(self) -> SelectionField | None:
        return self.selected

    def add_error(self, error: Any) -> None:
        """Keep the error so callers can inspect it."""
        self.errors.append(error)


def _lookup(value: Any, path: Iterable[str]) -> Any:
    current = value
    for name in path:
        if isinstance(current, Mapping):
            current = current.get(name, _MISSING)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes, bytearray)):
            if not _INDEX.fullmatch(name):
                return _MISSING
            index = int(name)
            if index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current


def get_path_value(value: Any, path: Iterable[str]) -> Any:
    """Follow ``path`` through objects and lists; ``None`` when nothing is there."""
    found = _lookup(value, path)
    return None if found is _MISSING else found


def _format_arguments(selected: SelectionField) -> str:
    try:
        arguments = dict(selected.arguments)
    except (TypeError, ValueError) as error:
        log.warning(
            "Failed to resolve arguments for field %s, due to error: %s", selected.name, error
        )
        arguments = {}
    if not arguments:
        return ""
    rendered = ",".join(f"{name}: {to_graphql(value)}" for name, value in arguments.items())
    return f"({rendered})"


def _format_field(selected: SelectionField) -> str:
    head = f"{selected.name}{_format_arguments(selected)}"
    nested = format_selection_set(selected.selection_set)
    return f"{head} {nested}" if nested is not None else head


def format_selection_set(fields: Iterable[SelectionField]) -> str | None:
    """Render a selection set as GraphQL, or ``None`` if it is empty."""
    rendered = [_format_field(selected) for selected in fields]
    if not rendered:
        return None
    return "{ " + " ".join(rendered) + " }"


def _number_text(value: int | float) -> str:
    return str(value) if isinstance(value, int) else repr(value)


def _convert_value(value: Any) -> str | None:
    if value is _MISSING or value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number_text(value)
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return None


@dataclass
class EvaluationContext:
    """Request state plus the resolver context an expression is evaluated in."""

    req_ctx: RequestContext = field(default_factory=RequestContext)
    graphql_ctx: Any = field(default_factory=EmptyResolverContext)
    timeout: timedelta = timedelta(milliseconds=5)

    def value(self) -> Any:
        return self.graphql_ctx.value()

    def _arg(self, path: Sequence[str]) -> Any:
        args = self.graphql_ctx.args()
        if args is None or not path or path[0] not in args:
            return _MISSING
        return _lookup(args[path[0]], path[1:])

    def _path_value(self, path: Sequence[str]) -> Any:
        root = self.graphql_ctx.value()
        if root is None:
            return _MISSING
        return _lookup(root, path)

    def arg(self, path: Sequence[str]) -> Any:
        """The argument value at ``path``, or ``None``."""
        found = self._arg(path)
        return None if found is _MISSING else found

    def path_value(self, path: Sequence[str]) -> Any:
        """The parent value at ``path``, or ``None``."""
        found = self._path_value(path)
        return None if found is _MISSING else found

    @property
    def headers(self) -> dict[str, str]:
        return self.req_ctx.req_headers

    def header(self, key: str) -> str | None:
        return self.req_ctx.req_headers.get(key.lower())

    def var(self, key: str) -> str | None:
        return self.req_ctx.vars.get(key)

    def add_error(self, error: Any) -> None:
        self.graphql_ctx.add_error(error)

    def selection_set(self) -> str | None:
        """The current field's selection set rendered as GraphQL."""
        selected = self.graphql_ctx.field()
        if selected is None:
            return None
        return format_selection_set(selected.selection_set)

    def path_string(self, path: Sequence[str]) -> str | None:
        """Resolve ``value.*``, ``args.*``, ``headers.*`` or ``vars.*`` as plain text."""
        if len(path) < 2:
            return None
        head, tail = path[0], list(path[1:])
        if head == "value":
            return _convert_value(self._path_value(tail))
        if head == "args":
            return _convert_value(self._arg(tail))
        if head == "headers":
            return self.header(tail[0])
        if head == "vars":
            return self.var(tail[0])
        return None

    def path_graphql(self, path: Sequence[str]) -> str | None:
        """Resolve a path like :meth:`path_string`, rendered as a GraphQL literal."""
        if len(path) < 2:
            return None
        head, tail = path[0], list(path[1:])
        if head in ("value", "args"):
            found = self._path_value(tail) if head == "value" else self._arg(tail)
            return None if found is _MISSING else to_graphql(found)
        if head in ("headers", "vars"):
            found = self.header(tail[0]) if head == "headers" else self.var(tail[0])
            return None if found is None else f'"{found}"'
        return None