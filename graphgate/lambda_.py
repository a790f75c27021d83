"""A small builder for expression trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .expression import (
    ContextPath,
    ContextValue,
    EqualTo,
    Expression,
    Http,
    Input,
    Literal,
    UnsafeJS,
)
from .request_template import RequestTemplate


@dataclass(frozen=True)
class Lambda:
    """Wraps an :class:`Expression` and composes it with others."""

    expression: Expression

    def eq(self, other: Lambda) -> Lambda:
        """Compare this expression's result with ``other``'s."""
        return Lambda(EqualTo(self.expression, other.expression))

    def to_unsafe_js(self, script: str) -> Lambda:
        return Lambda(UnsafeJS(self.expression, script))

    def to_input_path(self, path: Sequence[str]) -> Lambda:
        """Select the value at ``path`` within this expression's result."""
        return Lambda(Input(self.expression, tuple(path)))

    @classmethod
    def context(cls) -> Lambda:
        return cls(ContextValue())

    @classmethod
    def context_field(cls, name: str) -> Lambda:
        return cls(ContextPath((name,)))

    @classmethod
    def context_path(cls, path: Sequence[str]) -> Lambda:
        return cls(ContextPath(tuple(path)))

    @classmethod
    def from_request_template(cls, template: RequestTemplate) -> Lambda:
        return cls(Http(template))

    @classmethod
    def literal(cls, value: Any) -> Lambda:
        return cls(Literal(value))