"""Mustache-style templates with ``{{a.b}}`` path expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable

from .json_like import path_string as _json_path_string

_SPACE = "[ \t\r\n]*"
_NAME = _SPACE + "[A-Za-z][A-Za-z0-9]*" + _SPACE
_EXPRESSION = re.compile(r"\{\{(" + _NAME + r"(?:\." + _NAME + r")*)\}\}")


@dataclass(frozen=True)
class Literal:
    """Plain text copied into the output unchanged."""

    text: str


@dataclass(frozen=True)
class Expression:
    """A dotted path looked up in the rendering context."""

    parts: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(self.parts))


Segment = Literal | Expression


@dataclass(frozen=True)
class Mustache:
    """A parsed template: a sequence of literal and expression segments."""

    segments: tuple[Segment, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))

    @classmethod
    def parse(cls, text: str) -> Mustache:
        """Parse ``text``; if it holds no valid segment, it becomes one literal."""
        segments: list[Segment] = []
        pos = 0
        while pos < len(text):
            match = _EXPRESSION.match(text, pos)
            if match:
                parts = tuple(name.strip(" \t\r\n") for name in match.group(1).split("."))
                segments.append(Expression(parts))
                pos = match.end()
            elif text[pos] != "{":
                end = text.find("{", pos)
                if end == -1:
                    end = len(text)
                segments.append(Literal(text[pos:end]))
                pos = end
            else:
                break
        if not segments:
            return cls((Literal(text),))
        return cls(tuple(segments))

    def is_const(self) -> bool:
        """True when the template holds no expression."""
        return not any(isinstance(segment, Expression) for segment in self.segments)

    def render(self, ctx: Any) -> str:
        """Render with ``ctx.path_string`` or, for plain JSON-like values, a path lookup."""
        lookup = getattr(ctx, "path_string", None)
        if not callable(lookup):
            def lookup(parts: tuple[str, ...]) -> str | None:
                return _json_path_string(ctx, parts)

        return "".join(
            segment.text if isinstance(segment, Literal) else (lookup(segment.parts) or "")
            for segment in self.segments
        )

    def render_graphql(self, ctx: Any) -> str:
        """Render with ``ctx.path_graphql``, giving GraphQL literals for expressions."""
        return "".join(
            segment.text
            if isinstance(segment, Literal)
            else (ctx.path_graphql(segment.parts) or "")
            for segment in self.segments
        )

    def expression_segments(self) -> list[tuple[str, ...]]:
        """The paths of all expressions, in order."""
        return [segment.parts for segment in self.segments if isinstance(segment, Expression)]

    @classmethod
    def _of(cls, segments: Iterable[Segment]) -> Mustache:
        return cls(tuple(segments))