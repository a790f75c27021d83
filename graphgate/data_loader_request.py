"""A request used as a batching key, compared by URL, body and chosen headers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from .httpmsg import Method, Request


@dataclass(frozen=True, eq=False)
class DataLoaderRequest:
    """Wraps a :class:`Request`; ``headers`` names the headers that take part in the key."""

    request: Request
    headers: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        names: Iterable[str] = self.headers
        object.__setattr__(self, "headers", frozenset(names))

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def method(self) -> Method:
        return self.request.method

    @property
    def body(self) -> bytes | None:
        return self.request.body

    def _key(self) -> tuple[Any, ...]:
        selected = tuple(
            (name, self.request.headers[name.lower()])
            for name in sorted(self.headers)
            if name.lower() in self.request.headers
        )
        return (self.request.url, self.request.body, selected)

    def to_request(self) -> Request:
        """An independent copy of the wrapped request."""
        return replace(self.request, headers=dict(self.request.headers))

    def __hash__(self) -> int:
        return hash(self._key())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataLoaderRequest):
            return NotImplemented
        return self._key() == other._key()