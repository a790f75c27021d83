"""HTTP request and response values and cache-control helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Iterable

_SECONDS = re.compile(r"\+?[0-9]+")


class Method(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"
    TRACE = "TRACE"


def _lower_keys(headers: Any) -> dict[str, str]:
    return {str(name).lower(): value for name, value in dict(headers).items()}


@dataclass
class Request:
    """An outgoing HTTP request; header names are stored in lower case."""

    method: Method = Method.GET
    url: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def __post_init__(self) -> None:
        self.headers = _lower_keys(self.headers)
        if isinstance(self.body, str):
            self.body = self.body.encode()


@dataclass
class Response:
    """A decoded HTTP response with a JSON-like body."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None

    def __post_init__(self) -> None:
        self.headers = _lower_keys(self.headers)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


class Cachability(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    NO_CACHE = "no-cache"
    ONLY_IF_CACHED = "only-if-cached"


_DURATION_FIELDS = {
    "max-age": "max_age",
    "s-maxage": "s_max_age",
    "max-stale": "max_stale",
    "min-fresh": "min_fresh",
}

_FLAG_FIELDS = {
    "must-revalidate": "must_revalidate",
    "proxy-revalidate": "proxy_revalidate",
    "immutable": "immutable",
    "no-store": "no_store",
    "no-transform": "no_transform",
}


@dataclass
class CacheControl:
    """The directives of a ``Cache-Control`` header."""

    cachability: Cachability | None = None
    max_age: timedelta | None = None
    s_max_age: timedelta | None = None
    max_stale: timedelta | None = None
    min_fresh: timedelta | None = None
    must_revalidate: bool = False
    proxy_revalidate: bool = False
    immutable: bool = False
    no_store: bool = False
    no_transform: bool = False

    @classmethod
    def parse(cls, value: str) -> CacheControl | None:
        """Parse a header value; ``None`` if a duration directive is malformed."""
        policy = cls()
        for token in value.split(","):
            pieces = [piece.strip() for piece in token.split("=")]
            key = pieces[0].lower()
            argument = pieces[1] if len(pieces) > 1 else None
            if key in _DURATION_FIELDS:
                if argument is None or not _SECONDS.fullmatch(argument):
                    return None
                setattr(policy, _DURATION_FIELDS[key], timedelta(seconds=int(argument)))
            elif key in _FLAG_FIELDS:
                setattr(policy, _FLAG_FIELDS[key], True)
            else:
                try:
                    policy.cachability = Cachability(key)
                except ValueError:
                    pass
        return policy


def cache_policy(response: Response) -> CacheControl | None:
    """The parsed ``Cache-Control`` header of ``response``, if any."""
    header = response.headers.get("cache-control")
    if header is None:
        return None
    return CacheControl.parse(header)


def max_age(response: Response) -> timedelta | None:
    policy = cache_policy(response)
    return None if policy is None else policy.max_age


def cache_visibility(response: Response) -> str:
    """``public``, ``private`` or ``no-cache``; empty for anything else."""
    policy = cache_policy(response)
    cachability = None if policy is None else policy.cachability
    if cachability in (Cachability.PUBLIC, Cachability.PRIVATE, Cachability.NO_CACHE):
        return cachability.value
    return ""


def min_ttl(responses: Iterable[Response]) -> int:
    """The smallest max-age in seconds among ``responses``, or -1 if none has one."""
    ttls = [int(age.total_seconds()) for age in map(max_age, responses) if age is not None]
    return min(ttls, default=-1)