"""Per-request state: HTTP client, forwarded headers and cache-control tracking."""

from __future__ import annotations

import abc
import asyncio
import json
import logging
import threading
import urllib.request
from dataclasses import dataclass, field
from typing import Any

from .httpmsg import Cachability, CacheControl, Request, Response

log = logging.getLogger(__name__)


class HttpClient(abc.ABC):
    """Something that can send a :class:`Request` and return a :class:`Response`."""

    @abc.abstractmethod
    async def execute(self, request: Request) -> Response:
        """Send ``request`` and decode the response."""


class _UrllibClient(HttpClient):
    def __init__(self, timeout: float = 60.0) -> None:
        self._timeout = timeout

    async def execute(self, request: Request) -> Response:
        return await asyncio.to_thread(self._send, request)

    def _send(self, request: Request) -> Response:
        log.info("%s %s", request.method.value, request.url)
        outgoing = urllib.request.Request(
            request.url,
            data=request.body,
            headers=dict(request.headers),
            method=request.method.value,
        )
        with urllib.request.urlopen(outgoing, timeout=self._timeout) as reply:
            payload = reply.read()
            return Response(
                status=reply.status,
                headers=dict(reply.headers.items()),
                body=json.loads(payload),
            )


@dataclass
class RequestContext:
    """State shared by all resolvers while one incoming request is served."""

    http_client: HttpClient = field(default_factory=_UrllibClient)
    req_headers: dict[str, str] = field(default_factory=dict)
    vars: dict[str, str] = field(default_factory=dict)
    enable_http_validation: bool = False
    enable_cache_control: bool = False
    _min_max_age: int | None = field(default=None, init=False, repr=False)
    _cache_public: bool | None = field(default=None, init=False, repr=False)
    _lock: Any = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.req_headers = {name.lower(): value for name, value in self.req_headers.items()}

    async def execute(self, request: Request) -> Response:
        return await self.http_client.execute(request)

    @property
    def min_max_age(self) -> int | None:
        with self._lock:
            return self._min_max_age

    @property
    def cache_public(self) -> bool | None:
        with self._lock:
            return self._cache_public

    def set_cache_public_false(self) -> None:
        with self._lock:
            self._cache_public = False

    def update_max_age(self, max_age: int) -> None:
        """Keep the smallest max-age seen so far."""
        with self._lock:
            if self._min_max_age is None or max_age < self._min_max_age:
                self._min_max_age = max_age

    def set_cache_visibility(self, cachability: Cachability | None) -> None:
        if cachability is Cachability.PRIVATE:
            self.set_cache_public_false()

    def set_cache_control(self, policy: CacheControl) -> None:
        """Fold an upstream response's cache policy into this request's state."""
        if policy.max_age is not None:
            self.update_max_age(int(policy.max_age.total_seconds()))
        self.set_cache_visibility(policy.cachability)
        if policy.cachability is Cachability.NO_CACHE:
            self.update_max_age(-1)