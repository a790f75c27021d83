"""Request templates whose URL, query, headers and body are mustache templates."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable
from urllib.parse import parse_qsl, urlsplit

from .httpmsg import Method, Request
from .json_schema import JsonSchema
from .mustache import Mustache

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
_QUERY_SET = frozenset(" \"#<>'")
_PATH_SET = frozenset(" \"#<>?`{}")


def _percent_encode(text: str, reserved: frozenset[str]) -> str:
    out = []
    for char in text:
        code = ord(char)
        if code < 0x20 or code >= 0x7F or char in reserved:
            out.extend(f"%{byte:02X}" for byte in char.encode("utf-8"))
        else:
            out.append(char)
    return "".join(out)


@dataclass
class _Url:
    scheme: str
    authority: str | None
    path: str
    query: str | None
    fragment: str | None

    @classmethod
    def parse(cls, text: str) -> _Url:
        text = text.strip(" \t\r\n\x00\x0b\x0c")
        colon = text.find(":")
        if colon <= 0 or not _SCHEME.fullmatch(text[:colon]):
            raise ValueError(f"invalid URL, relative URL without a base: {text!r}")
        scheme = text[:colon].lower()
        before_fragment, hash_mark, _ = text.partition("#")
        has_query = "?" in before_fragment
        parts = urlsplit(text)
        has_authority = text[colon + 1:].startswith("//")
        authority: str | None = None
        if scheme in _DEFAULT_PORTS:
            host = parts.hostname
            if not host:
                raise ValueError(f"invalid URL, empty host: {text!r}")
            port = parts.port
            if port == _DEFAULT_PORTS[scheme]:
                port = None
            if ":" in host:
                host = f"[{host}]"
            userinfo, at, _ = parts.netloc.rpartition("@")
            authority = (userinfo + at if at else "") + host
            if port is not None:
                authority += f":{port}"
            path = parts.path or "/"
        else:
            authority = parts.netloc if has_authority else None
            path = parts.path
        return cls(
            scheme=scheme,
            authority=authority,
            path=_percent_encode(path, _PATH_SET),
            query=_percent_encode(parts.query, _QUERY_SET) if has_query else None,
            fragment=parts.fragment if hash_mark else None,
        )

    def __str__(self) -> str:
        text = f"{self.scheme}:"
        if self.authority is not None:
            text += f"//{self.authority}"
        text += self.path
        if self.query is not None:
            text += f"?{self.query}"
        if self.fragment is not None:
            text += f"#{self.fragment}"
        return text


def _valid_header_value(value: str) -> bool:
    return all(char == "\t" or (ord(char) >= 0x20 and ord(char) != 0x7F) for char in value)


@dataclass(frozen=True)
class RequestTemplate:
    """A request whose parts are evaluated against a context by :meth:`to_request`."""

    root_url: Mustache
    query: tuple[tuple[str, Mustache], ...] = ()
    method: Method = Method.GET
    headers: tuple[tuple[str, Mustache], ...] = ()
    body: Mustache | None = None
    output: JsonSchema = field(default_factory=JsonSchema)

    def __post_init__(self) -> None:
        object.__setattr__(self, "query", tuple(tuple(pair) for pair in self.query))
        object.__setattr__(self, "headers", tuple(tuple(pair) for pair in self.headers))

    @classmethod
    def from_url(cls, root_url: str) -> RequestTemplate:
        """A GET template for ``root_url``, which may hold mustache expressions."""
        return cls(Mustache.parse(root_url))

    def is_const(self) -> bool:
        """True when no part of the template holds an expression."""
        return (
            self.root_url.is_const()
            and (self.body is None or self.body.is_const())
            and all(value.is_const() for _, value in self.query)
            and all(value.is_const() for _, value in self.headers)
        )

    def _create_url(self, ctx: Any) -> str:
        url = _Url.parse(self.root_url.render(ctx))
        if not self.query and self.root_url.is_const():
            return str(url)
        base = [
            (name, value)
            for name, value in parse_qsl(url.query or "", keep_blank_values=True)
            if value
        ]
        extra = [(name, template.render(ctx)) for name, template in self.query]
        pairs = base + [(name, value) for name, value in extra if value]
        joined = "&".join(f"{name}={value}" for name, value in pairs)
        url.query = _percent_encode(joined, _QUERY_SET) if joined else None
        return str(url)

    def _create_headers(self, ctx: Any) -> dict[str, str]:
        headers: dict[str, str] = {}
        for name, template in self.headers:
            if not _HEADER_NAME.fullmatch(name):
                continue
            value = template.render(ctx)
            if _valid_header_value(value):
                headers[name.lower()] = value
        return headers

    def to_request(self, ctx: Any) -> Request:
        """Evaluate every template against ``ctx`` and build the request.

        Raises :class:`ValueError` if the rendered URL cannot be parsed.
        """
        url = self._create_url(ctx)
        headers = self._create_headers(ctx)
        headers["content-type"] = "application/json"
        forwarded: Iterable[tuple[str, str]] = (getattr(ctx, "headers", None) or {}).items()
        headers.update((name.lower(), value) for name, value in forwarded)
        body = None if self.body is None else self.body.render(ctx).encode("utf-8")
        return Request(method=self.method, url=url, headers=headers, body=body)