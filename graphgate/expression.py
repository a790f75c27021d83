"""Expressions that resolvers evaluate against an evaluation context."""

from __future__ import annotations

import abc
import copy
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .evaluation_context import EvaluationContext
from .httpmsg import Request, Response, cache_policy
from .json_like import get_path
from .request_template import RequestTemplate
from .valid import ValidationError

log = logging.getLogger(__name__)


class EvaluationError(Exception):
    """Base class of the errors raised while evaluating an expression."""


class IOException(EvaluationError):
    """The upstream request could not be carried out."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"IOException: {self.message}"


class JSException(EvaluationError):
    """A script could not be run."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"JSException: {self.message}"


class APIValidationError(EvaluationError):
    """An upstream response did not match the expected output schema."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = list(errors)
        super().__init__(self.errors)

    def __str__(self) -> str:
        return f"APIValidationError: {self.errors!r}"


def _json_equal(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(
            _json_equal(left[key], right[key]) for key in left
        )
    left_list = isinstance(left, (list, tuple))
    right_list = isinstance(right, (list, tuple))
    if left_list or right_list:
        return (
            left_list
            and right_list
            and len(left) == len(right)
            and all(_json_equal(a, b) for a, b in zip(left, right))
        )
    return left == right


class Expression(abc.ABC):
    """A node of an expression tree."""

    @abc.abstractmethod
    async def eval(self, ctx: EvaluationContext) -> Any:
        """Evaluate this expression in ``ctx`` and return a JSON-like value."""


@dataclass(frozen=True)
class ContextValue(Expression):
    """The parent value of the resolver."""

    async def eval(self, ctx: EvaluationContext) -> Any:
        return ctx.value()


@dataclass(frozen=True)
class ContextPath(Expression):
    """The value found at ``path`` inside the parent value."""

    path: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))

    async def eval(self, ctx: EvaluationContext) -> Any:
        return ctx.path_value(self.path)


@dataclass(frozen=True)
class Literal(Expression):
    """A constant JSON-like value."""

    value: Any

    async def eval(self, ctx: EvaluationContext) -> Any:
        return copy.deepcopy(self.value)


@dataclass(frozen=True)
class EqualTo(Expression):
    """Whether two expressions evaluate to the same value."""

    left: Expression
    right: Expression

    async def eval(self, ctx: EvaluationContext) -> Any:
        left = await self.left.eval(ctx)
        right = await self.right.eval(ctx)
        return _json_equal(left, right)


@dataclass(frozen=True)
class Input(Expression):
    """The value at ``path`` inside the result of another expression."""

    input: Expression
    path: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))

    async def eval(self, ctx: EvaluationContext) -> Any:
        return get_path(await self.input.eval(ctx), self.path)


async def _execute(ctx: EvaluationContext, request: Request) -> Response:
    try:
        return await ctx.req_ctx.execute(request)
    except EvaluationError:
        raise
    except Exception as error:
        raise IOException(str(error)) from error


def _set_cache_control(ctx: EvaluationContext, response: Response) -> None:
    if ctx.req_ctx.enable_cache_control and response.is_success:
        policy = cache_policy(response)
        if policy is not None:
            ctx.req_ctx.set_cache_control(policy)


@dataclass(frozen=True)
class Http(Expression):
    """Call an upstream HTTP endpoint described by a request template."""

    req_template: RequestTemplate

    async def eval(self, ctx: EvaluationContext) -> Any:
        request = self.req_template.to_request(ctx)
        response = await _execute(ctx, request)
        if ctx.req_ctx.enable_http_validation:
            try:
                self.req_template.output.validate(response.body).to_result()
            except ValidationError as error:
                raise APIValidationError([cause.message for cause in error]) from error
        _set_cache_control(ctx, response)
        return response.body


@dataclass(frozen=True)
class UnsafeJS(Expression):
    """Run a script on the result of another expression; script execution is disabled."""

    input: Expression
    script: str

    async def eval(self, ctx: EvaluationContext) -> Any:
        raise JSException("JS execution is disabled")