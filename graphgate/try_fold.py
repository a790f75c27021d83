"""Composable folding operations that may fail with accumulated errors."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, TypeVar

from .valid import Valid

I = TypeVar("I")  # noqa: E741
O = TypeVar("O")  # noqa: E741
O1 = TypeVar("O1")
E = TypeVar("E")

FoldFn = Callable[[Any, Any], Valid]


class TryFold(Generic[I, O, E]):
    """A function of ``(input, state)`` returning a :class:`Valid` state."""

    __slots__ = ("_f",)

    def __init__(self, f: Callable[[I, O], Valid[O, E]]) -> None:
        self._f = f

    def __call__(self, input: I, state: O) -> Valid[O, E]:
        return self._f(input, state)

    def try_fold(self, input: I, state: O) -> Valid[O, E]:
        """Fold ``state`` with ``input``."""
        return self._f(input, state)

    def and_(self, other: TryFold[I, O, E]) -> TryFold[I, O, E]:
        """Run ``self`` then ``other``; on failure still run ``other`` to collect its errors."""

        def combined(input: I, state: O) -> Valid[O, E]:
            return self.try_fold(input, state).fold(
                lambda new_state: other.try_fold(input, new_state),
                other.try_fold(input, state),
            )

        return TryFold(combined)

    def transform_valid(
        self,
        up: Callable[[O, O1], Valid[O1, E]],
        down: Callable[[O1], Valid[O, E]],
    ) -> TryFold[I, O1, E]:
        """Lift this fold to another state type with fallible conversions."""

        def transformed(input: I, outer: O1) -> Valid[O1, E]:
            return (
                down(outer)
                .and_then(lambda inner: self.try_fold(input, inner))
                .and_then(lambda inner: up(inner, outer))
            )

        return TryFold(transformed)

    def transform(
        self,
        up: Callable[[O, O1], O1],
        down: Callable[[O1], O],
    ) -> TryFold[I, O1, E]:
        """Lift this fold to another state type with infallible conversions."""
        return self.transform_valid(
            lambda inner, outer: Valid.succeed(up(inner, outer)),
            lambda outer: Valid.succeed(down(outer)),
        )

    def update(self, f: Callable[[O], O]) -> TryFold[I, O, E]:
        """Apply ``f`` to the successfully folded state."""
        return self.transform(lambda inner, _outer: f(inner), lambda outer: outer)

    @classmethod
    def succeed(cls, f: Callable[[I, O], O]) -> TryFold[I, O, E]:
        """A fold that always succeeds with ``f(input, state)``."""
        return cls(lambda input, state: Valid.succeed(f(input, state)))

    @classmethod
    def empty(cls) -> TryFold[I, O, E]:
        """A fold that leaves the state untouched."""
        return cls(lambda _input, state: Valid.succeed(state))

    @classmethod
    def fail(cls, error: E) -> TryFold[I, O, E]:
        """A fold that always fails with ``error``."""
        return cls(lambda _input, _state: Valid.fail(error))

    def trace(self, message: str) -> TryFold[I, O, E]:
        """Prefix the trace of any failure with ``message``."""
        return TryFold(lambda input, state: self.try_fold(input, state).trace(message))

    @classmethod
    def from_iter(cls, folds: Iterable[TryFold[I, O, E]]) -> TryFold[I, O, E]:
        """Chain folds right-associatively: ``f1.and_(f2.and_(... .and_(empty)))``."""
        result: TryFold[I, O, E] = cls.empty()
        for fold in reversed(list(folds)):
            result = fold.and_(result)
        return result