"""Accumulating validation results with traced causes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Iterable, TypeVar

A = TypeVar("A")
B = TypeVar("B")
E = TypeVar("E")
E1 = TypeVar("E1")


@dataclass(frozen=True)
class Cause(Generic[E]):
    """A single validation failure with an optional description and a trace."""

    message: E
    description: E | None = None
    trace: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "trace", tuple(self.trace))

    def __str__(self) -> str:
        text = f"[{', '.join(str(entry) for entry in self.trace)}] {self.message}"
        if self.description is not None:
            text += f": {self.description}"
        return text

    def transform(self, f: Callable[[E], E1]) -> Cause[E1]:
        """Map the message and the description through ``f``."""
        description = None if self.description is None else f(self.description)
        return Cause(f(self.message), description, self.trace)

    def _traced(self, message: str) -> Cause[E]:
        return replace(self, trace=(message, *self.trace))


class ValidationError(Exception, Generic[E]):
    """A collection of causes that together describe a failed validation."""

    def __init__(self, causes: Iterable[Cause[E]] = ()) -> None:
        self.causes: tuple[Cause[E], ...] = tuple(causes)
        super().__init__(self.causes)

    @classmethod
    def empty(cls) -> ValidationError[E]:
        return cls()

    @classmethod
    def from_error(cls, error: E) -> ValidationError[E]:
        """Build an error holding a single cause."""
        return cls([Cause(error)])

    def combine(self, other: ValidationError[E]) -> ValidationError[E]:
        return ValidationError(self.causes + other.causes)

    def is_empty(self) -> bool:
        return not self.causes

    def trace(self, message: str) -> ValidationError[E]:
        """Prepend ``message`` to the trace of every cause."""
        return ValidationError(cause._traced(message) for cause in self.causes)

    def append(self, error: E) -> ValidationError[E]:
        return ValidationError((*self.causes, Cause(error)))

    def transform(self, f: Callable[[E], E1]) -> ValidationError[E1]:
        return ValidationError(cause.transform(f) for cause in self.causes)

    def __iter__(self):
        return iter(self.causes)

    def __len__(self) -> int:
        return len(self.causes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.causes == other.causes

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        parts = []
        for _ in self.causes:
            parts.append("Validation Error\n")
            for cause in self.causes:
                trace = ", ".join(str(entry) for entry in cause.trace)
                parts.append(f"\u2022 {cause.message} [{trace}]\n")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"ValidationError({list(self.causes)!r})"


class Valid(Generic[A, E]):
    """Either a successful value or a :class:`ValidationError`."""

    __slots__ = ("_value", "_error")

    def __init__(self, value: Any = None, error: ValidationError[E] | None = None) -> None:
        self._value = value
        self._error = error

    @classmethod
    def succeed(cls, value: A) -> Valid[A, E]:
        return cls(value=value)

    @classmethod
    def fail(cls, error: E) -> Valid[A, E]:
        return cls(error=ValidationError([Cause(error)]))

    @classmethod
    def fail_with(cls, message: E, description: E) -> Valid[A, E]:
        return cls(error=ValidationError([Cause(message, description)]))

    @classmethod
    def from_validation_err(cls, error: ValidationError[E]) -> Valid[A, E]:
        return cls(error=error)

    @classmethod
    def from_causes(cls, causes: Iterable[Cause[E]]) -> Valid[A, E]:
        return cls(error=ValidationError(causes))

    @classmethod
    def from_iter(cls, items: Iterable[Any], f: Callable[[Any], Valid[B, E]]) -> Valid[list[B], E]:
        """Validate every item, collecting all values or all errors."""
        values: list[B] = []
        errors: ValidationError[E] = ValidationError.empty()
        for item in items:
            result = f(item)
            if result._error is None:
                values.append(result._value)
            else:
                errors = errors.combine(result._error)
        if errors.is_empty():
            return cls.succeed(values)
        return cls.from_validation_err(errors)

    @classmethod
    def from_option(cls, option: A | None, error: E) -> Valid[A, E]:
        if option is None:
            return cls.fail(error)
        return cls.succeed(option)

    @property
    def error(self) -> ValidationError[E] | None:
        return self._error

    def map(self, f: Callable[[A], B]) -> Valid[B, E]:
        if self._error is not None:
            return Valid(error=self._error)
        return Valid.succeed(f(self._value))

    def foreach(self, f: Callable[[A], Any]) -> Valid[A, E]:
        """Call ``f`` with the value on success; return an equal result."""
        if self._error is None:
            f(self._value)
        return Valid(self._value, self._error)

    def is_succeed(self) -> bool:
        return self._error is None

    def and_(self, other: Valid[B, E]) -> Valid[B, E]:
        return self.zip(other).map(lambda pair: pair[1])

    def zip(self, other: Valid[B, E]) -> Valid[tuple[A, B], E]:
        if self._error is None:
            if other._error is None:
                return Valid.succeed((self._value, other._value))
            return Valid(error=other._error)
        if other._error is None:
            return Valid(error=self._error)
        return Valid(error=self._error.combine(other._error))

    def trace(self, message: str) -> Valid[A, E]:
        if self._error is None:
            return self
        return Valid(error=self._error.trace(message))

    def fold(self, ok: Callable[[A], Valid[B, E]], err: Valid[B, E]) -> Valid[B, E]:
        if self._error is None:
            return ok(self._value)
        return Valid(error=self._error).and_(err)

    def to_result(self) -> A:
        """Return the value, or raise the accumulated :class:`ValidationError`."""
        if self._error is not None:
            raise self._error
        return self._value

    def and_then(self, f: Callable[[A], Valid[B, E]]) -> Valid[B, E]:
        if self._error is not None:
            return Valid(error=self._error)
        return f(self._value)

    def unit(self) -> Valid[None, E]:
        return self.map(lambda _: None)

    def map_to(self, value: B) -> Valid[B, E]:
        return self.map(lambda _: value)

    def when(self, predicate: Callable[[], bool]) -> Valid[None, E]:
        if predicate():
            return self.unit()
        return Valid.succeed(None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Valid):
            return NotImplemented
        if self._error is None and other._error is None:
            return self._value == other._value
        return self._error == other._error

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._error is None:
            return f"Valid.succeed({self._value!r})"
        return f"Valid.from_validation_err({self._error!r})"