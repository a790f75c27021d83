"""A small structural schema for JSON-like values."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from .valid import Valid


class SchemaKind(Enum):
    OBJ = "obj"
    ARR = "arr"
    OPT = "opt"
    STR = "str"
    NUM = "num"
    BOOL = "bool"


@dataclass(frozen=True)
class JsonSchema:
    """Schema node; the default is an object with no fields."""

    kind: SchemaKind = SchemaKind.OBJ
    fields: tuple[tuple[str, JsonSchema], ...] = ()
    item: JsonSchema | None = None

    def __post_init__(self) -> None:
        pairs = self.fields.items() if isinstance(self.fields, Mapping) else self.fields
        object.__setattr__(self, "fields", tuple(sorted(pairs, key=lambda pair: pair[0])))

    @classmethod
    def obj(cls, fields: Mapping[str, JsonSchema] | Iterable[tuple[str, JsonSchema]]) -> JsonSchema:
        return cls(SchemaKind.OBJ, fields)

    @classmethod
    def arr(cls, item: JsonSchema) -> JsonSchema:
        return cls(SchemaKind.ARR, item=item)

    @classmethod
    def string(cls) -> JsonSchema:
        return cls(SchemaKind.STR)

    @classmethod
    def number(cls) -> JsonSchema:
        return cls(SchemaKind.NUM)

    @classmethod
    def boolean(cls) -> JsonSchema:
        return cls(SchemaKind.BOOL)

    def optional(self) -> JsonSchema:
        return JsonSchema(SchemaKind.OPT, item=self)

    def is_optional(self) -> bool:
        return self.kind is SchemaKind.OPT

    def is_required(self) -> bool:
        return not self.is_optional()

    def validate(self, value: Any) -> Valid[None, str]:
        """Check ``value`` against this schema, tracing failures by field or index."""
        match self.kind:
            case SchemaKind.STR:
                if isinstance(value, str):
                    return Valid.succeed(None)
                return Valid.fail("expected string")
            case SchemaKind.NUM:
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    return Valid.succeed(None)
                return Valid.fail("expected number")
            case SchemaKind.BOOL:
                if isinstance(value, bool):
                    return Valid.succeed(None)
                return Valid.fail("expected boolean")
            case SchemaKind.ARR:
                if not isinstance(value, (list, tuple)):
                    return Valid.fail("expected array")
                item = self.item
                return Valid.from_iter(
                    enumerate(value),
                    lambda pair: item.validate(pair[1]).trace(str(pair[0])),
                ).unit()
            case SchemaKind.OBJ:
                if not isinstance(value, Mapping):
                    return Valid.fail("expected object")
                return Valid.from_iter(
                    self.fields, lambda pair: _validate_field(value, *pair)
                ).unit()
            case SchemaKind.OPT:
                if value is None:
                    return Valid.succeed(None)
                return self.item.validate(value)
        raise ValueError(f"unknown schema kind: {self.kind}")


def _validate_field(obj: Mapping[str, Any], name: str, schema: JsonSchema) -> Valid[None, str]:
    if name in obj:
        return schema.validate(obj[name]).trace(name)
    if schema.is_required():
        return Valid.fail("expected field to be non-nullable").trace(name)
    return Valid.succeed(None)