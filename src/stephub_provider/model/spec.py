from __future__ import annotations

import types
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union, get_args, get_origin

from pydantic import PydanticInvalidForJsonSchema, PydanticSchemaGenerationError, TypeAdapter

from stephub_provider.errors import ProviderConfigError


class PatternType(str, Enum):
    # How consumers should interpret StepSpec.pattern.
    REGEX = "regex"
    SIMPLE = "simple"


@dataclass(frozen=True, slots=True)
class ArgumentSpec:
    # One request argument expected by a step handler.
    name: str
    schema: Any = Any

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("ArgumentSpec.name must be a non-empty string")

    @property
    def type_tag(self) -> str:
        return _type_tag(self.schema)

    def json_schema(self) -> dict[str, Any]:
        # Best-effort JSON schema for the declared type; opaque classes degrade to {}.
        if self.schema is Any:
            return {}
        try:
            return TypeAdapter(self.schema).json_schema()
        except (PydanticSchemaGenerationError, PydanticInvalidForJsonSchema):
            return {}

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type_tag, "schema": self.json_schema()}


@dataclass(frozen=True, slots=True)
class StepSpec:
    # Immutable, machine-readable description of one registered step.
    id: str
    pattern: str
    pattern_type: PatternType = PatternType.REGEX
    arguments: tuple[ArgumentSpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("StepSpec.id must be a non-empty string")
        if not isinstance(self.pattern, str) or not self.pattern:
            raise ValueError("StepSpec.pattern must be a non-empty string")
        names = [arg.name for arg in self.arguments]
        if len(names) != len(set(names)):
            raise ValueError(f"StepSpec '{self.id}' declares duplicate argument names: {names}")

    def argument(self, name: str) -> ArgumentSpec | None:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "pattern": self.pattern,
            "patternType": self.pattern_type.name,
            "arguments": [arg.to_dict() for arg in self.arguments],
        }


class StepSpecBuilder:
    # Accumulates one handler's spec during discovery; build() freezes it.
    def __init__(self) -> None:
        self._id: str | None = None
        self._pattern: str | None = None
        self._pattern_type = PatternType.REGEX
        self._arguments: list[ArgumentSpec] = []

    def id(self, value: str) -> StepSpecBuilder:
        self._id = value
        return self

    def pattern(self, value: str) -> StepSpecBuilder:
        self._pattern = value
        return self

    def pattern_type(self, value: PatternType) -> StepSpecBuilder:
        self._pattern_type = PatternType(value)
        return self

    def argument(self, spec: ArgumentSpec) -> StepSpecBuilder:
        if any(existing.name == spec.name for existing in self._arguments):
            raise ProviderConfigError(
                f"Step '{self._id}' binds request argument '{spec.name}' more than once"
            )
        self._arguments.append(spec)
        return self

    def build(self) -> StepSpec:
        if self._id is None or self._pattern is None:
            raise ProviderConfigError("StepSpecBuilder requires id and pattern before build()")
        try:
            return StepSpec(
                id=self._id,
                pattern=self._pattern,
                pattern_type=self._pattern_type,
                arguments=tuple(self._arguments),
            )
        except ValueError as exc:
            raise ProviderConfigError(str(exc)) from exc


def _type_tag(schema: Any) -> str:
    if schema is Any:
        return "any"
    origin = get_origin(schema) or schema
    if origin is Union or origin is types.UnionType:
        # Optional[X] tags as X; any wider union has no single tag.
        members = [member for member in get_args(schema) if member is not type(None)]
        return _type_tag(members[0]) if len(members) == 1 else "any"
    if not isinstance(origin, type):
        return "any"
    # bool is an int subclass, so it must be checked first.
    if issubclass(origin, bool):
        return "boolean"
    if issubclass(origin, int):
        return "integer"
    if issubclass(origin, float):
        return "number"
    if issubclass(origin, str):
        return "string"
    if issubclass(origin, Mapping):
        return "object"
    if issubclass(origin, Sequence) and not issubclass(origin, (bytes, bytearray)):
        return "array"
    return "object"
