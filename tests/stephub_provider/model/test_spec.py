from __future__ import annotations

from typing import Any, Optional, Union

import pytest

from stephub_provider.errors import ProviderConfigError
from stephub_provider.model.spec import ArgumentSpec, PatternType, StepSpec, StepSpecBuilder


class _Opaque:
    pass


@pytest.mark.parametrize(
    ("schema", "tag"),
    [
        (str, "string"),
        (int, "integer"),
        (float, "number"),
        (bool, "boolean"),
        (list[str], "array"),
        (dict[str, int], "object"),
        (Any, "any"),
        (_Opaque, "object"),
        (int | None, "integer"),
        (Optional[int], "integer"),
        (Union[str, None], "string"),
        (list[str] | None, "array"),
        (int | str, "any"),
        (Union[int, str, None], "any"),
    ],
)
def test_argument_spec_type_tag(schema: object, tag: str) -> None:
    # Declared Python types map onto a small set of semantic tags.
    assert ArgumentSpec(name="x", schema=schema).type_tag == tag


def test_argument_spec_json_schema_uses_declared_type() -> None:
    # JSON schema is derived from the declared type; opaque classes degrade to an empty schema.
    assert ArgumentSpec(name="count", schema=int).json_schema() == {"type": "integer"}
    assert ArgumentSpec(name="blob", schema=_Opaque).json_schema() == {}
    assert ArgumentSpec(name="anything").json_schema() == {}


def test_argument_spec_rejects_empty_name() -> None:
    with pytest.raises(ValueError):
        ArgumentSpec(name="")


def test_step_spec_rejects_duplicate_argument_names() -> None:
    # Argument names are unique within one spec.
    with pytest.raises(ValueError):
        StepSpec(
            id="s",
            pattern="^s$",
            arguments=(ArgumentSpec(name="a", schema=str), ArgumentSpec(name="a", schema=int)),
        )


def test_builder_defaults_to_regex_and_keeps_argument_order() -> None:
    # Builder accumulates id/pattern/arguments and freezes them in declaration order.
    spec = (
        StepSpecBuilder()
        .id("greet")
        .pattern("^hello (.*)$")
        .argument(ArgumentSpec(name="name", schema=str))
        .argument(ArgumentSpec(name="times", schema=int))
        .build()
    )
    assert spec.pattern_type is PatternType.REGEX
    assert [arg.name for arg in spec.arguments] == ["name", "times"]
    assert spec.argument("times") == ArgumentSpec(name="times", schema=int)
    assert spec.argument("missing") is None


def test_builder_accepts_simple_pattern_type() -> None:
    spec = StepSpecBuilder().id("plain").pattern("I wait").pattern_type(PatternType.SIMPLE).build()
    assert spec.pattern_type is PatternType.SIMPLE


def test_builder_requires_id_and_pattern() -> None:
    # Incomplete builders fail as configuration errors.
    with pytest.raises(ProviderConfigError):
        StepSpecBuilder().id("only_id").build()


def test_builder_rejects_argument_bound_twice() -> None:
    builder = StepSpecBuilder().id("s").pattern("^s$").argument(ArgumentSpec(name="a"))
    with pytest.raises(ProviderConfigError):
        builder.argument(ArgumentSpec(name="a", schema=int))


def test_step_spec_is_immutable() -> None:
    spec = StepSpec(id="s", pattern="^s$")
    with pytest.raises(AttributeError):
        spec.id = "other"  # type: ignore[misc]


def test_step_spec_to_dict() -> None:
    # Serializable view used by tooling that lists provider specs.
    spec = StepSpec(
        id="greet",
        pattern="^hello (.*)$",
        arguments=(ArgumentSpec(name="name", schema=str),),
    )
    assert spec.to_dict() == {
        "id": "greet",
        "pattern": "^hello (.*)$",
        "patternType": "REGEX",
        "arguments": [{"name": "name", "type": "string", "schema": {"type": "string"}}],
    }
