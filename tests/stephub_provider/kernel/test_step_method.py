from __future__ import annotations

from typing import Any

import pytest

from stephub_provider.kernel.step_method import (
    ParameterDescriptor,
    StepMethodMeta,
    argument,
    get_step_meta,
    param,
    state,
    step,
)
from stephub_provider.model.session import SessionState
from stephub_provider.model.spec import PatternType


def test_step_decorator_attaches_meta() -> None:
    # Decorator records pattern, descriptors and defaults without wrapping the function.
    @step("^hello (.*)$", params=[state(), argument("name", str)])
    def greet(session: SessionState, name: str) -> None:
        return None

    meta = get_step_meta(greet)
    assert isinstance(meta, StepMethodMeta)
    assert meta.pattern == "^hello (.*)$"
    assert meta.pattern_type is PatternType.REGEX
    assert meta.id is None
    assert meta.provider is None
    assert meta.params == (
        ParameterDescriptor(declared_type=SessionState, label="state"),
        ParameterDescriptor(declared_type=str, argument="name", label="name"),
    )
    assert greet(SessionState(session_id="s"), "x") is None


def test_step_decorator_accepts_overrides() -> None:
    class Target:
        pass

    @step("I wait", id="wait", pattern_type=PatternType.SIMPLE, provider=Target)
    def waiter() -> None:
        return None

    meta = get_step_meta(waiter)
    assert meta is not None
    assert meta.id == "wait"
    assert meta.pattern_type is PatternType.SIMPLE
    assert meta.provider is Target


def test_step_decorator_rejects_empty_pattern() -> None:
    with pytest.raises(ValueError):
        step("")


def test_step_decorator_rejects_non_class_provider() -> None:
    with pytest.raises(ValueError):
        step("^x$", provider="NotAClass")  # type: ignore[arg-type]


def test_descriptor_helpers() -> None:
    # argument() defaults to Any; param() can build an unmarked descriptor.
    assert argument("payload").declared_type is Any
    assert param(int).argument is None
    assert param(int, argument="count").argument == "count"
    with pytest.raises(ValueError):
        param(int, argument="")


def test_get_step_meta_ignores_plain_callables() -> None:
    def plain() -> None:
        return None

    assert get_step_meta(plain) is None
