from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from stephub_provider.errors import UnsatisfiableParameterError
from stephub_provider.kernel.accessors import NamedArgumentAccessor, SessionStateAccessor
from stephub_provider.kernel.signature import analyze_parameters, is_session_parameter
from stephub_provider.kernel.step_method import argument, param, state
from stephub_provider.model.session import SessionState
from stephub_provider.model.spec import ArgumentSpec


@dataclass(slots=True)
class _BrowserState(SessionState):
    url: str = ""


def test_session_parameter_classification() -> None:
    # Session type itself, subclasses and bases it is assignable to count as session parameters.
    assert is_session_parameter(SessionState)
    assert is_session_parameter(_BrowserState)
    assert is_session_parameter(object)
    assert not is_session_parameter(str)
    assert not is_session_parameter(Any)
    assert not is_session_parameter(list[str])


def test_analyze_emits_accessor_per_parameter_and_specs_for_arguments() -> None:
    analysis = analyze_parameters(
        "Provider.greet",
        [state(), argument("name", str), argument("times", int)],
    )
    assert analysis.accessors == (
        SessionStateAccessor(expected_type=SessionState),
        NamedArgumentAccessor(name="name"),
        NamedArgumentAccessor(name="times"),
    )
    assert analysis.arguments == (
        ArgumentSpec(name="name", schema=str),
        ArgumentSpec(name="times", schema=int),
    )


def test_session_rule_wins_over_argument_marker() -> None:
    # Classification is ordered: a session-typed parameter never becomes a request argument.
    analysis = analyze_parameters("P.h", [param(_BrowserState, argument="ignored")])
    assert analysis.accessors == (SessionStateAccessor(expected_type=_BrowserState),)
    assert analysis.arguments == ()


def test_unmarked_parameter_is_unsatisfiable() -> None:
    # Neither session-typed nor argument-marked: fail with handler and position.
    with pytest.raises(UnsatisfiableParameterError) as exc_info:
        analyze_parameters("Provider.broken", [state(), param(int, label="count")])
    err = exc_info.value
    assert err.handler == "Provider.broken"
    assert err.position == 1
    assert "[1]" in str(err)
    assert "count" in str(err)


def test_empty_parameter_list_is_valid() -> None:
    analysis = analyze_parameters("P.noargs", [])
    assert analysis.accessors == ()
    assert analysis.arguments == ()
