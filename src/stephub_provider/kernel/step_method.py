from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from stephub_provider.model.session import SessionState
from stephub_provider.model.spec import PatternType

T = TypeVar("T")

STEP_META_ATTR = "__step_meta__"


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    # Statically declared handler parameter: its type plus an optional request-argument binding.
    declared_type: Any
    argument: str | None = None
    label: str | None = None

    def __post_init__(self) -> None:
        if self.argument is not None and (not isinstance(self.argument, str) or not self.argument):
            raise ValueError("ParameterDescriptor.argument must be a non-empty string when provided")


@dataclass(frozen=True, slots=True)
class StepMethodMeta:
    # Metadata attached to a step handler for discovery by the registrar.
    pattern: str
    params: tuple[ParameterDescriptor, ...] = field(default_factory=tuple)
    id: str | None = None
    pattern_type: PatternType = PatternType.REGEX
    provider: type[object] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str) or not self.pattern:
            raise ValueError("StepMethodMeta.pattern must be a non-empty string")
        if self.id is not None and not self.id:
            raise ValueError("StepMethodMeta.id must be non-empty when provided")
        if self.provider is not None and not isinstance(self.provider, type):
            raise ValueError("StepMethodMeta.provider must be a class")


def param(declared_type: Any, *, argument: str | None = None, label: str | None = None) -> ParameterDescriptor:
    return ParameterDescriptor(declared_type=declared_type, argument=argument, label=label)


def state(declared_type: type[object] = SessionState, *, label: str | None = None) -> ParameterDescriptor:
    # Parameter receiving the current session state.
    return ParameterDescriptor(declared_type=declared_type, label=label or "state")


def argument(name: str, declared_type: Any = Any) -> ParameterDescriptor:
    # Parameter bound to the request argument called `name`.
    return ParameterDescriptor(declared_type=declared_type, argument=name, label=name)


def step(
    pattern: str,
    *,
    params: Iterable[ParameterDescriptor] = (),
    id: str | None = None,
    pattern_type: PatternType = PatternType.REGEX,
    provider: type[object] | None = None,
) -> Callable[[T], T]:
    # Decorator attaches StepMethodMeta to a handler function for discovery.
    meta = StepMethodMeta(
        pattern=pattern,
        params=tuple(params),
        id=id,
        pattern_type=PatternType(pattern_type),
        provider=provider,
    )

    def _decorate(target: T) -> T:
        setattr(target, STEP_META_ATTR, meta)
        return target

    return _decorate


def get_step_meta(target: object) -> StepMethodMeta | None:
    meta = getattr(target, STEP_META_ATTR, None)
    return meta if isinstance(meta, StepMethodMeta) else None
