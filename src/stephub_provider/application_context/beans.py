from __future__ import annotations

import importlib
import inspect
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import ModuleType
from typing import TypeVar

from stephub_provider.errors import ProviderConfigError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class BeanMeta:
    # Marks a class whose instance takes part in step registration.
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("BeanMeta.name must be a non-empty string")


def provider_bean(*, name: str | None = None) -> Callable[[T], T]:
    def _decorate(target: T) -> T:
        resolved_name = name if name is not None else getattr(target, "__name__", "")
        setattr(target, "__bean_meta__", BeanMeta(name=resolved_name))
        return target

    return _decorate


def get_bean_meta(target: object) -> BeanMeta | None:
    meta = getattr(target, "__bean_meta__", None)
    return meta if isinstance(meta, BeanMeta) else None


def discover_beans(modules: Iterable[ModuleType]) -> list[tuple[str, type[object]]]:
    # Find @provider_bean classes in module order; re-exports of the same class are not conflicts.
    discovered: list[tuple[str, type[object]]] = []
    seen: dict[str, type[object]] = {}
    for module in modules:
        for value in module.__dict__.values():
            meta = get_bean_meta(value)
            if meta is None:
                continue
            if not isinstance(value, type):
                raise ProviderConfigError(f"Bean '{meta.name}' target is not a class")
            if meta.name in seen:
                if seen[meta.name] is value:
                    continue
                raise ProviderConfigError(f"Duplicate bean name discovered: {meta.name}")
            seen[meta.name] = value
            discovered.append((meta.name, value))
    return discovered


def import_modules(names: Iterable[str]) -> list[ModuleType]:
    modules: list[ModuleType] = []
    for name in names:
        try:
            modules.append(importlib.import_module(name))
        except ImportError as exc:
            raise ProviderConfigError(f"Failed to import module: {name}") from exc
    return modules


def create_bean(bean_name: str, bean_cls: type[T]) -> T:
    # Beans are built with no arguments; a required constructor parameter is a configuration error.
    try:
        signature = inspect.signature(bean_cls)
    except (TypeError, ValueError):
        signature = None
    if signature is not None:
        for parameter in signature.parameters.values():
            if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            if parameter.default is inspect.Parameter.empty:
                raise ProviderConfigError(
                    f"Bean '{bean_name}' must be constructible without arguments "
                    f"(required parameter '{parameter.name}')"
                )
    return bean_cls()
