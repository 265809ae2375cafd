from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


class ResolutionError(LookupError):
    # Raised when a type has no unique bound instance.
    pass


@runtime_checkable
class ProviderResolver(Protocol):
    # Injected lookup capability: find the live instance for a provider class.
    def resolve(self, provider_type: type[object]) -> object:
        raise NotImplementedError("ProviderResolver.resolve must be implemented")


def contract_types(instance_cls: type[object]) -> list[type[object]]:
    # An instance is reachable through its concrete class and its public bases.
    contracts: list[type[object]] = [instance_cls]
    for base in instance_cls.__mro__[1:]:
        if base is object:
            continue
        contracts.append(base)
    return contracts


@dataclass(slots=True)
class TypeResolver:
    # In-memory bean container keyed by contract type.
    _instances: dict[type[object], list[object]] = field(default_factory=dict)

    def register(self, instance: object) -> None:
        for contract in contract_types(type(instance)):
            bound = self._instances.setdefault(contract, [])
            if not any(existing is instance for existing in bound):
                bound.append(instance)

    def resolve(self, provider_type: type[object]) -> object:
        bound = self._instances.get(provider_type, [])
        if not bound:
            raise ResolutionError(f"No instance bound for {provider_type.__name__}")
        if len(bound) > 1:
            names = sorted(type(item).__name__ for item in bound)
            raise ResolutionError(f"Ambiguous binding for {provider_type.__name__}: {names}")
        return bound[0]

    def instances(self) -> list[object]:
        seen: list[object] = []
        for bound in self._instances.values():
            for item in bound:
                if not any(existing is item for existing in seen):
                    seen.append(item)
        return seen
