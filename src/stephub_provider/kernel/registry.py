from __future__ import annotations

from dataclasses import dataclass, field

from stephub_provider.errors import DuplicateStepError, RegistryFrozenError, UnknownStepError
from stephub_provider.kernel.invoker import StepInvoker
from stephub_provider.model.spec import StepSpec


@dataclass(slots=True)
class ProviderRegistry:
    # Per-provider table of step invokers and ordered specs; written during discovery only.
    _invokers: dict[str, StepInvoker] = field(default_factory=dict)
    _specs: list[StepSpec] = field(default_factory=list)
    _origins: dict[str, str] = field(default_factory=dict)
    _spec_origins: dict[str, str] = field(default_factory=dict)
    _frozen: bool = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register_invoker(self, step_id: str, invoker: StepInvoker, *, origin: str | None = None) -> None:
        self._ensure_writable()
        if step_id in self._invokers:
            raise DuplicateStepError(step_id, self._origins.get(step_id, step_id), origin or step_id)
        self._invokers[step_id] = invoker
        self._origins[step_id] = origin or step_id

    def register_spec(self, spec: StepSpec, *, origin: str | None = None) -> None:
        self._ensure_writable()
        if any(existing.id == spec.id for existing in self._specs):
            raise DuplicateStepError(spec.id, self._spec_origins.get(spec.id, spec.id), origin or spec.id)
        self._specs.append(spec)
        self._spec_origins[spec.id] = origin or spec.id

    def origin(self, step_id: str) -> str | None:
        return self._origins.get(step_id)

    def lookup(self, step_id: str) -> StepInvoker | None:
        return self._invokers.get(step_id)

    def get(self, step_id: str) -> StepInvoker:
        invoker = self._invokers.get(step_id)
        if invoker is None:
            raise UnknownStepError(step_id)
        return invoker

    def list_specs(self) -> tuple[StepSpec, ...]:
        return tuple(self._specs)

    def freeze(self) -> None:
        # Marks the end of discovery; the registry is read-only afterwards.
        self._frozen = True

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._invokers

    def __len__(self) -> int:
        return len(self._invokers)

    def _ensure_writable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Provider registry is frozen; steps can only be registered during discovery")
