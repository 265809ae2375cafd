from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from stephub_provider.application_context.resolver import ProviderResolver
from stephub_provider.errors import DuplicateStepError, RegistryFrozenError, UnresolvableProviderError
from stephub_provider.kernel.invoker import StepInvoker
from stephub_provider.kernel.signature import analyze_parameters, check_arity
from stephub_provider.kernel.step_method import StepMethodMeta, get_step_meta
from stephub_provider.model.spec import StepSpec, StepSpecBuilder
from stephub_provider.observability.logging import LogMessage, LogSink, NullLogSink
from stephub_provider.provider.base import StepProvider


@dataclass(frozen=True, slots=True)
class _Staged:
    provider: StepProvider
    spec: StepSpec
    invoker: StepInvoker
    origin: str


@dataclass(slots=True)
class StepRegistrar:
    """Explicit discovery pass that fills provider registries from ``@step`` methods.

    Beans are staged one at a time; nothing reaches a provider registry until
    :meth:`complete` publishes every staged step and freezes the registries.
    Any configuration error raised by :meth:`register_all` discards the whole
    pass so no provider ends up with a partial registry.
    """

    resolver: ProviderResolver | None = None
    log_sink: LogSink = field(default_factory=NullLogSink)
    _pending: list[_Staged] = field(default_factory=list)
    _providers: list[StepProvider] = field(default_factory=list)

    def register_bean(self, bean: object, bean_name: str | None = None) -> list[StepSpec]:
        # Stage every step method of one bean; either all of them are staged or none.
        name = bean_name or type(bean).__name__
        staged: list[_Staged] = []
        for attr_name, meta in iter_step_methods(type(bean)):
            handler_name = f"{name}.{attr_name}"
            provider = self._resolve_target(bean, meta, handler_name)
            handler: Callable[..., Any] = getattr(bean, attr_name)
            analysis = analyze_parameters(handler_name, meta.params)
            check_arity(handler_name, handler, meta.params)
            builder = (
                StepSpecBuilder()
                .id(meta.id or attr_name)
                .pattern(meta.pattern)
                .pattern_type(meta.pattern_type)
            )
            for argument_spec in analysis.arguments:
                builder.argument(argument_spec)
            spec = builder.build()
            invoker = StepInvoker(step_id=spec.id, handler=handler, accessors=analysis.accessors)
            candidate = _Staged(provider=provider, spec=spec, invoker=invoker, origin=handler_name)
            self._check_collision(candidate, staged)
            staged.append(candidate)

        if isinstance(bean, StepProvider):
            self._track(bean)
        for item in staged:
            self._track(item.provider)
        self._pending.extend(staged)
        return [item.spec for item in staged]

    def register_all(self, beans: Iterable[object | tuple[str, object]]) -> list[StepProvider]:
        # One registration pass: stage every bean, then publish; any failure aborts the pass.
        try:
            for entry in beans:
                if isinstance(entry, tuple):
                    bean_name, bean = entry
                    self.register_bean(bean, bean_name)
                else:
                    self.register_bean(entry)
        except Exception:
            self.reset()
            raise
        return self.complete()

    def complete(self) -> list[StepProvider]:
        # Publish staged steps in discovery order and freeze every touched registry.
        for item in self._pending:
            item.provider.registry.register_invoker(item.spec.id, item.invoker, origin=item.origin)
            item.provider.registry.register_spec(item.spec, origin=item.origin)
            self.log_sink.emit(
                LogMessage(
                    level="info",
                    message="step registered",
                    fields={
                        "provider": item.provider.get_info().name,
                        "step": item.spec.id,
                        "pattern": item.spec.pattern,
                        "pattern_type": item.spec.pattern_type.name,
                        "handler": item.origin,
                    },
                )
            )
        providers = list(self._providers)
        for provider in providers:
            provider.registry.freeze()
            self.log_sink.emit(
                LogMessage(
                    level="info",
                    message="provider published",
                    fields={"provider": provider.get_info().name, "steps": len(provider.registry)},
                )
            )
        self._pending.clear()
        self._providers.clear()
        return providers

    def reset(self) -> None:
        self._pending.clear()
        self._providers.clear()

    def _resolve_target(self, bean: object, meta: StepMethodMeta, handler_name: str) -> StepProvider:
        if meta.provider is not None:
            if self.resolver is None:
                raise UnresolvableProviderError(handler_name, "no provider resolver configured")
            try:
                target = self.resolver.resolve(meta.provider)
            except LookupError as exc:
                raise UnresolvableProviderError(handler_name, str(exc)) from exc
            if not isinstance(target, StepProvider):
                raise UnresolvableProviderError(
                    handler_name, f"{type(target).__name__} is not a StepProvider"
                )
            return target
        if isinstance(bean, StepProvider):
            return bean
        raise UnresolvableProviderError(handler_name, "declaring bean is not a StepProvider and no provider is set")

    def _check_collision(self, candidate: _Staged, staged: list[_Staged]) -> None:
        registry = candidate.provider.registry
        if registry.frozen:
            raise RegistryFrozenError(
                f"Provider '{candidate.provider.get_info().name}' is already published; "
                f"cannot register {candidate.origin}"
            )
        step_id = candidate.spec.id
        if step_id in registry:
            raise DuplicateStepError(step_id, registry.origin(step_id) or step_id, candidate.origin)
        for other in (*self._pending, *staged):
            if other.provider is candidate.provider and other.spec.id == step_id:
                raise DuplicateStepError(step_id, other.origin, candidate.origin)

    def _track(self, provider: StepProvider) -> None:
        if not any(existing is provider for existing in self._providers):
            self._providers.append(provider)


def iter_step_methods(cls: type[object]) -> Iterator[tuple[str, StepMethodMeta]]:
    # Own methods first, then bases; a name seen once hides the same name further up the MRO.
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for attr_name, value in klass.__dict__.items():
            if attr_name in seen:
                continue
            seen.add(attr_name)
            meta = get_step_meta(value)
            if meta is None and isinstance(value, (staticmethod, classmethod)):
                meta = get_step_meta(value.__func__)
            if meta is not None:
                yield attr_name, meta
