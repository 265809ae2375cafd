from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from stephub_provider.application_context.beans import create_bean, discover_beans, import_modules
from stephub_provider.application_context.resolver import TypeResolver
from stephub_provider.config.models import AppConfig, LoggingConfig
from stephub_provider.errors import ConfigError
from stephub_provider.kernel.registrar import StepRegistrar
from stephub_provider.observability.logging import JsonlLogSink, LogSink, NullLogSink, StdoutLogSink
from stephub_provider.provider.base import StepProvider


@dataclass(slots=True)
class ProviderRuntime:
    # Result of the startup registration pass: live beans and their published providers.
    config: AppConfig
    resolver: TypeResolver
    providers: list[StepProvider] = field(default_factory=list)

    def provider(self, provider_type: type[StepProvider]) -> StepProvider:
        resolved = self.resolver.resolve(provider_type)
        if not isinstance(resolved, StepProvider):
            raise TypeError(f"{provider_type.__name__} is not a StepProvider")
        return resolved

    def describe(self) -> dict[str, object]:
        return {
            "name": self.config.provider.name,
            "version": self.config.provider.version,
            "providers": [
                {
                    "name": provider.get_info().name,
                    "version": provider.get_info().version,
                    "steps": [spec.to_dict() for spec in provider.list_specs()],
                }
                for provider in self.providers
            ],
        }


def build_log_sink(settings: LoggingConfig) -> LogSink:
    if settings.sink == "stdout":
        return StdoutLogSink()
    if settings.sink == "jsonl":
        if not settings.path:
            raise ConfigError("logging.path is required when logging.sink is 'jsonl'")
        return JsonlLogSink(Path(settings.path))
    return NullLogSink()


def build_runtime(
    config: AppConfig,
    *,
    modules: Sequence[str] | None = None,
    log_sink: LogSink | None = None,
) -> ProviderRuntime:
    # Composition root: import modules, instantiate beans, run one registration pass.
    module_names = list(modules) if modules else list(config.provider.modules)
    if not module_names:
        raise ConfigError("No provider modules configured (provider.modules)")
    sink = log_sink if log_sink is not None else build_log_sink(config.logging)

    resolver = TypeResolver()
    beans: list[tuple[str, object]] = []
    for bean_name, bean_cls in discover_beans(import_modules(module_names)):
        instance = create_bean(bean_name, bean_cls)
        if isinstance(instance, StepProvider):
            instance.log_sink = sink
        resolver.register(instance)
        beans.append((bean_name, instance))

    registrar = StepRegistrar(resolver=resolver, log_sink=sink)
    providers = registrar.register_all(beans)
    return ProviderRuntime(config=config, resolver=resolver, providers=providers)
