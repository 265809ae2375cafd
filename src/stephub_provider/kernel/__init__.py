from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "NamedArgumentAccessor": "accessors",
    "ParameterAccessor": "accessors",
    "SessionStateAccessor": "accessors",
    "StepInvoker": "invoker",
    "ProviderRegistry": "registry",
    "SignatureAnalysis": "signature",
    "analyze_parameters": "signature",
    "is_session_parameter": "signature",
    "ParameterDescriptor": "step_method",
    "StepMethodMeta": "step_method",
    "argument": "step_method",
    "get_step_meta": "step_method",
    "param": "step_method",
    "state": "step_method",
    "step": "step_method",
    "StepRegistrar": "registrar",
    "iter_step_methods": "registrar",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> Any:
    # Lazy exports: the registrar depends on provider.base, which itself imports kernel.registry.
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(name)
    module = import_module(f"stephub_provider.kernel.{module_name}")
    return getattr(module, name)
