from .errors import (
    ConfigError,
    DuplicateStepError,
    MissingArgumentError,
    ProviderConfigError,
    ProviderError,
    RegistryFrozenError,
    SessionStateTypeError,
    StepArgumentError,
    StepInvocationError,
    UnknownSessionError,
    UnknownStepError,
    UnresolvableProviderError,
    UnsatisfiableParameterError,
)
from .model import ArgumentSpec, PatternType, SessionState, StepRequest, StepResponse, StepSpec, StepStatus
from .kernel.step_method import argument, param, state, step
from .provider import StepProvider
from .kernel.registrar import StepRegistrar
from .application_context import TypeResolver, provider_bean

__all__ = [
    "ArgumentSpec",
    "ConfigError",
    "DuplicateStepError",
    "MissingArgumentError",
    "PatternType",
    "ProviderConfigError",
    "ProviderError",
    "RegistryFrozenError",
    "SessionState",
    "SessionStateTypeError",
    "StepArgumentError",
    "StepInvocationError",
    "StepProvider",
    "StepRegistrar",
    "StepRequest",
    "StepResponse",
    "StepSpec",
    "StepStatus",
    "TypeResolver",
    "UnknownSessionError",
    "UnknownStepError",
    "UnresolvableProviderError",
    "UnsatisfiableParameterError",
    "argument",
    "param",
    "provider_bean",
    "state",
    "step",
]
