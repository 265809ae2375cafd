from __future__ import annotations


class ProviderError(RuntimeError):
    # Root of every error raised by the provider core.
    pass


class ProviderConfigError(ProviderError):
    # Discovery-time failures; fatal to the provider's startup.
    pass


class UnsatisfiableParameterError(ProviderConfigError):
    def __init__(self, handler: str, position: int, label: str | None = None) -> None:
        self.handler = handler
        self.position = position
        self.label = label
        suffix = f" with name={label}" if label else ""
        super().__init__(f"Unsatisfiable step method parameter [{position}]{suffix} in handler={handler}")


class DuplicateStepError(ProviderConfigError):
    def __init__(self, step_id: str, existing: str, duplicate: str) -> None:
        self.step_id = step_id
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"Duplicate step id '{step_id}': declared by {existing} and {duplicate}"
        )


class UnresolvableProviderError(ProviderConfigError):
    def __init__(self, handler: str, reason: str) -> None:
        self.handler = handler
        super().__init__(
            f"Invalid usage of step method annotation or target provider isn't resolvable: {handler} ({reason})"
        )


class RegistryFrozenError(ProviderConfigError):
    pass


class ConfigError(ProviderConfigError):
    # Invalid YAML configuration (fail fast).
    pass


class StepArgumentError(ProviderError):
    # Dispatch-time failure while resolving handler arguments.
    pass


class MissingArgumentError(StepArgumentError):
    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"Missing argument with name={argument}")


class SessionStateTypeError(StepArgumentError):
    def __init__(self, expected: type[object], actual: object) -> None:
        self.expected = expected
        self.actual_type = type(actual)
        super().__init__(
            f"Session state of type {type(actual).__name__} is not assignable to {expected.__name__}"
        )


class StepInvocationError(ProviderError):
    # Wraps any failure raised by the step handler itself; the cause is kept in __cause__.
    def __init__(self, step_id: str, cause: BaseException | None = None, *, reason: str | None = None) -> None:
        self.step_id = step_id
        detail = reason if reason is not None else f"{type(cause).__name__}: {cause}"
        super().__init__(f"Failed to invoke step method={step_id}: {detail}")


class UnknownStepError(ProviderError):
    def __init__(self, step_id: str) -> None:
        self.step_id = step_id
        super().__init__(f"Unknown step id: {step_id}")


class UnknownSessionError(ProviderError):
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Unknown session id: {session_id}")
