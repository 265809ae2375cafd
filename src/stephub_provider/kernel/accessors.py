from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from stephub_provider.errors import MissingArgumentError, SessionStateTypeError
from stephub_provider.model.messages import StepRequest


class ParameterAccessor(Protocol):
    # Resolves one handler parameter from call-time inputs; must be side-effect free.
    def __call__(self, session_id: str, state: object, request: StepRequest) -> Any:
        raise NotImplementedError("ParameterAccessor protocol has no implementation")


@dataclass(frozen=True, slots=True)
class SessionStateAccessor:
    # Passes the caller's session state through untouched, ignoring the request.
    expected_type: type[object] = object

    def __call__(self, session_id: str, state: object, request: StepRequest) -> Any:
        if not isinstance(state, self.expected_type):
            raise SessionStateTypeError(self.expected_type, state)
        return state


@dataclass(frozen=True, slots=True)
class NamedArgumentAccessor:
    # Reads request.arguments[name]; absence is an error, never a default.
    name: str

    def __call__(self, session_id: str, state: object, request: StepRequest) -> Any:
        arguments = request.arguments
        if self.name not in arguments or arguments[self.name] is None:
            raise MissingArgumentError(self.name)
        return arguments[self.name]
