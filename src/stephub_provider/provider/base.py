from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stephub_provider.errors import StepArgumentError, StepInvocationError, UnknownStepError
from stephub_provider.kernel.registry import ProviderRegistry
from stephub_provider.model.messages import StepRequest, StepResponse
from stephub_provider.model.session import SessionState
from stephub_provider.model.spec import StepSpec
from stephub_provider.observability.logging import LogMessage, LogSink, NullLogSink
from stephub_provider.provider.sessions import InMemorySessionStore


@dataclass(frozen=True, slots=True)
class ProviderInfo:
    name: str
    version: str


class StepProvider:
    """Owner of a set of step handlers, their registry and the sessions they run in.

    Subclasses override :meth:`start_state` / :meth:`stop_state` to manage
    provider-specific session state, and declare handlers with ``@step``.
    The registry is filled by :class:`~stephub_provider.kernel.registrar.StepRegistrar`.
    """

    name: str = ""
    version: str = "0.0.0"

    def __init__(self, *, log_sink: LogSink | None = None) -> None:
        self.registry = ProviderRegistry()
        self.sessions = InMemorySessionStore()
        self.log_sink: LogSink = log_sink or NullLogSink()

    def get_info(self) -> ProviderInfo:
        return ProviderInfo(name=self.name or type(self).__name__, version=self.version)

    def list_specs(self) -> tuple[StepSpec, ...]:
        return self.registry.list_specs()

    def start_state(self, session_id: str, options: dict[str, Any]) -> SessionState:
        return SessionState(session_id=session_id, options=dict(options))

    def stop_state(self, state: SessionState) -> None:
        return None

    def create_session(self, options: dict[str, Any] | None = None) -> str:
        session_id = self.sessions.new_id()
        state = self.start_state(session_id, options or {})
        self.sessions.put(state)
        return session_id

    def destroy_session(self, session_id: str) -> None:
        state = self.sessions.pop(session_id)
        self.stop_state(state)

    def execute(self, session_id: str, request: StepRequest) -> StepResponse:
        # Dispatch by request.id against the (frozen) registry.
        state = self.sessions.get(session_id)
        if request.id is None:
            raise UnknownStepError("<missing>")
        invoker = self.registry.get(request.id)
        try:
            return invoker.invoke(session_id, state, request)
        except (StepArgumentError, StepInvocationError) as exc:
            self.log_sink.emit(
                LogMessage(
                    level="error",
                    message="step invocation failed",
                    fields={
                        "provider": self.get_info().name,
                        "step": request.id,
                        "session": session_id,
                        "error": str(exc),
                    },
                )
            )
            raise
