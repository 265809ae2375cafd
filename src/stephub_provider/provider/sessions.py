from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field

from stephub_provider.errors import UnknownSessionError
from stephub_provider.model.session import SessionState


@dataclass(slots=True)
class InMemorySessionStore:
    # Session states keyed by id; writes are serialized, reads are plain dict lookups.
    _states: dict[str, SessionState] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def new_id(self) -> str:
        return uuid.uuid4().hex

    def put(self, state: SessionState) -> None:
        with self._lock:
            if state.session_id in self._states:
                raise ValueError(f"Session already exists: {state.session_id}")
            self._states[state.session_id] = state

    def get(self, session_id: str) -> SessionState:
        state = self._states.get(session_id)
        if state is None:
            raise UnknownSessionError(session_id)
        return state

    def pop(self, session_id: str) -> SessionState:
        with self._lock:
            state = self._states.pop(session_id, None)
        if state is None:
            raise UnknownSessionError(session_id)
        return state

    def ids(self) -> list[str]:
        return list(self._states)

    def __len__(self) -> int:
        return len(self._states)
