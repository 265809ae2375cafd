from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class SessionState:
    # Base class for provider-defined per-session state; the core never looks inside.
    session_id: str
    options: dict[str, Any] = field(default_factory=dict)
