from .base import ProviderInfo, StepProvider
from .sessions import InMemorySessionStore

__all__ = ["InMemorySessionStore", "ProviderInfo", "StepProvider"]
