from .messages import StepRequest, StepResponse, StepStatus
from .session import SessionState
from .spec import ArgumentSpec, PatternType, StepSpec, StepSpecBuilder

__all__ = [
    "ArgumentSpec",
    "PatternType",
    "SessionState",
    "StepRequest",
    "StepResponse",
    "StepSpec",
    "StepSpecBuilder",
    "StepStatus",
]
