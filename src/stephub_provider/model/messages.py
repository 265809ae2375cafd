from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Request/response payloads exchanged with the step runner; encoding is the caller's concern.


class StepStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    ERRONEOUS = "erroneous"


class StepRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    # Target step id; optional when an invoker is called directly.
    id: str | None = None
    arguments: dict[str, Any] = Field(default_factory=dict)


class StepResponse(BaseModel):
    # Mutable: the dispatcher fills in duration after the handler returns.
    model_config = ConfigDict(extra="forbid", validate_assignment=True)
    status: StepStatus = StepStatus.PASSED
    output: Any = None
    error_message: str | None = None
    logs: list[str] = Field(default_factory=list)
    duration: timedelta | None = None

    @field_validator("duration")
    @classmethod
    def _non_negative_duration(cls, value: timedelta | None) -> timedelta | None:
        if value is not None and value < timedelta(0):
            raise ValueError("duration must not be negative")
        return value

    @classmethod
    def passed(cls, output: Any = None, **kwargs: Any) -> StepResponse:
        return cls(status=StepStatus.PASSED, output=output, **kwargs)

    @classmethod
    def failed(cls, message: str, **kwargs: Any) -> StepResponse:
        return cls(status=StepStatus.FAILED, error_message=message, **kwargs)

    @classmethod
    def erroneous(cls, message: str, **kwargs: Any) -> StepResponse:
        return cls(status=StepStatus.ERRONEOUS, error_message=message, **kwargs)
