from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from stephub_provider.errors import StepInvocationError
from stephub_provider.kernel.accessors import ParameterAccessor
from stephub_provider.model.messages import StepRequest, StepResponse


@dataclass(frozen=True, slots=True)
class StepInvoker:
    # Bound handler plus its ordered accessors; nothing is re-resolved per call.
    step_id: str
    handler: Callable[..., Any]
    accessors: tuple[ParameterAccessor, ...] = field(default_factory=tuple)
    clock: Callable[[], float] = time.perf_counter

    def invoke(self, session_id: str, state: object, request: StepRequest) -> StepResponse:
        # Argument errors surface before the handler is touched.
        args = [accessor(session_id, state, request) for accessor in self.accessors]
        start = self.clock()
        try:
            response = self.handler(*args)
        except Exception as exc:
            raise StepInvocationError(self.step_id, exc) from exc
        elapsed = max(self.clock() - start, 0.0)
        if response is None:
            response = StepResponse()
        elif not isinstance(response, StepResponse):
            raise StepInvocationError(
                self.step_id,
                reason=f"handler returned {type(response).__name__}, expected StepResponse",
            )
        if response.duration is None:
            # Copy so a response instance shared across calls keeps its own duration.
            response = response.model_copy(update={"duration": timedelta(seconds=elapsed)})
        return response

    def __call__(self, session_id: str, state: object, request: StepRequest) -> StepResponse:
        return self.invoke(session_id, state, request)
