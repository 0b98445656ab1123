# Rev 0.2.0
"""Request/result state for one AI tool dialog.

idle -> pending(id) on submit; pending(id) -> succeeded/failed on
resolve/reject carrying the same id; any state -> idle on close. Responses
whose id doesn't match the pending one are dropped, which is how a reply that
arrives after the dialog closed (or after a newer submit) is ignored.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class RequestPhase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RequestInProgressError(RuntimeError):
    pass


@dataclass(frozen=True)
class RequestState:
    phase: RequestPhase = RequestPhase.IDLE
    request_id: Optional[int] = None
    result: Any = None
    error: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.phase is RequestPhase.PENDING


class AIRequestMachine:
    _ids = itertools.count(1)

    def __init__(self) -> None:
        self._state = RequestState()

    @property
    def state(self) -> RequestState:
        return self._state

    def submit(self) -> int:
        if self._state.is_pending:
            raise RequestInProgressError("a request is already pending")
        rid = next(self._ids)
        self._state = RequestState(phase=RequestPhase.PENDING, request_id=rid)
        return rid

    def resolve(self, request_id: int, result: Any) -> bool:
        if not self._accepts(request_id):
            return False
        self._state = RequestState(phase=RequestPhase.SUCCEEDED, request_id=request_id, result=result)
        return True

    def reject(self, request_id: int, message: str) -> bool:
        if not self._accepts(request_id):
            return False
        self._state = RequestState(phase=RequestPhase.FAILED, request_id=request_id, error=message)
        return True

    def close(self) -> None:
        self._state = RequestState()

    def _accepts(self, request_id: int) -> bool:
        return self._state.is_pending and self._state.request_id == request_id
