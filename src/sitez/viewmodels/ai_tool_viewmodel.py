# Rev 0.2.0
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from ..models.types import AITool
from ..services.ai_request import AIRequestMachine, RequestState
from ..services.ai_service import AIService, AIServiceError, RISK_ERROR, SCHEDULE_ERROR

log = logging.getLogger(__name__)

Job = Callable[[], None]


class _Job(QRunnable):
    def __init__(self, fn: Job):
        super().__init__()
        self._fn = fn

    def run(self) -> None:
        self._fn()


def _pool_runner(fn: Job) -> None:
    QThreadPool.globalInstance().start(_Job(fn))


class AIToolViewModel(QObject):
    """
    Drives one AI tool dialog. The remote call runs on the global thread pool;
    its outcome comes back through queued signals and is fed to the request
    machine, which drops anything that no longer matches the pending request.

    Emits:
      stateChanged(RequestState)
    """

    stateChanged = Signal(object)

    # worker -> GUI thread
    _succeeded = Signal(int, object)
    _failed = Signal(int, str)

    def __init__(self, service: AIService, *, runner: Optional[Callable[[Job], None]] = None):
        super().__init__()
        self._service = service
        self._runner = runner or _pool_runner
        self._machine = AIRequestMachine()
        self._succeeded.connect(self._on_succeeded)
        self._failed.connect(self._on_failed)

    @property
    def state(self) -> RequestState:
        return self._machine.state

    def submit_schedule(self, description: str, duration_days: int | str, start_date: str) -> int:
        return self._submit(
            "schedule",
            lambda: self._service.request_schedule(description, duration_days, start_date),
        )

    def submit_risk(self, description: str) -> int:
        return self._submit("risk", lambda: self._service.request_risk_analysis(description))

    def close(self) -> None:
        """Back to idle; a reply still in flight will be ignored."""
        if self._machine.state.is_pending:
            log.info("AI request %s abandoned", self._machine.state.request_id)
        self._machine.close()
        self.stateChanged.emit(self._machine.state)

    # ---- internals
    def _submit(self, tool: AITool, call: Callable[[], Any]) -> int:
        rid = self._machine.submit()
        log.info("AI %s request %s submitted", tool, rid)
        self.stateChanged.emit(self._machine.state)
        fallback = SCHEDULE_ERROR if tool == "schedule" else RISK_ERROR

        def job() -> None:
            try:
                result = call()
            except AIServiceError as exc:
                self._failed.emit(rid, exc.message)
                return
            except Exception:
                log.exception("AI %s request %s crashed", tool, rid)
                self._failed.emit(rid, fallback)
                return
            self._succeeded.emit(rid, result)

        self._runner(job)
        return rid

    def _on_succeeded(self, rid: int, result: Any) -> None:
        if self._machine.resolve(rid, result):
            self.stateChanged.emit(self._machine.state)
        else:
            log.info("Discarded late AI response for request %s", rid)

    def _on_failed(self, rid: int, message: str) -> None:
        if self._machine.reject(rid, message):
            self.stateChanged.emit(self._machine.state)
        else:
            log.info("Discarded late AI failure for request %s", rid)
