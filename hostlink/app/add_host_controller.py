"""Controller that owns one add-host session and its worker thread.

Outcomes produced on the worker thread are parked in an outbox and drained on
the UI thread by a short periodic pump, so views are only touched from the
thread that owns them.
"""

from __future__ import annotations


import logging
import queue
from typing import Callable, Optional

from hostlink.app.polling_scheduler import PollingScheduler
from hostlink.domain.outcomes import AddOutcome, AddRequest
from hostlink.domain.ports import UseCaseError
from hostlink.usecases.host_addition_worker import HostAdditionWorker

PUMP_CHANNEL = "add-host"
PUMP_INTERVAL_MS = 100


class AddHostController:
    """Bridge UI submissions to a ``HostAdditionWorker`` and back."""

    def __init__(
        self,
        *,
        add_host: Callable[[str], AddOutcome],
        scheduler: PollingScheduler,
        on_outcome: Callable[[AddOutcome], None],
        pump_interval_ms: int = PUMP_INTERVAL_MS,
    ) -> None:
        """Store session dependencies.

        Args:
            add_host: Use case run on the worker thread for each request.
            scheduler: UI timer owner used to drain outcomes on the UI thread.
            on_outcome: UI callback, always invoked on the UI thread.
            pump_interval_ms: Outbox drain period.
        """
        self._log = logging.getLogger(__name__)
        self._add_host = add_host
        self._scheduler = scheduler
        self._on_outcome = on_outcome
        self._pump_interval_ms = pump_interval_ms
        self._outbox: "queue.Queue[AddOutcome]" = queue.Queue()
        self._worker: Optional[HostAdditionWorker] = None

    @property
    def is_open(self) -> bool:
        return self._worker is not None

    def open(self) -> None:
        """Start a fresh worker for this session (no-op when already open)."""
        if self._worker is not None:
            return
        self._worker = HostAdditionWorker(self._add_host, self._outbox.put)
        self._worker.start()
        self._scheduler.schedule_repeating(PUMP_CHANNEL, self._pump_interval_ms, self._on_pump_tick)

    def submit(self, raw: str) -> AddRequest:
        """Fire-and-forget enqueue of a host string.

        Raises:
            UseCaseError: ``WORKER_NOT_RUNNING`` if the session is closed.
        """
        if self._worker is None or not self._worker.is_running:
            raise UseCaseError("WORKER_NOT_RUNNING", "Add host session is not open.")
        return self._worker.enqueue(raw)

    def close(self) -> None:
        """Stop the worker, wait for it to exit, and drop undelivered outcomes."""
        worker, self._worker = self._worker, None
        self._scheduler.cancel(PUMP_CHANNEL)
        if worker is not None:
            worker.stop()
        while True:
            try:
                self._outbox.get_nowait()
            except queue.Empty:
                break

    def pump(self) -> int:
        """Deliver queued outcomes on the calling (UI) thread. Returns the count."""
        delivered = 0
        while self._worker is not None:
            try:
                outcome = self._outbox.get_nowait()
            except queue.Empty:
                break
            delivered += 1
            try:
                self._on_outcome(outcome)
            except Exception:
                self._log.exception("Outcome handler failed for %r", outcome.raw)
        return delivered

    def _on_pump_tick(self) -> bool:
        if self._worker is None:
            return False
        self.pump()
        # a handler may have closed the session
        return self._worker is not None


__all__ = ["AddHostController"]
