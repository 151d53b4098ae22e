"""Single-consumer worker that serializes manual host additions.

The UI thread enqueues raw host strings; one worker thread takes them in FIFO
order and runs ``AddHost`` for each, so at most one add operation is in flight
at any time. ``stop`` wakes a blocked dequeue, lets any in-flight request run
to completion, suppresses its report, and joins the thread.
"""

from __future__ import annotations

import itertools
import logging
import queue
import threading
from typing import Callable, Optional, Union

from hostlink.domain.outcomes import AddOutcome, AddRequest
from hostlink.domain.ports import UseCaseError

OutcomeCallback = Callable[[AddOutcome], None]

_STOP = object()


class HostAdditionWorker:
    """Own the request queue consumer and its thread lifecycle."""

    def __init__(
        self,
        add_host: Callable[[str], AddOutcome],
        on_outcome: OutcomeCallback,
        *,
        name: str = "hostlink-add-host",
    ) -> None:
        """Create an idle worker.

        Args:
            add_host: Callable processing one raw string (normally ``AddHost``).
            on_outcome: Receives each outcome on the worker thread. UI callers
                must marshal to their own thread.
            name: Thread name used in logs.
        """
        self._log = logging.getLogger(__name__)
        self._add_host = add_host
        self._on_outcome = on_outcome
        self._name = name
        self._queue: "queue.Queue[Union[AddRequest, object]]" = queue.Queue()
        self._cancel = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._ids = itertools.count(1)

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        """Launch the consumer thread. A worker runs for one session only.

        Raises:
            RuntimeError: If the worker was already started or stopped.
        """
        if self._thread is not None or self._cancel.is_set():
            raise RuntimeError("HostAdditionWorker cannot be started twice")
        self._thread = threading.Thread(target=self._loop, name=self._name, daemon=True)
        self._thread.start()
        self._log.debug("Started %s", self._name)

    def enqueue(self, raw: str) -> AddRequest:
        """Queue one raw host string without waiting for it to be processed.

        Raises:
            UseCaseError: If the worker has already been stopped.
        """
        if self._cancel.is_set():
            raise UseCaseError("WORKER_STOPPED", "Host addition is no longer running.")
        request = AddRequest(raw=raw, request_id=next(self._ids))
        self._queue.put_nowait(request)
        self._log.debug("Queued request #%d (%r)", request.request_id, raw)
        return request

    def stop(self, timeout: Optional[float] = None) -> bool:
        """Cancel the loop and wait for the thread to exit.

        Args:
            timeout: Optional join timeout in seconds. ``None`` waits for the
                in-flight request, however long it takes.

        Returns:
            bool: True once the thread has exited, was never started, or is
            the caller itself and will exit after the current callback.
        """
        thread = self._thread
        self._cancel.set()
        if thread is None:
            return True
        self._queue.put_nowait(_STOP)
        if thread is threading.current_thread():
            # called from on_outcome; the loop exits once the callback returns
            self._log.debug("Stop requested from %s itself", self._name)
            return True
        thread.join(timeout)
        if thread.is_alive():
            self._log.warning("%s still busy after stop timeout", self._name)
            return False
        self._log.debug("Stopped %s", self._name)
        return True

    def _loop(self) -> None:
        while not self._cancel.is_set():
            item = self._queue.get()
            if item is _STOP or self._cancel.is_set():
                return
            self._process(item)  # type: ignore[arg-type]

    def _process(self, request: AddRequest) -> None:
        self._log.info("Adding host #%d: %r", request.request_id, request.raw)
        try:
            outcome = self._add_host(request.raw)
        except Exception:
            # AddHost folds its own errors; this guards custom callables.
            self._log.exception("Unexpected error while adding %r", request.raw)
            outcome = AddOutcome.generic_failure(request.raw)

        if self._cancel.is_set():
            self._log.info("Dropping outcome for #%d after cancellation", request.request_id)
            return

        self._log.info("Host #%d finished: %s", request.request_id, outcome.kind.value)
        try:
            self._on_outcome(outcome)
        except Exception:
            self._log.exception("Outcome callback failed for %r", request.raw)


__all__ = ["HostAdditionWorker", "OutcomeCallback"]
