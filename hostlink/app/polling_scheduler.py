"""Named UI timers on top of Tk ``after``/``after_cancel``.

Background work never touches widgets; instead the UI thread polls for
results. This scheduler keeps at most one pending timer per channel so a
session can be torn down with a single ``cancel`` call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

ScheduleFn = Callable[[int, Callable[[], None]], str]
CancelFn = Callable[[str], None]


@dataclass
class PollHandle:
    """Pending timer of one channel.

    Attributes:
        channel: Channel key, e.g. ``add-host``.
        token: Token returned by ``after``.
        interval_ms: Repeat interval.
    """

    channel: str
    token: str
    interval_ms: int


class PollingScheduler:
    """One repeating timer per channel."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn) -> None:
        self._after = schedule
        self._after_cancel = cancel
        self._handles: Dict[str, PollHandle] = {}

    def schedule_repeating(self, channel: str, interval_ms: int, tick: Callable[[], bool]) -> None:
        """Call ``tick`` every ``interval_ms`` until it returns False or the channel is cancelled."""
        interval = max(1, int(interval_ms))
        self.cancel(channel)

        def fire() -> None:
            handle = self._handles.pop(channel, None)
            if handle is None or not tick():
                return
            # tick may have re-armed or cancelled the channel itself
            if channel not in self._handles:
                self._arm(channel, interval, fire)

        self._arm(channel, interval, fire)

    def cancel(self, channel: str) -> None:
        handle = self._handles.pop(channel, None)
        if handle is None:
            return
        try:
            self._after_cancel(handle.token)
        except Exception:
            # Tk raises once the token fired or the root is destroyed.
            pass

    def cancel_all(self) -> None:
        for channel in list(self._handles):
            self.cancel(channel)

    def _arm(self, channel: str, interval_ms: int, fire: Callable[[], None]) -> None:
        token = self._after(interval_ms, fire)
        self._handles[channel] = PollHandle(channel=channel, token=token, interval_ms=interval_ms)


__all__ = ["PollHandle", "PollingScheduler"]
