from __future__ import annotations

from typing import Callable, Iterable, Optional

from ..domain.outcomes import AddOutcome
from ..domain.ports import UseCaseError
from ..usecases.error_mapping import OutcomeMessage, describe_outcome


class AddHostVM:
    """State of the add-host screen: input text, busy flag, last message.

    ``on_submit`` receives the trimmed host text; the app wires it to the
    controller that enqueues work. Outcomes come back through ``apply_outcome``
    on the UI thread.
    """

    def __init__(
        self,
        *,
        on_submit: Optional[Callable[[str], None]] = None,
        on_message: Optional[Callable[[OutcomeMessage], None]] = None,
    ) -> None:
        self.on_submit = on_submit
        self.on_message = on_message
        self.host_text: str = ""
        self.in_flight: int = 0
        self.last_message: Optional[OutcomeMessage] = None
        self.added_hosts: list[str] = []

    @property
    def busy(self) -> bool:
        return self.in_flight > 0

    def set_host_text(self, value: str) -> None:
        self.host_text = "" if value is None else str(value)

    def cmd_submit(self) -> str:
        """Validate the current text and hand it to ``on_submit``.

        Raises:
            UseCaseError: ``EMPTY_HOST`` when nothing was entered.
        """
        host = self.host_text.strip()
        if not host:
            raise UseCaseError("EMPTY_HOST", "Please enter an IP address.")
        if self.on_submit:
            self.on_submit(host)
        self.in_flight += 1
        return host

    def apply_outcome(self, outcome: AddOutcome) -> OutcomeMessage:
        message = describe_outcome(outcome)
        self.in_flight = max(0, self.in_flight - 1)
        self.last_message = message
        if outcome.ok and outcome.address is not None:
            if outcome.address.netloc not in self.added_hosts:
                self.added_hosts.append(outcome.address.netloc)
        if self.on_message:
            self.on_message(message)
        return message

    def set_known_hosts(self, netlocs: Iterable[str]) -> None:
        self.added_hosts = list(netlocs)

    def known_hosts_text(self) -> str:
        if not self.added_hosts:
            return "No hosts added yet."
        return "Known hosts: " + ", ".join(self.added_hosts)

    def status_text(self) -> str:
        if self.busy:
            return "Adding host..." if self.in_flight == 1 else f"Adding hosts ({self.in_flight} queued)..."
        if self.last_message is not None:
            return self.last_message.text
        return ""


__all__ = ["AddHostVM"]
