"""Translate add-host outcomes into user-facing messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from hostlink.domain.outcomes import AddOutcome, OutcomeKind, describe_port_flags

Level = Literal["info", "error"]

CONNECTION_ERROR_TITLE = "Connection Error"


@dataclass(frozen=True)
class OutcomeMessage:
    """Message template chosen for one outcome.

    Attributes:
        title: Dialog title.
        text: Body text, including the corrective action for the user.
        level: ``info`` for success toasts, ``error`` for dialogs.
        close_dialog: Whether the add-host screen should close.
    """
    title: str
    text: str
    level: Level = "error"
    close_dialog: bool = False


def describe_outcome(outcome: AddOutcome) -> OutcomeMessage:
    """Map an outcome to its message.

    Args:
        outcome: Terminal outcome produced by ``AddHost``.

    Returns:
        OutcomeMessage: One of five distinct templates. Each failure names a
        different fix: correct the address, change network, open firewall
        ports, or retry.
    """
    kind = outcome.kind
    if kind is OutcomeKind.SUCCESS:
        target = outcome.address.netloc if outcome.address else outcome.raw
        return OutcomeMessage(
            title="Add Host",
            text=f"Host {target} added successfully.",
            level="info",
            close_dialog=True,
        )
    if kind is OutcomeKind.INVALID_INPUT:
        return OutcomeMessage(
            title=CONNECTION_ERROR_TITLE,
            text=f"Unknown host '{outcome.raw}'. Check the address for typos.",
        )
    if kind is OutcomeKind.WRONG_SUBNET:
        return OutcomeMessage(
            title=CONNECTION_ERROR_TITLE,
            text=(
                f"{_host(outcome)} is a private address that is not on any network "
                "this device is connected to. Connect to the same network as the host, "
                "or use its public address."
            ),
        )
    if kind is OutcomeKind.BLOCKED_PORTS:
        ports = describe_port_flags(outcome.port_flags) or f"0x{int(outcome.port_flags):x}"
        return OutcomeMessage(
            title=CONNECTION_ERROR_TITLE,
            text=(
                "Your current network is blocking the ports needed for streaming "
                f"({ports}). Ask your network administrator to allow them, or try "
                "another network."
            ),
        )
    return OutcomeMessage(
        title=CONNECTION_ERROR_TITLE,
        text=(
            f"Failed to add {_host(outcome)}. Make sure the host is running and "
            "reachable, then try again."
        ),
    )


def _host(outcome: AddOutcome) -> str:
    if outcome.address is not None:
        return outcome.address.host
    return outcome.raw


__all__ = ["CONNECTION_ERROR_TITLE", "OutcomeMessage", "describe_outcome"]
