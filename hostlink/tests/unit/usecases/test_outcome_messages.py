from __future__ import annotations

from hostlink.domain.host_address import ResolvedAddress
from hostlink.domain.outcomes import AddOutcome, PortFlag
from hostlink.usecases.error_mapping import CONNECTION_ERROR_TITLE, describe_outcome

_ADDR = ResolvedAddress("192.168.77.5", 47989)


def test_success_message_closes_dialog() -> None:
    message = describe_outcome(AddOutcome.success("192.168.77.5", _ADDR))

    assert message.level == "info"
    assert message.close_dialog is True
    assert "192.168.77.5:47989" in message.text


def test_invalid_input_mentions_raw_text() -> None:
    message = describe_outcome(AddOutcome.invalid_input("not a host!!"))

    assert message.title == CONNECTION_ERROR_TITLE
    assert "not a host!!" in message.text
    assert message.close_dialog is False


def test_wrong_subnet_names_the_host() -> None:
    message = describe_outcome(AddOutcome.wrong_subnet("192.168.77.5", _ADDR))

    assert "192.168.77.5" in message.text
    assert "network" in message.text


def test_blocked_ports_lists_ports() -> None:
    flags = PortFlag.TCP_47984 | PortFlag.TCP_47989
    message = describe_outcome(AddOutcome.blocked_ports("x", _ADDR, flags))

    assert "TCP 47984, TCP 47989" in message.text


def test_every_failure_kind_gets_distinct_text() -> None:
    outcomes = [
        AddOutcome.invalid_input("x"),
        AddOutcome.wrong_subnet("x", _ADDR),
        AddOutcome.blocked_ports("x", _ADDR, PortFlag.TCP_47989),
        AddOutcome.generic_failure("x", _ADDR),
    ]
    texts = {describe_outcome(outcome).text for outcome in outcomes}

    assert len(texts) == 4
    assert all(describe_outcome(o).level == "error" for o in outcomes)
