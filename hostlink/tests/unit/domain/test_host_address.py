from __future__ import annotations

import pytest

from hostlink.domain.host_address import (
    DEFAULT_HTTP_PORT,
    ResolvedAddress,
    is_valid_hostname,
    parse_host_input,
)


def test_parse_ipv4_with_port() -> None:
    assert parse_host_input("127.0.0.1:47989") == ResolvedAddress("127.0.0.1", 47989)


def test_parse_ipv4_uses_default_port() -> None:
    assert parse_host_input("127.0.0.1") == ResolvedAddress("127.0.0.1", DEFAULT_HTTP_PORT)


def test_parse_bare_ipv6_via_bracket_retry() -> None:
    assert parse_host_input("::1") == ResolvedAddress("::1", DEFAULT_HTTP_PORT)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("[::1]", ResolvedAddress("::1", DEFAULT_HTTP_PORT)),
        ("[::1]:47984", ResolvedAddress("::1", 47984)),
        ("fe80::1234", ResolvedAddress("fe80::1234", DEFAULT_HTTP_PORT)),
        ("gaming-pc.local", ResolvedAddress("gaming-pc.local", DEFAULT_HTTP_PORT)),
        ("gaming-pc:1234", ResolvedAddress("gaming-pc", 1234)),
        ("  192.168.1.20  ", ResolvedAddress("192.168.1.20", DEFAULT_HTTP_PORT)),
    ],
)
def test_parse_accepts_common_forms(raw: str, expected: ResolvedAddress) -> None:
    assert parse_host_input(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "not a host!!",
        "host!!",
        "",
        "   ",
        "127.0.0.1:notaport",
        "127.0.0.1:70000",
        "127.0.0.1:0",
        "host/path",
        "user@host",
        "[::1",
        "300.1.1.1",
    ],
)
def test_parse_rejects_garbage(raw: str) -> None:
    assert parse_host_input(raw) is None


def test_parse_honours_custom_default_port() -> None:
    assert parse_host_input("10.0.0.2", default_port=8080).port == 8080


def test_parse_never_raises_on_non_string() -> None:
    assert parse_host_input(None) is None  # type: ignore[arg-type]


def test_netloc_brackets_ipv6() -> None:
    assert ResolvedAddress("::1", 47989).netloc == "[::1]:47989"
    assert ResolvedAddress("10.0.0.1", 47989).netloc == "10.0.0.1:47989"


def test_hostname_validation() -> None:
    assert is_valid_hostname("example.com")
    assert is_valid_hostname("2001:db8::1")
    assert not is_valid_hostname("-bad.example")
    assert not is_valid_hostname("a" * 64)
    assert not is_valid_hostname("")
