# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

import os
import socket
import sys

import pytest
import yaml

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from probes import gather as gather_mod
from probes.endpoint import Endpoint, parse_duration, split_host_port, validate_endpoint
from probes.errors import (
    AddressParseError,
    ConfigError,
    InvalidDuration,
    InvalidExpectPattern,
    InvalidProtocol,
    MissingExpectPattern,
    MissingPort,
    MissingSendPayload,
)


@pytest.fixture
def no_sockets(monkeypatch):
    def forbidden(*_args, **_kwargs):
        raise AssertionError("socket opened during validation")

    monkeypatch.setattr(socket, "create_connection", forbidden)
    monkeypatch.setattr(socket, "getaddrinfo", forbidden)
    monkeypatch.setattr(socket, "socket", forbidden)


@pytest.mark.parametrize("protocol", ["unknownprotocol", "", "TCP", "icmp"])
def test_bad_protocol(no_sockets, protocol):
    with pytest.raises(InvalidProtocol):
        gather_mod.gather(Endpoint(address=":9999", protocol=protocol))


def test_udp_requires_send(no_sockets):
    with pytest.raises(MissingSendPayload, match="send string cannot be empty"):
        gather_mod.gather(Endpoint(address="127.0.0.1:7", protocol="udp", expect="toast"))


def test_udp_requires_expect(no_sockets):
    with pytest.raises(MissingExpectPattern, match="expected string cannot be empty"):
        gather_mod.gather(Endpoint(address="127.0.0.1:7", protocol="udp", send="toast"))


def test_tcp_send_and_expect_optional():
    endpoint = validate_endpoint(Endpoint(address="127.0.0.1:7", protocol="tcp"))
    assert endpoint.send == b""
    assert endpoint.expect == ""


def test_no_port(no_sockets):
    with pytest.raises(MissingPort, match="bad port"):
        gather_mod.gather(Endpoint(address=":", protocol="tcp"))


def test_address_only(no_sockets):
    with pytest.raises(AddressParseError) as excinfo:
        gather_mod.gather(Endpoint(address="127.0.0.1", protocol="tcp"))
    assert str(excinfo.value) == "address 127.0.0.1: missing port in address"


def test_config_errors_share_a_base():
    assert issubclass(InvalidProtocol, ConfigError)
    assert issubclass(MissingPort, ValueError)


def test_empty_host_becomes_localhost():
    original = Endpoint(address=":9999", protocol="tcp")
    endpoint = validate_endpoint(original)
    assert endpoint.host == "localhost"
    assert endpoint.port == "9999"
    assert endpoint.address == "localhost:9999"
    # The configured endpoint is not touched.
    assert original.address == ":9999"
    assert original.host == ""


def test_default_timeouts_applied_to_copy():
    original = Endpoint(address="127.0.0.1:80", protocol="tcp")
    endpoint = validate_endpoint(original)
    assert endpoint.timeout == 1.0
    assert endpoint.read_timeout == 1.0
    assert original.timeout == 0.0
    assert original.read_timeout == 0.0


def test_configured_timeouts_kept():
    endpoint = validate_endpoint(
        Endpoint(address="127.0.0.1:80", protocol="tcp", timeout=0.25, read_timeout=3.0)
    )
    assert endpoint.timeout == 0.25
    assert endpoint.read_timeout == 3.0


def test_invalid_expect_pattern():
    with pytest.raises(InvalidExpectPattern):
        validate_endpoint(Endpoint(address="127.0.0.1:80", protocol="tcp", expect="(unclosed"))


@pytest.mark.parametrize(
    "address, expected",
    [
        ("127.0.0.1:80", ("127.0.0.1", "80")),
        ("example.com:http", ("example.com", "http")),
        (":9999", ("", "9999")),
        ("[::1]:53", ("::1", "53")),
        ("host:", ("host", "")),
    ],
)
def test_split_host_port(address, expected):
    assert split_host_port(address) == expected


@pytest.mark.parametrize(
    "address, reason",
    [
        ("localhost", "missing port in address"),
        ("::1:53", "too many colons in address"),
        ("[::1", "missing ']' in address"),
        ("[::1]", "missing port in address"),
        ("[::1]x53", "missing port in address"),
    ],
)
def test_split_host_port_errors(address, reason):
    with pytest.raises(AddressParseError, match=reason):
        split_host_port(address)


def test_ipv6_host_rejoined_with_brackets():
    endpoint = validate_endpoint(Endpoint(address="[::1]:53", protocol="tcp"))
    assert endpoint.host == "::1"
    assert endpoint.address == "[::1]:53"


@pytest.mark.parametrize(
    "value, seconds",
    [
        (None, 0.0),
        ("", 0.0),
        ("0", 0.0),
        ("1s", 1.0),
        ("500ms", 0.5),
        ("1m30s", 90.0),
        ("1.5s", 1.5),
        ("2h", 7200.0),
        ("250us", 0.00025),
        (3, 3.0),
        (0.5, 0.5),
        ("2", 2.0),
    ],
)
def test_parse_duration(value, seconds):
    assert parse_duration(value) == pytest.approx(seconds)


@pytest.mark.parametrize(
    "value",
    [
        "abc",
        "1x",
        "s",
        "-1s",
        -2,
        "1s garbage",
        True,
        "nan",
        "inf",
        "-inf",
        float("nan"),
        float("inf"),
        "1e400",
        "25h",
        "9999999999999999h",
        10**400,
    ],
)
def test_parse_duration_rejects(value):
    with pytest.raises(InvalidDuration):
        parse_duration(value)


def test_from_config():
    endpoint = Endpoint.from_config(
        {
            "name": "ssh",
            "address": "127.0.0.1:22",
            "protocol": "tcp",
            "timeout": "2s",
            "read_timeout": "250ms",
            "send": "hello",
            "expect": "SSH-",
        }
    )
    assert endpoint.name == "ssh"
    assert endpoint.timeout == 2.0
    assert endpoint.read_timeout == 0.25
    assert endpoint.send == b"hello"
    assert endpoint.expect == "SSH-"


def test_from_config_defaults_name():
    endpoint = Endpoint.from_config({"address": "127.0.0.1:22", "protocol": "tcp"})
    assert endpoint.name == "net_response"
    assert endpoint.timeout == 0.0


def test_parse_duration_accepts_upper_bound():
    assert parse_duration("24h") == 86400.0


@pytest.mark.parametrize("field", ["timeout", "read_timeout"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), -1.0, 1e12])
def test_validate_rejects_unusable_timeouts(no_sockets, field, value):
    endpoint = Endpoint(address="127.0.0.1:80", protocol="tcp", **{field: value})
    with pytest.raises(InvalidDuration):
        gather_mod.gather(endpoint)


@pytest.mark.parametrize("value", [".inf", ".nan"])
def test_from_config_rejects_yaml_non_finite(value):
    cfg = yaml.safe_load(f"address: '127.0.0.1:80'\nprotocol: tcp\ntimeout: {value}\n")
    with pytest.raises(InvalidDuration):
        Endpoint.from_config(cfg)
