# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

"""Endpoint configuration and validation.

Config keys:
- name (str, optional, default "net_response"; metric name)
- address (str, required, "host:port"; empty host means localhost)
- protocol (str, required, "tcp" or "udp")
- timeout (duration, optional, default 1s; connect timeout)
- read_timeout (duration, optional, default 1s; only used when expecting)
- send (str, optional for tcp, required for udp)
- expect (str, optional for tcp, required for udp; contains-match pattern)

Durations are strings such as "1s", "250ms" or "1m30s", or a bare number
of seconds.

Example:
cfg = {
    "name": "ssh",
    "address": "127.0.0.1:22",
    "protocol": "tcp",
    "timeout": "2s",
    "expect": "SSH-",
}
"""

import dataclasses
import logging
import math
import re
from dataclasses import dataclass

from .errors import (
    AddressParseError,
    InvalidDuration,
    InvalidExpectPattern,
    InvalidProtocol,
    MissingExpectPattern,
    MissingPort,
    MissingSendPayload,
)
from .util import compile_expect

logger = logging.getLogger(__name__)

PROTOCOLS = ("tcp", "udp")
DEFAULT_NAME = "net_response"
DEFAULT_TIMEOUT = 1.0
DEFAULT_READ_TIMEOUT = 1.0
MAX_DURATION = 24 * 3600.0

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


@dataclass(frozen=True)
class Endpoint:
    address: str
    protocol: str
    name: str = DEFAULT_NAME
    timeout: float = 0.0
    read_timeout: float = 0.0
    send: bytes = b""
    expect: str = ""
    # Filled in by validate_endpoint.
    host: str = ""
    port: str = ""

    def __post_init__(self):
        if isinstance(self.send, str):
            object.__setattr__(self, "send", self.send.encode("utf-8"))

    @classmethod
    def from_config(cls, cfg):
        send = cfg.get("send") or b""
        if not isinstance(send, bytes):
            send = str(send).encode("utf-8")
        return cls(
            name=str(cfg.get("name") or DEFAULT_NAME),
            address=str(cfg.get("address") or ""),
            protocol=str(cfg.get("protocol") or ""),
            timeout=parse_duration(cfg.get("timeout")),
            read_timeout=parse_duration(cfg.get("read_timeout")),
            send=send,
            expect="" if cfg.get("expect") is None else str(cfg.get("expect")),
        )


def _checked_duration(seconds, value):
    # settimeout rejects NaN and overflows on huge values.
    try:
        seconds = float(seconds)
    except OverflowError:
        raise InvalidDuration(value) from None
    if not math.isfinite(seconds) or seconds < 0 or seconds > MAX_DURATION:
        raise InvalidDuration(value)
    return seconds


def parse_duration(value):
    """Parse a time span into seconds. None and "" mean unset (0.0)."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise InvalidDuration(value)
    if isinstance(value, (int, float)):
        return _checked_duration(value, value)

    text = str(value).strip()
    if text.startswith("-"):
        raise InvalidDuration(value)
    text = text.lstrip("+")
    try:
        seconds = float(text)
    except ValueError:
        seconds = None
    if seconds is not None:
        return _checked_duration(seconds, value)

    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            raise InvalidDuration(value)
        total += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    if pos == 0 or pos != len(text):
        raise InvalidDuration(value)
    return _checked_duration(total, value)


def split_host_port(address):
    """Split "host:port", "[v6]:port" or ":port" into (host, port)."""
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise AddressParseError(address, "missing ']' in address")
        if end + 1 == len(address) or address[end + 1] != ":":
            raise AddressParseError(address, "missing port in address")
        host = address[1:end]
        port = address[end + 2:]
        if "[" in host or "]" in host:
            raise AddressParseError(address, "unexpected '[' in address")
    else:
        index = address.rfind(":")
        if index < 0:
            raise AddressParseError(address, "missing port in address")
        host = address[:index]
        port = address[index + 1:]
        if ":" in host:
            raise AddressParseError(address, "too many colons in address")
        if "[" in host or "]" in host:
            raise AddressParseError(address, "unexpected '[' in address")
    if "[" in port or "]" in port:
        raise AddressParseError(address, "unexpected ']' in address")
    return host, port


def join_host_port(host, port):
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def validate_endpoint(endpoint):
    """Check an endpoint and return a normalized copy ready to probe.

    Raises a ConfigError subclass when the endpoint cannot be probed. The
    input is left untouched; the returned copy has default timeouts applied,
    host and port split out, and an empty host replaced by "localhost".
    """
    if endpoint.protocol not in PROTOCOLS:
        raise InvalidProtocol(endpoint.protocol)
    if endpoint.protocol == "udp":
        if not endpoint.send:
            raise MissingSendPayload()
        if not endpoint.expect:
            raise MissingExpectPattern()
    if endpoint.expect:
        try:
            compile_expect(endpoint.expect)
        except re.error as exc:
            raise InvalidExpectPattern(endpoint.expect, exc) from exc
    timeout = _checked_duration(endpoint.timeout, endpoint.timeout)
    read_timeout = _checked_duration(endpoint.read_timeout, endpoint.read_timeout)

    host, port = split_host_port(endpoint.address)
    if not port:
        raise MissingPort(endpoint.address)
    if not host:
        host = "localhost"

    normalized = dataclasses.replace(
        endpoint,
        address=join_host_port(host, port),
        host=host,
        port=port,
        timeout=timeout or DEFAULT_TIMEOUT,
        read_timeout=read_timeout or DEFAULT_READ_TIMEOUT,
    )
    logger.debug("validated %s endpoint %s (%s)", normalized.protocol, normalized.address, normalized.name)
    return normalized
