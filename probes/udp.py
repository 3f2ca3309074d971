# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

"""UDP probe.

UDP has no handshake, so reachability is only proven by an answer: the probe
sends ``send``, waits up to ``read_timeout`` for one datagram and looks for
``expect`` in it. Both are required for udp endpoints.

Example:
endpoint = validate_endpoint(Endpoint(
    address="127.0.0.1:9999",
    protocol="udp",
    send="ping",
    expect="pong",
))
outcome = udp_probe(endpoint)
"""

import logging
import socket
import time

from .result import Outcome, ResultType
from .util import matches_expect, read_datagram

logger = logging.getLogger(__name__)

READ_BYTES = 1024


def _open_socket(endpoint):
    family, socktype, proto, _canon, remote = socket.getaddrinfo(
        endpoint.host, endpoint.port, type=socket.SOCK_DGRAM
    )[0]
    sock = socket.socket(family, socktype, proto)
    try:
        sock.bind(("::" if family == socket.AF_INET6 else "0.0.0.0", 0))
        sock.connect(remote)
    except OSError:
        sock.close()
        raise
    return sock


def udp_probe(endpoint):
    start = time.perf_counter()
    try:
        sock = _open_socket(endpoint)
    except (OSError, UnicodeError) as exc:
        logger.debug("udp open to %s failed: %s", endpoint.address, exc)
        return _finish(endpoint, ResultType.CONNECTION_FAILED, start)

    with sock:
        try:
            sock.send(endpoint.send)
        except OSError as exc:
            logger.debug("udp send to %s failed: %s", endpoint.address, exc)
            return _finish(endpoint, ResultType.CONNECTION_FAILED, start)

        deadline = time.monotonic() + endpoint.read_timeout
        try:
            data = read_datagram(sock, deadline, READ_BYTES)
        except OSError as exc:
            # A closed port usually shows up here as ConnectionRefusedError.
            logger.debug("udp read from %s failed: %s", endpoint.address, exc)
            return _finish(endpoint, ResultType.READ_FAILED, start)

    text = data.decode("utf-8", errors="replace")
    if matches_expect(text, endpoint.expect):
        return _finish(endpoint, ResultType.SUCCESS, start, string_found=True)
    return _finish(endpoint, ResultType.STRING_MISMATCH, start, string_found=False)


def _finish(endpoint, result_type, start, string_found=None):
    elapsed = time.perf_counter() - start
    logger.debug("udp %s -> %s in %.3fs", endpoint.address, result_type, elapsed)
    return Outcome(result_type=result_type, response_time=elapsed, string_found=string_found)
