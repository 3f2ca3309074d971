# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

"""TCP probe.

Connects within ``timeout``, optionally sends ``send``, and when ``expect``
is set reads one line within ``read_timeout`` and looks for the pattern in
it. A completed connection with nothing to expect counts as success.

Example:
endpoint = validate_endpoint(Endpoint(
    address="127.0.0.1:22",
    protocol="tcp",
    expect="SSH-",
))
outcome = tcp_probe(endpoint)
"""

import logging
import socket
import time

from .result import Outcome, ResultType
from .util import matches_expect, read_line

logger = logging.getLogger(__name__)


def tcp_probe(endpoint):
    start = time.perf_counter()
    try:
        sock = socket.create_connection((endpoint.host, endpoint.port), timeout=endpoint.timeout)
    except socket.timeout:
        return _finish(endpoint, ResultType.TIMEOUT, start)
    except (OSError, UnicodeError) as exc:
        # UnicodeError comes from IDNA encoding of an over-long host label.
        logger.debug("tcp connect to %s failed: %s", endpoint.address, exc)
        return _finish(endpoint, ResultType.CONNECTION_FAILED, start)

    with sock:
        if endpoint.send:
            try:
                sock.sendall(endpoint.send)
            except OSError as exc:
                logger.debug("tcp send to %s failed: %s", endpoint.address, exc)
                return _finish(endpoint, ResultType.CONNECTION_FAILED, start)

        if not endpoint.expect:
            return _finish(endpoint, ResultType.SUCCESS, start)

        deadline = time.monotonic() + endpoint.read_timeout
        try:
            line = read_line(sock, deadline)
        except OSError as exc:
            logger.debug("tcp read from %s failed: %s", endpoint.address, exc)
            return _finish(endpoint, ResultType.READ_FAILED, start, string_found=False)

    text = line.decode("utf-8", errors="replace")
    if matches_expect(text, endpoint.expect):
        return _finish(endpoint, ResultType.SUCCESS, start, string_found=True)
    return _finish(endpoint, ResultType.STRING_MISMATCH, start, string_found=False)


def _finish(endpoint, result_type, start, string_found=None):
    elapsed = time.perf_counter() - start
    logger.debug("tcp %s -> %s in %.3fs", endpoint.address, result_type, elapsed)
    return Outcome(result_type=result_type, response_time=elapsed, string_found=string_found)
