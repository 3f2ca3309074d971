# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

import re
import socket
import time

MAX_LINE_BYTES = 64 * 1024


def compile_expect(expect):
    # Wrapped in wildcards: the response only has to contain the pattern.
    return re.compile(".*" + expect + ".*")


def matches_expect(value, expect):
    match = compile_expect(expect).search(value)
    return match is not None and match.group(0) != ""


def remaining(deadline):
    left = deadline - time.monotonic()
    if left <= 0:
        raise socket.timeout("read deadline exceeded")
    return left


def read_line(sock, deadline, limit=MAX_LINE_BYTES):
    """Read one line before ``deadline`` (a time.monotonic() value).

    The line ends at "\\n" or at EOF after some data; the trailing "\\r\\n"
    is stripped. EOF before any data raises ConnectionError and running past
    the deadline raises socket.timeout. Bytes past the newline are dropped.
    """
    data = b""
    while b"\n" not in data and len(data) < limit:
        sock.settimeout(remaining(deadline))
        chunk = sock.recv(min(4096, limit - len(data)))
        if not chunk:
            if not data:
                raise ConnectionError("connection closed before any data")
            break
        data += chunk
    line = data.split(b"\n", 1)[0]
    if line.endswith(b"\r"):
        line = line[:-1]
    return line


def read_datagram(sock, deadline, max_bytes):
    sock.settimeout(remaining(deadline))
    return sock.recv(max_bytes)
