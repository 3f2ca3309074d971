# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

"""Render probe results as InfluxDB line protocol.

Example:
ssh,port=22,protocol=tcp,result_text=success,server=127.0.0.1 result_code=0i,result_type="success",response_time=0.0012 1700000000000000000
"""

import time


def _escape_measurement(value):
    return value.replace("\\", "\\\\").replace(",", "\\,").replace(" ", "\\ ")


def _escape_key(value):
    return _escape_measurement(value).replace("=", "\\=")


def _format_field(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return f"{value}i"
    if isinstance(value, float):
        return repr(value)
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def format_line(measurement, tags, fields, timestamp_ns=None):
    if not fields:
        raise ValueError("line protocol requires at least one field")
    parts = [_escape_measurement(measurement)]
    for key in sorted(tags):
        # Empty tag values are not allowed by the protocol.
        if tags[key] == "":
            continue
        parts.append(f"{_escape_key(key)}={_escape_key(str(tags[key]))}")
    head = ",".join(parts)
    body = ",".join(f"{_escape_key(key)}={_format_field(value)}" for key, value in fields.items())
    if timestamp_ns is None:
        timestamp_ns = time.time_ns()
    return f"{head} {body} {timestamp_ns}"


def format_result(result, timestamp_ns=None):
    return format_line(result.name, result.tags(), result.fields(), timestamp_ns)
