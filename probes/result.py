# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

"""Probe outcomes and the result record handed to the metrics output."""

import enum
from dataclasses import dataclass
from typing import Optional


class ResultType(str, enum.Enum):
    SUCCESS = "success"
    TIMEOUT = "timeout"
    CONNECTION_FAILED = "connection_failed"
    READ_FAILED = "read_failed"
    STRING_MISMATCH = "string_mismatch"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Outcome:
    """What a tcp or udp probe observed, before identity tags are added."""

    result_type: ResultType
    response_time: float
    string_found: Optional[bool] = None


@dataclass(frozen=True)
class ProbeResult:
    name: str
    server: str
    port: str
    protocol: str
    result_type: ResultType
    response_time: float
    string_found: Optional[bool] = None

    @property
    def result_code(self):
        return 0 if self.result_type is ResultType.SUCCESS else 1

    def tags(self):
        return {
            "server": self.server,
            "port": self.port,
            "protocol": self.protocol,
            "result_text": self.result_type.value,
        }

    def fields(self):
        fields = {
            "result_code": self.result_code,
            "result_type": self.result_type.value,
            "response_time": self.response_time,
        }
        if self.string_found is not None:
            fields["string_found"] = self.string_found
        return fields
