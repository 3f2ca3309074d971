# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

"""Configuration errors.

These are raised before any socket is opened. An endpoint that raises one of
them is not probed and produces no metrics. Network outcomes (timeouts,
refused connections, mismatches) are never raised, they are reported in the
probe result instead.
"""


class ConfigError(ValueError):
    pass


class InvalidProtocol(ConfigError):
    def __init__(self, protocol):
        super().__init__(f"bad protocol: {protocol!r} (expected tcp or udp)")
        self.protocol = protocol


class MissingSendPayload(ConfigError):
    def __init__(self):
        super().__init__("send string cannot be empty for udp")


class MissingExpectPattern(ConfigError):
    def __init__(self):
        super().__init__("expected string cannot be empty for udp")


class InvalidExpectPattern(ConfigError):
    def __init__(self, pattern, reason):
        super().__init__(f"invalid expect pattern {pattern!r}: {reason}")
        self.pattern = pattern


class AddressParseError(ConfigError):
    def __init__(self, address, reason):
        super().__init__(f"address {address}: {reason}")
        self.address = address


class MissingPort(ConfigError):
    def __init__(self, address):
        super().__init__(f"address {address}: bad port")
        self.address = address


class InvalidDuration(ConfigError):
    def __init__(self, value):
        super().__init__(f"invalid duration: {value!r}")
        self.value = value
