# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

import logging

from .endpoint import validate_endpoint
from .result import ProbeResult
from .tcp import tcp_probe
from .udp import udp_probe

logger = logging.getLogger(__name__)

_PROBES = {
    "tcp": tcp_probe,
    "udp": udp_probe,
}


def gather(endpoint):
    """Probe one endpoint and return its ProbeResult.

    Configuration problems raise a ConfigError before any socket is opened.
    Network failures never raise; they are reported through the result.
    """
    endpoint = validate_endpoint(endpoint)
    outcome = _PROBES[endpoint.protocol](endpoint)
    logger.info(
        "%s %s://%s: %s in %.3fs",
        endpoint.name,
        endpoint.protocol,
        endpoint.address,
        outcome.result_type,
        outcome.response_time,
    )
    return ProbeResult(
        name=endpoint.name,
        server=endpoint.host,
        port=endpoint.port,
        protocol=endpoint.protocol,
        result_type=outcome.result_type,
        response_time=outcome.response_time,
        string_found=outcome.string_found,
    )


probe = gather
