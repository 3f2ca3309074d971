# MIT License
# Copyright (c) 2026 Franz Granlund
# See LICENSE file in the project root for full license information.

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor

import yaml

from probes.endpoint import DEFAULT_NAME, Endpoint
from probes.errors import ConfigError
from probes.gather import gather
from probes.line_protocol import format_result
from probes.log import setup_logging

logger = logging.getLogger("net_response")

DESCRIPTION = "TCP or UDP 'ping' given url and collect response time in seconds"

SAMPLE_CONFIG = """\
# This can be added multiple times.
net_response:
  ## Name is used as the name of the metric
  - name: net_response
    ## Protocol, must be "tcp" or "udp"
    ## NOTE: because the "udp" protocol does not respond to requests, it
    ## requires a send/expect string pair (see below).
    protocol: tcp
    ## Server address (default host localhost)
    address: "localhost:80"
    ## Set timeout
    timeout: 1s
    ## Set read timeout (only used if expecting a response)
    read_timeout: 1s
    ## The following options are required for UDP checks. For TCP, they are
    ## optional. The probe will send the given string to the server and then
    ## expect to receive the given 'expect' string back.
    ## string sent to the server
    # send: ssh
    ## expected string in answer
    # expect: ssh
"""


def _run_one(item):
    name, endpoint = item
    try:
        return name, gather(endpoint), None
    except ConfigError as exc:
        return name, None, exc


def run_probes(endpoints, workers=1):
    """Probe (name, Endpoint) pairs and return (name, result, error) in order.

    Exactly one of result and error is set for each endpoint.
    """
    if workers <= 1 or len(endpoints) <= 1:
        return [_run_one(item) for item in endpoints]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(_run_one, endpoints))


def run_config(config, workers=1):
    items = config.get("net_response", [])
    if not isinstance(items, list):
        print("config error: net_response must be a list")
        return 1

    any_failed = False
    endpoints = []
    for item in items:
        if not isinstance(item, dict):
            print(f"config error: entry must be a mapping, got {item!r}")
            any_failed = True
            continue
        name = item.get("name") or DEFAULT_NAME
        try:
            endpoints.append((name, Endpoint.from_config(item)))
        except ConfigError as exc:
            print(f"[fail] {name}: {exc}")
            any_failed = True

    for name, result, error in run_probes(endpoints, workers):
        if error is not None:
            print(f"[fail] {name}: {error}")
            any_failed = True
            continue
        print(format_result(result))

    return 1 if any_failed else 0


def main(argv=None):
    parser = argparse.ArgumentParser(description=DESCRIPTION)
    parser.add_argument(
        "-c",
        "--config",
        default="net_response.yaml",
        help="path to config YAML (default: net_response.yaml)",
    )
    parser.add_argument(
        "-s",
        "--sample",
        action="store_true",
        help="show the description and a sample configuration, then exit",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=1,
        help="number of endpoints probed concurrently (default: 1)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="logging level (default: $NET_RESPONSE_LOG_LEVEL or WARNING)",
    )
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.sample:
        print(DESCRIPTION)
        print(SAMPLE_CONFIG)
        return 0

    try:
        with open(args.config, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except OSError as exc:
        print(f"failed to read config: {exc}")
        return 1
    except yaml.YAMLError as exc:
        print(f"invalid yaml: {exc}")
        return 1
    if not isinstance(config, dict):
        print("config error: top level must be a mapping")
        return 1

    logger.debug("loaded %s", args.config)
    return run_config(config, workers=args.workers)


if __name__ == "__main__":
    sys.exit(main())
