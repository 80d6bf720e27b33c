# -*- coding: utf-8 -*-
"""
actinia CLI - Browse an actinia instance and run process chains.

Usage::

    python -m actinia_client locations
    python -m actinia_client mapsets nc_spm_08
    python -m actinia_client module r.slope.aspect
    python -m actinia_client build chain.yaml
    python -m actinia_client run chain.yaml nc_spm_08 astest --wait

Author
------
geoint.org

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from actinia_client.core.chainfile import ChainFileLoader
from actinia_client.core.config import ClientConfig, load_config
from actinia_client.core.errors import ActiniaError
from actinia_client.core.job import ProcessStatus
from actinia_client.remote.client import ActiniaClient

logger = logging.getLogger("actinia_client")

EXIT_OK = 0
EXIT_JOB_FAILED = 1
EXIT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="actinia",
        description="Browse an actinia instance and run process chains.",
    )
    parser.add_argument("--config", type=Path, help="Path to a JSON config file.")
    parser.add_argument("--url", help="Base URL of the actinia instance.")
    parser.add_argument("--user", help="User name for basic authentication.")
    parser.add_argument("--password", help="Password for basic authentication.")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds.")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log requests and status changes.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("locations", help="List locations.")

    p = sub.add_parser("mapsets", help="List the mapsets of a location.")
    p.add_argument("location")

    p = sub.add_parser("rasters", help="List the raster layers of a mapset.")
    p.add_argument("location")
    p.add_argument("mapset")

    p = sub.add_parser("strds", help="List the space time raster datasets of a mapset.")
    p.add_argument("location")
    p.add_argument("mapset")

    sub.add_parser("modules", help="List processing modules.")

    p = sub.add_parser("module", help="Show a module's inputs and outputs.")
    p.add_argument("name")

    p = sub.add_parser("build", help="Print the process chain document for a chain file.")
    p.add_argument("chainfile", type=Path)

    p = sub.add_parser("run", help="Submit a chain file for execution.")
    p.add_argument("chainfile", type=Path)
    p.add_argument("location")
    p.add_argument("mapset")
    p.add_argument(
        "--wait",
        action="store_true",
        help="Poll the job status until it finishes or fails.",
    )
    p.add_argument("--interval", type=float, help="Seconds between status polls.")

    return parser


def _resolve_config(args: argparse.Namespace) -> ClientConfig:
    config = load_config(args.config)
    if args.url:
        config.url = args.url
    if args.user:
        config.username = args.user
    if args.password:
        config.password = args.password
    if args.timeout is not None:
        config.timeout = args.timeout
    return config


def _print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)


def _show_module(client: ActiniaClient, name: str) -> int:
    module = client.get_module(name)
    if module is None:
        print(f"Error: unknown module: {name}", file=sys.stderr)
        return EXIT_ERROR
    print(f"{module.name}: {module.description}")
    for title, params in (
        ("inputs", module.input_parameters()),
        ("outputs", module.output_parameters()),
    ):
        print(f"{title}:")
        for param in params:
            flags = "optional" if param.optional else "required"
            default = f" [default: {param.default_value}]" if param.has_default else ""
            print(f"  {param.name} ({param.type}, {flags}){default}")
    return EXIT_OK


def wait_for_status(
    status: ProcessStatus,
    interval: float,
    sleep: Optional[Callable[[float], None]] = None,
) -> str:
    """Poll a job until its status is terminal.

    Parameters
    ----------
    status : ProcessStatus
    interval : float
        Seconds to sleep between polls.
    sleep : Optional[Callable[[float], None]]
        Sleep function. Defaults to ``time.sleep``.

    Returns
    -------
    str
        The terminal status.
    """
    sleep = sleep or time.sleep
    previous: Optional[str] = None
    while True:
        current = status.refresh()
        if current != previous:
            print(f"status: {current}")
            previous = current
        if status.is_terminal:
            return current
        sleep(interval)


def _run(client: ActiniaClient, args: argparse.Namespace, config: ClientConfig) -> int:
    plan = ChainFileLoader().load(args.chainfile)
    chain = client.create_process_chain_from_plan(plan)
    status = client.submit(args.location, args.mapset, chain)
    print(f"Submitted {len(chain)} steps, status at: {status.url}")
    if not args.wait:
        return EXIT_OK
    interval = args.interval if args.interval is not None else config.poll_interval
    wait_for_status(status, interval)
    return EXIT_OK if status.is_finished else EXIT_JOB_FAILED


def dispatch(client: ActiniaClient, args: argparse.Namespace, config: ClientConfig) -> int:
    if args.command == "locations":
        _print_lines([loc.name for loc in client.get_locations()])
    elif args.command == "mapsets":
        _print_lines([m.name for m in client.get_mapsets(args.location)])
    elif args.command == "rasters":
        _print_lines(client.get_raster_layers(args.location, args.mapset))
    elif args.command == "strds":
        _print_lines(client.get_space_time_raster_datasets(args.location, args.mapset))
    elif args.command == "modules":
        _print_lines([m.name for m in client.get_modules()])
    elif args.command == "module":
        return _show_module(client, args.name)
    elif args.command == "build":
        plan = ChainFileLoader().load(args.chainfile)
        chain = client.create_process_chain_from_plan(plan)
        print(chain.to_json(indent=2))
    elif args.command == "run":
        return _run(client, args, config)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if getattr(args, "chainfile", None) is not None and not args.chainfile.exists():
        print(f"Error: chain file not found: {args.chainfile}", file=sys.stderr)
        return EXIT_ERROR

    config = _resolve_config(args)
    logger.debug("Using actinia instance at %s", config.url)
    try:
        with ActiniaClient.from_config(config) as client:
            return dispatch(client, args, config)
    except (ActiniaError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
