"""Command line interface for the death relay."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence

from deathrelay import osc
from deathrelay.logs import (
    find_latest_log_file,
    get_latest_log_file,
    open_explorer,
    split_and_format,
)
from deathrelay.watcher import RESET_ADDRESS, LogWatcher, Target


def parse_targets(text: str) -> list[Target]:
    """Turn comma-separated names into targets numbered from 1."""
    names = filter(None, (name.strip() for name in text.split(",")))
    return [Target(number, name) for number, name in enumerate(names, start=1)]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deathrelay",
        description="Relay player deaths from the game log as OSC parameters.",
    )
    parser.add_argument("--host", default=osc.DEFAULT_HOST, help="OSC host")
    parser.add_argument("--port", type=int, default=osc.DEFAULT_PORT, help="OSC port")
    commands = parser.add_subparsers(dest="command", required=True)

    latest = commands.add_parser("latest", help="print the newest log file")
    latest.add_argument("--log-dir", help="directory to search instead of the default")

    fmt = commands.add_parser("format", help="render names as an HTML list")
    fmt.add_argument("names")

    opener = commands.add_parser("open", help="open the folder holding a file")
    opener.add_argument("path")

    commands.add_parser("reset", help="send the reset parameter")

    watch = commands.add_parser("watch", help="follow the log and relay deaths")
    watch.add_argument("names", help="comma-separated player names")
    watch.add_argument("--log", help="log file to follow instead of the newest")
    watch.add_argument("--record", action="store_true", help="record unknown players")
    return parser


def _print_event(event: str, payload: object) -> None:
    print(event if payload is None else f"{event}: {payload}", flush=True)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    def sender(address: str, values: list) -> bool:
        return osc.send_message(address, values, args.host, args.port)

    if args.command == "latest":
        if args.log_dir is not None:
            found = find_latest_log_file(args.log_dir)
            latest = str(found) if found is not None else None
        else:
            latest = get_latest_log_file()
        if latest is None:
            print("No log file found", file=sys.stderr)
            return 1
        print(latest)
        return 0

    if args.command == "format":
        print(split_and_format(args.names))
        return 0

    if args.command == "open":
        return 0 if open_explorer(args.path) is not None else 1

    if args.command == "reset":
        return 0 if sender(RESET_ADDRESS, [True]) else 1

    watcher = LogWatcher(parse_targets(args.names), _print_event, sender)
    if args.record:
        watcher.toggle_recording(True)
    path = watcher.start(args.log)
    if path is None:
        watcher.stop()
        print("No log file found", file=sys.stderr)
        return 1
    print(f"Watching {path}", flush=True)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        watcher.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())