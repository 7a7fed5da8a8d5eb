#!/usr/bin/env python3
"""
Elevator Bank Entry Point

Runs a command script against a freshly built dispatcher, then stops the
bank. Optionally writes the event trace as JSON lines.
"""

import argparse
import json
import signal
import sys
import time
from pathlib import Path
from typing import List, Optional

import structlog

from .channels import ELEVATOR_EVENTS
from .config import configure_logging
from .loader.runner import ScriptRunner
from .scheduler.factory import create_dispatcher
from .scheduler.scheduler import Dispatcher

logger = structlog.get_logger(__name__)


def handle_signals(dispatcher: Dispatcher):
    """Stop the bank on SIGINT/SIGTERM."""

    def handle_exit(sig, frame):
        logger.info("exit_signal_received", signal=sig)
        dispatcher.stop()
        raise KeyboardInterrupt

    signal.signal(signal.SIGINT, handle_exit)
    signal.signal(signal.SIGTERM, handle_exit)


def write_trace(dispatcher: Dispatcher, path: Path) -> int:
    """Dump the event stream to path, one JSON record per line."""
    entries = dispatcher.events.range(ELEVATOR_EVENTS)
    with path.open("w", encoding="utf-8") as fh:
        for message_id, data in entries:
            fh.write(json.dumps({"id": message_id, **data}) + "\n")
    return len(entries)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elevator-bank", description="Run an elevator bank command script."
    )
    parser.add_argument("script", type=Path, help="Command script to execute")
    parser.add_argument("--trace", type=Path, help="Write the event trace (JSON lines) here")
    parser.add_argument(
        "--drain",
        type=float,
        default=0.0,
        help="Seconds to let the bank keep running after the script ends",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        lines = args.script.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.error("script_unreadable", path=str(args.script), error=str(e))
        return 2

    dispatcher = create_dispatcher()
    handle_signals(dispatcher)
    try:
        ScriptRunner(dispatcher).run(lines)
        if args.drain > 0:
            time.sleep(args.drain)
    except KeyboardInterrupt:
        logger.info("shutdown_requested")
    finally:
        dispatcher.stop()
        if not dispatcher.join(timeout=5.0):
            logger.warning("threads_still_running")
        if args.trace:
            count = write_trace(dispatcher, args.trace)
            logger.info("trace_written", path=str(args.trace), records=count)
        dispatcher.events.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
