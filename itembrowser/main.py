"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from flowkit.runtime.config import initialize_flowkit_config
from flowkit.runtime.logging import setup_flowkit_logging, stop_flowkit_logging
from flowkit.runtime.root import AfterFinishPolicy
from itembrowser.app.bootstrap import build_app
from itembrowser.infra.config import load_app_config, load_default_env_files
from itembrowser.ui.console import ConsoleHost, split_script

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse items in a text console.")
    parser.add_argument("--script", help="';'-separated commands instead of reading stdin")
    parser.add_argument("--items", help="JSON file with items (default: built-in sample)")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in AfterFinishPolicy],
        help="what the root does after the item list flow finishes",
    )
    parser.add_argument("--journal", help="write the navigation journal as JSON lines")
    parser.add_argument("--sync", action="store_true", help="load items on the UI thread")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the item browser."""
    load_default_env_files()
    args = build_parser().parse_args(argv)
    config = initialize_flowkit_config()
    setup_flowkit_logging()
    app_config = load_app_config()
    if args.items:
        app_config = replace(app_config, items_path=args.items)
    policy = AfterFinishPolicy.parse(args.policy, config.root_policy)
    logger.info(
        "itembrowser_start profile=%s strict=%s policy=%s",
        config.profile.name,
        config.strict_discipline,
        policy.value,
    )

    graph = build_app(
        config=config, app_config=app_config, policy=policy, threaded=not args.sync
    )
    host = ConsoleHost(graph, output=sys.stdout)
    commands = split_script(args.script) if args.script is not None else sys.stdin
    try:
        return host.run(commands)
    finally:
        graph.close()
        if args.journal:
            Path(args.journal).write_text(graph.journal.to_jsonl(), encoding="utf-8")
        stop_flowkit_logging()


if __name__ == "__main__":
    raise SystemExit(main())
