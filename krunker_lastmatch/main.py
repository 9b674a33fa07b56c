from __future__ import annotations

import argparse
import json
import logging

from .client import MatchHistoryClient
from .config import check_interval, load_settings
from .errors import ConfigError
from .models import Credentials
from .poller import CycleResult, MatchPoller
from .render import render_result, result_to_dict


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="krunker_lastmatch",
        description="Show the result of your most recent ranked Krunker match",
    )
    p.add_argument("--player", default=None, help="Krunker username (default: $KRUNKER_USERNAME)")
    p.add_argument("--token", default=None, help="API bearer token (default: $KRUNKER_TOKEN)")
    p.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between polls (default: $KRUNKER_POLL_INTERVAL or 240)",
    )
    p.add_argument("--once", action="store_true", help="Fetch once, print the result and exit")
    p.add_argument("--json", action="store_true", help="Print results as JSON")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
        credentials = Credentials.from_inputs(args.player or settings.player_name, args.token or settings.token)
        interval = check_interval(args.interval) if args.interval is not None else settings.poll_interval_s
    except ConfigError as e:
        print(f"Error: {e}")
        return 2

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    def show(result: CycleResult) -> None:
        if args.json:
            print(json.dumps(result_to_dict(result)), flush=True)
        else:
            print(render_result(result), flush=True)

    with MatchHistoryClient() as client:
        poller = MatchPoller(client, show, interval_s=interval)
        poller.configure(credentials)

        if args.once:
            result = poller.run_cycle()
            return 0 if result is not None and result.ok else 1

        try:
            poller.run_forever()
        except KeyboardInterrupt:
            logger.info("Interrupted; shutting down")
            poller.stop()
    return 0
