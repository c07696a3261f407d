"""Command-line entry point: rank a saved snapshot and print the shortlists."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from spark_ranker.config.environment import EnvironmentConfig
from spark_ranker.config.exceptions import ConfigurationError
from spark_ranker.config.loader import load_config
from spark_ranker.config.models import RankerConfig
from spark_ranker.logging import get_logger
from spark_ranker.logging.config import configure_logging
from spark_ranker.matching.utils import build_event_payload, build_profile_payload
from spark_ranker.pipeline.orchestrators import RankingService
from spark_ranker.pipeline.snapshot import load_snapshot
from spark_ranker.pipeline.sources import InMemoryCandidateSource
from spark_ranker.utils.timestamps import utc_now

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[RankerConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log settings.

    Log level priority: CLI > environment > config file.

    Args:
        config_path: Path to configuration file (None = lookup order / defaults)
        log_level_override: Log level from the CLI

    Returns:
        Tuple of (RankerConfig, EnvironmentConfig) with log_level and log_format set

    Raises:
        ConfigurationError: If configuration is invalid
    """
    ranker_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = ranker_config.logging.level

    if not env_config.log_format:
        env_config.log_format = ranker_config.logging.format

    return ranker_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Spark Ranker - rank candidate profiles and events for a requester"
    )
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON snapshot with requester, profiles, events, and exclusions",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--mode",
        choices=["matches", "events", "both"],
        default="both",
        help="Which shortlist(s) to produce (default: both)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Override the configured shortlist size",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Rank a snapshot and print the shortlists as JSON on stdout.

    Returns:
        Exit code (0 for success, 1 for configuration or input errors).
    """
    args = build_parser().parse_args(argv)

    if args.limit is not None and args.limit < 0:
        print("Configuration Error: --limit must be zero or greater", file=sys.stderr)
        return 1

    try:
        ranker_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )

        snapshot = load_snapshot(args.input)
        logger.info(
            "Snapshot loaded",
            extra={
                "event": "cli.snapshot.loaded",
                "input": str(args.input),
                "profile_count": len(snapshot.profiles),
                "event_count": len(snapshot.events),
            },
        )

        if args.limit is not None:
            ranker_config = ranker_config.model_copy(
                update={
                    "profiles": ranker_config.profiles.model_copy(update={"limit": args.limit}),
                    "events": ranker_config.events.model_copy(update={"limit": args.limit}),
                }
            )

        service = RankingService(
            InMemoryCandidateSource(snapshot.profiles, snapshot.events), ranker_config
        )
        now = snapshot.now or utc_now()

        output = {}
        if args.mode in ("matches", "both"):
            matches = service.matches_for(snapshot.requester, snapshot.exclusion_set())
            output["matches"] = [
                build_profile_payload(result, today=now.date()) for result in matches
            ]
        if args.mode in ("events", "both"):
            events = service.events_for(snapshot.requester, now=now)
            output["events"] = [build_event_payload(result) for result in events]

        print(json.dumps(output, indent=2, ensure_ascii=False, default=str))
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            "Configuration error",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
