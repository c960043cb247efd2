"""Command-line entry point for career outlook searches."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from career_outlooks.config.environment import EnvironmentConfig
from career_outlooks.config.exceptions import ConfigurationError
from career_outlooks.config.loader import load_config
from career_outlooks.config.models import AppConfig
from career_outlooks.data.exceptions import DataLoadError
from career_outlooks.logging import get_logger
from career_outlooks.logging.config import configure_logging
from career_outlooks.matching.exceptions import MatchingError
from career_outlooks.pipeline import ProgramOutlookPipeline, build_pipeline

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Args:
        config_path: Path to configuration file (None searches the defaults)
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with env_config.log_level set

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="career-outlooks",
        description="Match programs to occupations and report employment outlooks",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--program",
        metavar="NID",
        help="Program id to look up jobs and outlooks for",
    )
    target.add_argument(
        "--credential",
        metavar="LABEL",
        help="Credential label to match requirements against (degree, diploma, certificate, trades)",
    )
    parser.add_argument(
        "--keywords",
        metavar="TEXT",
        help="Comma-separated search keywords (required with --credential)",
    )
    return parser


def run_credential_search(
    pipeline: ProgramOutlookPipeline, credential: str, keywords: str
) -> Dict[str, Any]:
    """Match requirements for an ad-hoc credential and keywords."""
    matches = pipeline.search(credential, keywords)
    results: List[Dict[str, Any]] = [match.to_dict() for match in matches]
    return {
        "credential": credential,
        "keywords": keywords,
        "count": len(results),
        "results": results,
    }


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for configuration, data or matching errors).
    """
    start_time = time.time()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.credential is not None and not args.keywords:
        parser.error("--keywords is required with --credential")

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "outlook_source": app_config.outlooks.source,
                "exclusion_phrases": app_config.matching.exclusion_phrases,
            },
        )

        pipeline = build_pipeline(app_config, env_config)

        if args.program is not None:
            output = pipeline.run_for_program(args.program).to_dict()
        else:
            output = run_credential_search(pipeline, args.credential, args.keywords)

        print(json.dumps(output, indent=2, ensure_ascii=False))

        logger.info(
            "Search finished",
            extra={
                "event": "cli.completed",
                "duration_seconds": round(time.time() - start_time, 3),
                "result_count": output["count"],
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except DataLoadError as e:
        print(f"Data Error: {e}", file=sys.stderr)
        logger.error(
            f"Data error: {e}",
            extra={"event": "data.error", "error_type": type(e).__name__},
        )
        return 1
    except MatchingError as e:
        print(f"Matching Error: {e}", file=sys.stderr)
        logger.error(
            f"Matching error: {e}",
            extra={"event": "matching.error", "error_type": type(e).__name__},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
