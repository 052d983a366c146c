"""Command line interface for the World Fairness Score workflow."""
from __future__ import annotations

import argparse
import logging
import logging.config
import os
from pathlib import Path
from typing import Iterable, List, Optional

from fairness import (
    STAGE_ORDER,
    StageContext,
    StageRunner,
    bootstrap,
    calculate,
    create_default_context,
    registry,
)
from fairness.normalization.sources import ConfigurationError
from fairness.scoring.config import load_methodology
from fairness.settings import Settings


def load_environment() -> None:
    candidates = []
    if env_file := os.getenv("ENV_FILE"):
        candidates.append(Path(env_file))
    candidates.append(Path(".env"))

    for path in candidates:
        if not path.exists():
            continue
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                key, _, value = line.partition("=")
                os.environ.setdefault(key.strip(), value.strip().strip('"'))


load_environment()

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Configure logging from an INI file or fall back to basic configuration."""

    config_candidates = []
    if config_env := os.getenv("LOGGING_CONFIG"):
        config_candidates.append(Path(config_env))
    config_candidates.extend(Path(name) for name in ("logging.ini", "logging.cfg"))

    for config_path in config_candidates:
        if not config_path.exists():
            continue
        try:
            logging.config.fileConfig(config_path, disable_existing_loggers=False)
        except (OSError, ValueError, KeyError) as exc:
            print(f"Failed to load logging config {config_path}: {exc}. Falling back to basic logging.")
            break
        if verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        return

    level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


bootstrap()
runner = StageRunner(registry, STAGE_ORDER)


def _context(countries: Optional[List[str]] = None) -> StageContext:
    context = create_default_context(Settings.load())
    if countries:
        context.options["countries"] = countries
    return context


def _run_pipeline(stages: Optional[Iterable[str]], countries: Optional[List[str]]) -> None:
    context = _context(countries)
    try:
        resolved = runner.resolve(stages)
    except ValueError as exc:
        print(f"Error: {exc}")
        raise SystemExit(2) from exc
    logger.info(
        "Running stages %s with data directory %s and output %s.",
        resolved,
        context.settings.data_dir,
        context.settings.output_dir,
    )
    runner.run(resolved, context)


def command_run(args: argparse.Namespace) -> None:
    stages: Optional[List[str]] = args.stages if args.stages else None
    _run_pipeline(stages, args.country)


def command_stages(_: argparse.Namespace) -> None:
    print("World Fairness Score Registered Stages:")
    for name, description, module in registry.describe(runner.available()):
        print(f"- {name}: {description} ({module})")


def command_validate(_: argparse.Namespace) -> None:
    settings = Settings.load()
    try:
        methodology = load_methodology(settings.methodology_path)
    except (ConfigurationError, FileNotFoundError) as exc:
        print(f"ERROR: {exc}")
        raise SystemExit(1) from exc
    print(f"Dimension weights sum: {methodology.weight_sum:.2f} (should be 1.00)")
    print(
        f"Weight validation: PASSED ({len(methodology.dimensions)} dimensions, "
        f"{len(methodology.sources)} sources)"
    )


def command_score(args: argparse.Namespace) -> None:
    try:
        calculations = calculate(args.country, settings=Settings.load())
    except ValueError as exc:
        print(f"Error: {exc}")
        raise SystemExit(2) from exc
    print(f"Scored {len(calculations)} country(ies).")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the World Fairness Score workflow.")
    parser.add_argument("--verbose", action="store_true", help="Show detailed calculation steps")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Only validate the methodology without generating output",
    )
    subparsers = parser.add_subparsers(dest="command")

    parser_run = subparsers.add_parser("run", help="Run the full pipeline")
    parser_run.add_argument(
        "stages",
        nargs="*",
        help="Optional ordered list of stages to run instead of all registered stages.",
    )
    parser_run.set_defaults(func=command_run)

    parser_score = subparsers.add_parser("score", help="Load, score and export in one go")
    parser_score.set_defaults(func=command_score)

    for sub in (parser_run, parser_score):
        sub.add_argument(
            "--country",
            action="append",
            metavar="ISO3",
            help="Calculate only for this country (repeatable)",
        )

    parser_stages = subparsers.add_parser("stages", help="List registered stages")
    parser_stages.set_defaults(func=command_stages)

    parser_validate = subparsers.add_parser("validate", help="Validate the methodology file")
    parser_validate.set_defaults(func=command_validate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)
    if args.validate:
        command_validate(args)
        return 0
    if not getattr(args, "func", None):
        parser.error("a command is required unless --validate is given")
    args.func(args)
    return 0


if __name__ == "__main__":  # pragma: no cover - entry point for CLI usage
    raise SystemExit(main())
