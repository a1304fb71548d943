from __future__ import annotations

import argparse
import logging
import sys

from .aggregate import aggregate_file
from .config import load_config
from .report import build_report, render_report_text

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s|%(name)s|%(levelname)s|%(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_LEVELS = [logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG]


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="timetracking",
        description="Generates reports from timetracking CSV files.",
    )
    p.add_argument("infile", nargs="?", default=None, help="Input CSV file.")
    p.add_argument(
        "-v",
        dest="verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (can be used multiple times).",
    )
    p.add_argument(
        "-i",
        "--ignore-submitted",
        action="store_true",
        default=None,
        help="Ignore the value of the submitted column.",
    )
    p.add_argument("--config", default=None, help="Path to a JSON config file (default: OS config directory).")
    p.add_argument("--version", action="store_true", help="Print version and exit.")
    return p


def level_for(verbosity: int) -> int:
    return _LEVELS[max(0, min(verbosity, len(_LEVELS) - 1))]


def setup_logging(level: int) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT, stream=sys.stdout, force=True)


def main(argv: list[str] | None = None) -> int:
    from . import __version__
    argv = argv if argv is not None else sys.argv[1:]
    args = _parser().parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    setup_logging(level_for(args.verbose))
    cfg = load_config(args.config)
    level = level_for(args.verbose + cfg.verbosity)
    logging.getLogger().setLevel(level)
    logger.warning(f"Logging level set to: {logging.getLevelName(level)}")

    if args.infile is None:
        logger.error("infile parameter was not provided")
        return 2

    ignore_submitted = cfg.ignore_submitted if args.ignore_submitted is None else args.ignore_submitted

    try:
        stats = aggregate_file(args.infile, ignore_submitted, submitted_tokens=cfg.submitted_tokens)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"An error was returned during processing of the input file. {e}")
        return 1

    print(render_report_text(build_report(stats)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
