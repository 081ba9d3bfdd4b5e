#!/usr/bin/env python3
"""
Render the function definitions of a cscope database as a per-file tree.

Usage:
    python run_cscopetree.py -f cscope.out
    python run_cscopetree.py -f cscope.out --config cscopetree.yml --log-level INFO
    python run_cscopetree.py -f cscope.out --dump-jsonl out/records.jsonl --report-dir out/reports
"""

import argparse
import logging
import sys
from typing import List, Optional

from core.run_artifacts import write_records_jsonl, write_run_report
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id
from core.tree_config import ConfigValidationError, load_tree_config
from cscope.errors import CscopeError
from cscope.reader import parse_database_with_stats
from cscope.render import render_tree

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        prog="cscopetree",
        description="Print the function definitions in a cscope database as a tree.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  cscopetree -f cscope.out\n"
            "  cscopetree -f cscope.out --dump-jsonl out/records.jsonl\n"
        ),
    )

    parser.add_argument(
        "-f", "--file",
        required=True,
        metavar="FILE",
        help="cscope database file.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML config file (encoding, log_level, max_version, show_line_label).",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=False,
        help="Fail on config problems instead of falling back to defaults.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level. Logs go to stderr.",
    )
    parser.add_argument(
        "--dump-jsonl",
        default=None,
        metavar="PATH",
        help="Also write every parsed record as JSON lines to PATH.",
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        metavar="DIR",
        help="Also write a JSON run report into DIR.",
    )

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> None:
    """Read the database and print its tree.

    Raises:
        ConfigValidationError: On config problems in strict mode.
        CscopeError: If the database cannot be read or parsed.
        OSError: If an output artifact cannot be written.
    """
    config = load_tree_config(args.config, strict=args.strict_config)
    configure_structured_logging(getattr(logging, args.log_level or config.log_level))
    run_id = set_run_id()

    database, stats = parse_database_with_stats(
        args.file,
        encoding=config.encoding,
        max_version=config.max_version,
    )

    with phase_scope("render"):
        output = render_tree(database.records, show_line_label=config.show_line_label)
        sys.stdout.write(output)

    if args.dump_jsonl:
        count = write_records_jsonl(database.records, args.dump_jsonl)
        logger.info(f"Wrote {count} records to {args.dump_jsonl}")

    if args.report_dir:
        path = write_run_report(
            report={
                "status": "success",
                "database": args.file,
                "header": database.header.to_dict(),
                "stats": stats.to_dict(),
                "config": config.to_dict(),
            },
            run_id=run_id,
            output_dir=args.report_dir,
        )
        logger.info(f"Wrote run report to {path}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code.

    Usage errors exit 1 like every other failure; argparse has already
    written the usage message to stderr. ``--help`` still exits 0.
    """
    try:
        args = parse_args(argv)
    except SystemExit as e:
        return 0 if e.code in (0, None) else 1

    try:
        run(args)
    except (CscopeError, ConfigValidationError, OSError) as e:
        logger.debug("cscopetree failed", exc_info=True)
        print(f"cscopetree: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
