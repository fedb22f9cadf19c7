"""Media plan dashboard entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mediaplan.application.report_service import run_dashboard_pipeline
from mediaplan.config import LOG_LEVELS, get_dashboard_settings
from mediaplan.domain.errors import ValidationError


def main(argv: list[str] | None = None) -> int:
    settings = get_dashboard_settings()
    parser = argparse.ArgumentParser(description="Media plan dashboard: KPIs and panel aggregates")
    parser.add_argument("input", type=Path, help="Media plan file (.json array or .xlsx, first sheet).")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=settings.output_dir,
        help=f"Directory for summary.json / summary.xlsx (default: {settings.output_dir}).",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=LOG_LEVELS,
        help=f"Log level (default: {settings.log_level}).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run_dashboard_pipeline(args.input, output_dir=args.output_dir, settings=settings)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Invalid media plan: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
