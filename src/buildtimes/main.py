"""Entry point for the Jenkins build duration reporter."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from .cli import parse_args
from .config import load_config
from .errors import ConfigurationError
from .report import ReportOrchestrator
from .stats import render_json, render_text

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIGURATION = 2


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def orchestrate_report(argv: Optional[Sequence[str]] = None) -> int:
    """Run the duration report end to end and return a process exit code."""
    try:
        args = parse_args(argv)
        configure_logging(args.verbose)

        config = load_config(
            base_url=args.url,
            test_suite=args.suite,
            project=args.project,
            mark_forever=args.mark_forever,
            success_count=args.count,
            max_workers=args.max_workers,
            timeout_seconds=args.timeout,
        )

        orchestrator = ReportOrchestrator(config)

        if args.keep_only:
            marked = orchestrator.keep_successful_builds_forever()
            print(f"Kept {marked} builds forever.")
            return EXIT_OK

        result = orchestrator.run()

        if args.format == "json":
            print(render_json(result.reports))
        else:
            print(render_text(result.reports))

        if result.marked_builds is not None:
            print(f"\nKept {result.marked_builds} builds forever.")

        return EXIT_OK
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIGURATION
    except Exception:
        logger.exception("Unexpected failure while generating the duration report")
        return EXIT_UNEXPECTED


def main() -> int:
    return orchestrate_report()


if __name__ == "__main__":
    raise SystemExit(main())
