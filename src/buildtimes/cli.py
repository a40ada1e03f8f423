"""Command-line argument parsing for the Jenkins build duration reporter."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .config import DEFAULT_PROJECT, DEFAULT_SUCCESS_COUNT, DEFAULT_TEST_SUITE


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for duration reporting.

    Returns:
        Parsed CLI arguments. ``url`` is ``None`` when omitted so configuration
        loading can fall back to the environment.
    """
    parser = argparse.ArgumentParser(
        prog="jenkins-build-durations",
        description=(
            "Report the durations of the most recent successful builds of every "
            "job under a Jenkins project, optionally keeping those builds forever."
        ),
    )

    parser.add_argument(
        "--url",
        default=None,
        help="Jenkins base URL (default: $JENKINS_URL).",
    )
    parser.add_argument(
        "--suite",
        default=DEFAULT_TEST_SUITE,
        help=f"Test suite folder holding the project (default: {DEFAULT_TEST_SUITE!r}).",
    )
    parser.add_argument(
        "--project",
        "--job",
        dest="project",
        default=DEFAULT_PROJECT,
        help=f"Project whose child jobs are reported (default: {DEFAULT_PROJECT!r}).",
    )
    parser.add_argument(
        "--mark-forever",
        action="store_true",
        help="Mark the selected successful builds to be kept forever.",
    )
    parser.add_argument(
        "--keep-only",
        action="store_true",
        help="Only mark recent successful builds keep-forever; skip the duration report.",
    )
    parser.add_argument(
        "--count",
        type=_positive_int,
        default=DEFAULT_SUCCESS_COUNT,
        help=f"Successful builds to report per job (default: {DEFAULT_SUCCESS_COUNT}).",
    )
    parser.add_argument(
        "--max-workers",
        type=_positive_int,
        default=8,
        help="Maximum concurrent requests per fan-out (default: 8).",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_int,
        default=30,
        help="Per-request timeout in seconds (default: 30).",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)
