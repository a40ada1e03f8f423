"""Configuration parsing and validation for the Jenkins build duration reporter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from .errors import ConfigurationError

DEFAULT_TEST_SUITE = "Performance Tests"
DEFAULT_PROJECT = "Genresmanagement"
DEFAULT_SUCCESS_COUNT = 3
DEFAULT_MAX_WORKERS = 8
DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the report orchestrator."""

    base_url: str
    test_suite: str = DEFAULT_TEST_SUITE
    project: str = DEFAULT_PROJECT
    mark_forever: bool = False
    success_count: int = DEFAULT_SUCCESS_COUNT
    max_workers: int = DEFAULT_MAX_WORKERS
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    @property
    def project_root(self) -> str:
        """Canonical URL of the project whose child jobs are reported."""
        suite = quote(self.test_suite.strip("/"))
        project = quote(self.project.strip("/"))
        return f"{self.base_url.rstrip('/')}/{suite}/job/{project}"


def load_config(
    base_url: Optional[str] = None,
    test_suite: str = DEFAULT_TEST_SUITE,
    project: str = DEFAULT_PROJECT,
    mark_forever: bool = False,
    success_count: int = DEFAULT_SUCCESS_COUNT,
    max_workers: int = DEFAULT_MAX_WORKERS,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
) -> Config:
    """Build and validate application configuration.

    Args:
        base_url: Jenkins base URL. Falls back to ``JENKINS_URL`` when omitted.
        test_suite: Top-level folder holding the project.
        project: Project whose child jobs are reported.
        mark_forever: Whether selected builds are flagged keep-forever.
        success_count: Number of recent successful builds selected per job.
        max_workers: Thread pool size for concurrent requests.
        timeout_seconds: Per-request timeout in seconds.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If no base URL is configured or a numeric
            setting is not greater than ``0``.
    """
    resolved_url = (base_url or os.getenv("JENKINS_URL", "")).strip()
    if not resolved_url:
        raise ConfigurationError(
            "Missing required Jenkins base URL. "
            "Pass --url or set the 'JENKINS_URL' environment variable."
        )

    if success_count <= 0:
        raise ConfigurationError(
            "Invalid value for 'success_count': expected an integer greater than 0."
        )

    if max_workers <= 0:
        raise ConfigurationError(
            "Invalid value for 'max_workers': expected an integer greater than 0."
        )

    if timeout_seconds <= 0:
        raise ConfigurationError(
            "Invalid value for 'timeout_seconds': expected an integer greater than 0."
        )

    return Config(
        base_url=resolved_url,
        test_suite=test_suite,
        project=project,
        mark_forever=mark_forever,
        success_count=success_count,
        max_workers=max_workers,
        timeout_seconds=timeout_seconds,
    )
