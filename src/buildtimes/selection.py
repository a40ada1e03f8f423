"""Successful-build selection for a single Jenkins job.

For one job this module:
- Fetches the job's build list.
- Orders builds newest-first by build number (stable for equal numbers).
- Fetches every build's detail record concurrently.
- Keeps the first ``n`` builds whose result is ``SUCCESS``.

A build whose detail cannot be fetched is treated as not successful.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .errors import DataShapeError
from .jenkins_client import JenkinsClient, parse_build_detail, parse_builds
from .models import BuildRecord

logger = logging.getLogger(__name__)


def order_newest_first(builds: List[BuildRecord]) -> List[BuildRecord]:
    """Sort builds by descending build number, keeping server order for ties."""
    return sorted(builds, key=lambda build: build.number, reverse=True)


def fetch_build_detail(
    client: JenkinsClient,
    build: BuildRecord,
    log: Optional[logging.Logger] = None,
) -> Optional[BuildRecord]:
    """Return the build merged with its detail record, or ``None`` if unavailable."""
    payload = client.get_build(build.url)
    if payload is None:
        return None

    try:
        return parse_build_detail(build, payload)
    except (TypeError, ValueError):
        (log or logger).warning(
            "Skipping build with malformed detail record",
            extra={"build_url": build.url, "duration": payload.get("duration")},
        )
        return None


def select_recent_successes(
    client: JenkinsClient,
    job_url: str,
    n: int = 3,
    max_workers: int = 8,
    log: Optional[logging.Logger] = None,
) -> List[BuildRecord]:
    """Select the ``n`` most recent successful builds of a job.

    Returns fewer than ``n`` builds (possibly none) when the job does not have
    enough successful builds; never pads and never raises for missing data.
    The result is ordered newest-first.
    """
    log = log or logger

    payload = client.get_job(job_url)
    if payload is None:
        return []

    try:
        candidates = order_newest_first(parse_builds(payload))
    except DataShapeError as exc:
        log.warning("%s", exc, extra={"job_url": job_url})
        return []

    if not candidates:
        return []

    # executor.map yields in submission order, so completion order cannot
    # disturb the newest-first ordering fixed above.
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        details = list(executor.map(lambda build: fetch_build_detail(client, build, log), candidates))

    successes = [detail for detail in details if detail is not None and detail.is_success]
    return successes[:n]


def select_last_successful_build(
    client: JenkinsClient,
    job_url: str,
    max_workers: int = 8,
) -> Optional[BuildRecord]:
    """Return the most recent successful build of a job, if any."""
    builds = select_recent_successes(client, job_url, n=1, max_workers=max_workers)
    return builds[0] if builds else None
