"""Per-job build duration aggregation.

This module turns each job's successful-build selection into duration samples
in seconds. Jobs are processed concurrently and each job is its own failure
domain: an error while aggregating one job is logged and leaves that job with
an empty report, while every other job is reported normally.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .jenkins_client import JenkinsClient
from .models import BuildRecord, DurationSample, JobDescriptor, JobReport
from .selection import select_recent_successes

logger = logging.getLogger(__name__)


def to_seconds(duration_ms: int) -> float:
    """Convert a Jenkins millisecond duration to seconds."""
    return duration_ms / 1000


def fetch_build_duration(client: JenkinsClient, build: BuildRecord) -> Optional[int]:
    """Fetch a build's duration in milliseconds.

    Falls back to the duration already carried by ``build`` when the fetch
    fails or the payload has no usable duration.
    """
    payload = client.get_build(build.url)
    if payload is None or payload.get("duration") is None:
        return build.duration

    try:
        return int(payload["duration"])
    except (TypeError, ValueError):
        logger.warning(
            "Ignoring malformed duration",
            extra={"build_url": build.url, "duration": payload["duration"]},
        )
        return build.duration


def report_selection_size(
    job_name: str,
    selected: int,
    requested: int,
    log: logging.Logger,
) -> None:
    """Log how many successful builds a job yielded.

    Zero successes is logged at ERROR, fewer than requested at WARNING.
    Neither is fatal.
    """
    extra = {"job": job_name, "selected": selected, "requested": requested}
    log.info("%s fetched %d successful builds", job_name, selected, extra=extra)

    if selected == 0:
        log.error("%s has no successful builds", job_name, extra=extra)
    elif selected < requested:
        log.warning(
            "%s has less than %d (%d) successful builds",
            job_name,
            requested,
            selected,
            extra=extra,
        )


def collect_job_report(
    client: JenkinsClient,
    job: JobDescriptor,
    n: int = 3,
    max_workers: int = 8,
    log: Optional[logging.Logger] = None,
) -> JobReport:
    """Select a job's recent successful builds and collect their durations."""
    log = log or logger

    builds = select_recent_successes(client, job.url, n=n, max_workers=max_workers, log=log)
    report_selection_size(job.name, len(builds), n, log)

    if not builds:
        return JobReport(name=job.name)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        durations = list(executor.map(lambda build: fetch_build_duration(client, build), builds))

    samples: List[DurationSample] = []
    for build, duration in zip(builds, durations):
        if duration is None:
            log.warning(
                "Skipping build without duration",
                extra={"job": job.name, "build_number": build.number},
            )
            continue
        samples.append(DurationSample(build_number=build.number, duration_seconds=to_seconds(duration)))

    return JobReport(name=job.name, samples=samples, builds=builds)


def _collect_isolated(
    client: JenkinsClient,
    job: JobDescriptor,
    n: int,
    max_workers: int,
    log: logging.Logger,
) -> JobReport:
    try:
        return collect_job_report(client, job, n=n, max_workers=max_workers, log=log)
    except Exception:
        log.exception("Failed to aggregate durations", extra={"job": job.name})
        return JobReport(name=job.name)


def aggregate(
    client: JenkinsClient,
    jobs: List[JobDescriptor],
    n: int = 3,
    max_workers: int = 8,
    log: Optional[logging.Logger] = None,
) -> List[JobReport]:
    """Build one duration report per job, in the same order as ``jobs``."""
    log = log or logger

    if not jobs:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        reports = list(
            executor.map(lambda job: _collect_isolated(client, job, n, max_workers, log), jobs)
        )

    log.info(
        "Collected duration samples",
        extra={
            "jobs_total": len(jobs),
            "samples_total": sum(len(report.samples) for report in reports),
            "jobs_without_successes": sum(1 for report in reports if not report.builds),
        },
    )

    return reports
