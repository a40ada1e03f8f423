"""Report orchestration: job listing, duration aggregation, retention marking."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import Config
from .durations import aggregate
from .jenkins_client import JenkinsClient, JobLister
from .models import JobDescriptor, JobReport
from .retention import mark_forever
from .selection import select_recent_successes

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReportResult:
    """Outcome of one orchestrator run."""

    reports: List[JobReport] = field(default_factory=list)
    marked_builds: Optional[int] = None

    def to_dicts(self) -> List[Dict[str, object]]:
        return [report.to_dict() for report in self.reports]


def build_urls_by_job(reports: List[JobReport]) -> Dict[str, List[str]]:
    """Group the selected build URLs of each report by job name."""
    return {report.name: [build.url for build in report.builds] for report in reports}


class ReportOrchestrator:
    """Drives a full duration report for the configured project."""

    def __init__(
        self,
        config: Config,
        client: Optional[JenkinsClient] = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config
        self._log = log or logger
        # Job threads each open their own detail pool: max_workers squared.
        self._client = client or JenkinsClient(
            timeout_seconds=config.timeout_seconds,
            log=self._log,
            pool_maxsize=config.max_workers * config.max_workers,
        )

    def _new_lister(self) -> JobLister:
        return JobLister(self._client, self._config.project_root, log=self._log)

    def run(self) -> ReportResult:
        """Collect duration reports for every job, then mark builds if enabled.

        The keep-forever step reuses the builds selected for the report.
        """
        lister = self._new_lister()
        jobs = lister.list_jobs()

        reports = aggregate(
            self._client,
            jobs,
            n=self._config.success_count,
            max_workers=self._config.max_workers,
            log=self._log,
        )
        result = ReportResult(reports=reports)

        if self._config.mark_forever:
            result.marked_builds = mark_forever(
                self._client,
                build_urls_by_job(reports),
                max_workers=self._config.max_workers,
                log=self._log,
            )

        return result

    def keep_successful_builds_forever(self) -> int:
        """Select each job's recent successful builds and mark them keep-forever.

        Runs without collecting durations. Returns the number of toggle
        requests issued.
        """
        jobs = self._new_lister().list_jobs()
        if not jobs:
            return mark_forever(self._client, {}, log=self._log)

        with ThreadPoolExecutor(max_workers=self._config.max_workers) as executor:
            selections = list(executor.map(self._selected_urls, jobs))

        return mark_forever(
            self._client,
            {job.name: urls for job, urls in zip(jobs, selections)},
            max_workers=self._config.max_workers,
            log=self._log,
        )

    def _selected_urls(self, job: JobDescriptor) -> List[str]:
        try:
            builds = select_recent_successes(
                self._client,
                job.url,
                n=self._config.success_count,
                max_workers=self._config.max_workers,
                log=self._log,
            )
        except Exception:
            self._log.exception("Failed to select builds to keep", extra={"job": job.name})
            return []
        return [build.url for build in builds]
