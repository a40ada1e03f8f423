"""Keep-forever marking for selected Jenkins builds."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Mapping, Optional, Sequence

from .jenkins_client import JenkinsClient

logger = logging.getLogger(__name__)


def mark_forever(
    client: JenkinsClient,
    build_urls_by_job: Mapping[str, Sequence[str]],
    max_workers: int = 8,
    log: Optional[logging.Logger] = None,
) -> int:
    """Toggle the keep-forever flag on every build URL.

    Jenkins does not confirm the toggle, so success means every request was
    dispatched. Returns the number of toggle requests issued.
    """
    log = log or logger

    urls: List[str] = [url for job_urls in build_urls_by_job.values() for url in job_urls]
    if not urls:
        log.info("No builds to keep forever")
        return 0

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        list(executor.map(client.toggle_keep_forever, urls))

    log.info("Saved %d builds", len(urls), extra={"jobs_total": len(build_urls_by_job)})
    return len(urls)
