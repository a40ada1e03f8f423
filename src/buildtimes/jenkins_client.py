"""Jenkins JSON API client for build duration retrieval."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter

from .errors import DataShapeError, FetchError, MissingJobsField
from .models import BuildRecord, JobDescriptor

logger = logging.getLogger(__name__)

_PRETTY_PARAMS = {"pretty": "true"}


def api_url(url: str) -> str:
    """Return the JSON API endpoint below a Jenkins object URL."""
    return f"{url.rstrip('/')}/api/json"


def toggle_keep_url(url: str) -> str:
    """Return the keep-forever toggle endpoint below a Jenkins build URL."""
    return f"{url.rstrip('/')}/toggleLogKeep"


class JenkinsClient:
    """Small client for the Jenkins JSON API.

    Every request is a single attempt: there are no retries, and a failed
    request is reported to the logger and surfaces as ``None``.
    """

    def __init__(
        self,
        timeout_seconds: int = 30,
        session: Optional[requests.Session] = None,
        log: Optional[logging.Logger] = None,
        pool_maxsize: int = 10,
    ) -> None:
        """Initialize a Jenkins API client.

        Args:
            timeout_seconds: Per-request timeout in seconds.
            session: Optional pre-configured session (for pre-authorized access).
            log: Logger receiving fetch failure events.
            pool_maxsize: Connections kept per host when the client creates
                its own session; should cover the number of concurrent requests.
        """
        self._timeout_seconds = timeout_seconds
        self._log = log or logger

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=pool_maxsize, pool_maxsize=pool_maxsize)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self._session = session
        self._session.headers.update({"Accept": "application/json"})

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Execute one GET request and decode its JSON body.

        Raises:
            FetchError: If the request fails, returns HTTP >= 400, or does not
                return valid JSON.
        """
        self._log.debug("GET %s", url)
        try:
            response = self._session.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise FetchError(f"Jenkins request failed: GET {url}") from exc

        if response.status_code >= 400:
            raise FetchError(
                f"Jenkins API request failed: GET {url} returned {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Jenkins API returned invalid JSON: GET {url}") from exc

    def fetch(self, url: str, params: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        """Fetch a JSON document, returning ``None`` when it cannot be retrieved."""
        try:
            return self._get_json(url, params=params)
        except FetchError as exc:
            self._log.warning(
                "Fetch failed: %s",
                exc,
                extra={"url": url, "cause": repr(exc.__cause__)},
            )
            return None

    def get_project(self, project_root: str) -> Optional[Dict[str, Any]]:
        return self._as_dict(self.fetch(api_url(project_root), params=_PRETTY_PARAMS))

    def get_job(self, job_url: str) -> Optional[Dict[str, Any]]:
        return self._as_dict(self.fetch(api_url(job_url), params=_PRETTY_PARAMS))

    def get_build(self, build_url: str) -> Optional[Dict[str, Any]]:
        return self._as_dict(self.fetch(api_url(build_url)))

    def toggle_keep_forever(self, build_url: str) -> None:
        """Issue a keep-forever toggle for a build.

        The endpoint returns no structured confirmation, so the response body
        is ignored. Failures are logged.
        """
        url = toggle_keep_url(build_url)
        self._log.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            self._log.warning("Keep-forever toggle failed: GET %s", url, extra={"cause": repr(exc)})
            return

        if response.status_code >= 400:
            self._log.warning(
                "Keep-forever toggle returned %s: GET %s",
                response.status_code,
                url,
            )

    def _as_dict(self, payload: Optional[Any]) -> Optional[Dict[str, Any]]:
        if payload is None:
            return None
        if not isinstance(payload, dict):
            self._log.warning("Jenkins API returned unexpected payload shape: %r", type(payload))
            return None
        return payload


def parse_jobs(
    payload: Dict[str, Any],
    url_for: Optional[Callable[[str], str]] = None,
) -> List[JobDescriptor]:
    """Extract child job descriptors from a project root payload.

    Entries without a url get one from ``url_for`` when given, and are
    skipped otherwise.

    Raises:
        MissingJobsField: If the payload has no ``jobs`` list.
    """
    items = payload.get("jobs")
    if not isinstance(items, list):
        raise MissingJobsField("Project response has no 'jobs' collection.")

    jobs: List[JobDescriptor] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        url = item.get("url")
        if not name:
            continue
        if not url:
            if url_for is None:
                continue
            url = url_for(str(name))
        jobs.append(JobDescriptor(name=str(name), url=str(url)))

    return jobs


def parse_builds(payload: Dict[str, Any]) -> List[BuildRecord]:
    """Extract build references from a job payload, in server order.

    Raises:
        DataShapeError: If the payload has no ``builds`` list.
    """
    items = payload.get("builds")
    if not isinstance(items, list):
        raise DataShapeError("Job response has no 'builds' collection.")

    builds: List[BuildRecord] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        number = item.get("number")
        url = item.get("url")
        if number is None or not url:
            continue
        try:
            number = int(number)
        except (TypeError, ValueError):
            continue
        builds.append(BuildRecord(number=number, url=str(url)))

    return builds


def parse_build_detail(reference: BuildRecord, payload: Dict[str, Any]) -> BuildRecord:
    """Merge a build detail payload into a build reference.

    Raises:
        TypeError, ValueError: If ``duration`` is not an integer value.
    """
    duration = payload.get("duration")
    return BuildRecord(
        number=reference.number,
        url=reference.url,
        result=payload.get("result"),
        duration=int(duration) if duration is not None else None,
    )


class JobLister:
    """Lists the child jobs of a project root.

    The project root response is fetched once per instance; the orchestrator
    creates one lister per run so every call in that run shares one response.
    """

    def __init__(
        self,
        client: JenkinsClient,
        project_root: str,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._client = client
        self._project_root = project_root
        self._log = log or logger
        self._fetched = False
        self._payload: Optional[Dict[str, Any]] = None

    @property
    def project_root(self) -> str:
        return self._project_root

    def _project_payload(self) -> Optional[Dict[str, Any]]:
        if not self._fetched:
            self._log.info("Fetching from %s", self._project_root)
            self._payload = self._client.get_project(self._project_root)
            self._fetched = True
        return self._payload

    def job_url_for(self, name: str) -> str:
        """Return the URL of a child job from its name."""
        return f"{self._project_root.rstrip('/')}/job/{name}/"

    def list_jobs(self) -> List[JobDescriptor]:
        """Return the project's child jobs; empty when the listing is unavailable."""
        payload = self._project_payload()
        if payload is None:
            self._log.warning(
                "No project data available; no jobs to report",
                extra={"project_root": self._project_root},
            )
            return []

        try:
            jobs = parse_jobs(payload, url_for=self.job_url_for)
        except MissingJobsField as exc:
            self._log.warning("%s", exc, extra={"project_root": self._project_root})
            return []

        self._log.info("Got %d jobs", len(jobs), extra={"project_root": self._project_root})
        return jobs
