"""Fake Jenkins HTTP responses shared by the test modules."""

import time
from typing import Any, Dict
from unittest.mock import Mock

BASE_URL = "http://jenkins.local"
PROJECT_ROOT = f"{BASE_URL}/Performance%20Tests/job/Genresmanagement"


def response(status_code: int = 200, payload: Any = None, invalid_json: bool = False) -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.text = ""
    if invalid_json:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = payload if payload is not None else {}
    return resp


def fake_session(routes: Dict[str, Any]) -> Mock:
    """Build a session whose GET answers from ``routes`` keyed by URL.

    Route values may be a payload (served as HTTP 200 JSON), a prepared
    response Mock, or an exception instance to raise. Unknown URLs get 404.
    """
    session = Mock()
    session.headers = {}

    def get(url, params=None, timeout=None):
        value = routes.get(url)
        if isinstance(value, Exception):
            raise value
        if value is None:
            return response(404)
        if isinstance(value, Mock):
            return value
        return response(200, value)

    session.get = Mock(side_effect=get)
    return session


def requested_urls(session: Mock) -> list:
    return [call.args[0] for call in session.get.call_args_list]


def job_url(name: str) -> str:
    return f"{PROJECT_ROOT}/job/{name}/"


def build_url(job: str, number: int) -> str:
    return f"{job_url(job)}{number}/"


def add_job(routes: Dict[str, Any], name: str, builds: list) -> None:
    """Register a job and its builds.

    ``builds`` holds ``(number, result, duration_ms)`` tuples in server order.
    """
    routes[f"{job_url(name)}api/json"] = {
        "builds": [{"number": number, "url": build_url(name, number)} for number, _, _ in builds]
    }
    for number, result, duration in builds:
        detail = {"number": number, "result": result}
        if duration is not None:
            detail["duration"] = duration
        routes[f"{build_url(name, number)}api/json"] = detail


def add_project(routes: Dict[str, Any], job_names: list) -> None:
    routes[f"{PROJECT_ROOT}/api/json"] = {
        "jobs": [{"name": name, "url": job_url(name)} for name in job_names]
    }


def delay_responses(session: Mock, delays: Dict[str, float]) -> list:
    """Slow down the answers for some URLs and record completion order.

    Returns the list that collects each URL as its answer is produced.
    """
    completed = []
    answer = session.get.side_effect

    def get(url, params=None, timeout=None):
        time.sleep(delays.get(url, 0))
        try:
            return answer(url, params=params, timeout=timeout)
        finally:
            completed.append(url)

    session.get.side_effect = get
    return completed
