"""Tests for keep-forever marking."""

import sys
from pathlib import Path

import requests

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from buildtimes.jenkins_client import JenkinsClient
from buildtimes.retention import mark_forever

from jenkins_fakes import fake_session, requested_urls


def test_mark_forever_toggles_every_url_across_jobs():
    """Verify one toggleLogKeep request per build URL, flattened across jobs."""
    session = fake_session({})
    client = JenkinsClient(session=session)

    count = mark_forever(
        client,
        {"JobA": ["http://ci/job/A/3/", "http://ci/job/A/2/"], "JobB": ["http://ci/job/B/9/"]},
    )

    assert count == 3
    assert sorted(requested_urls(session)) == [
        "http://ci/job/A/2/toggleLogKeep",
        "http://ci/job/A/3/toggleLogKeep",
        "http://ci/job/B/9/toggleLogKeep",
    ]


def test_mark_forever_counts_dispatched_requests_even_when_some_fail():
    """Verify the count reflects dispatched requests, not confirmed toggles."""
    session = fake_session({"http://ci/job/A/3/toggleLogKeep": requests.ConnectionError("down")})

    count = mark_forever(JenkinsClient(session=session), {"JobA": ["http://ci/job/A/3/", "http://ci/job/A/2/"]})

    assert count == 2
    assert session.get.call_count == 2


def test_mark_forever_with_no_builds_issues_nothing():
    """Verify jobs without selected builds produce no requests."""
    session = fake_session({})

    assert mark_forever(JenkinsClient(session=session), {"JobB": []}) == 0
    assert session.get.call_count == 0
