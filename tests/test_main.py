"""Tests for application orchestration in the main module."""

import sys
from pathlib import Path
from unittest.mock import Mock, patch

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from buildtimes.main import orchestrate_report
from buildtimes.models import DurationSample, JobReport
from buildtimes.report import ReportResult


def _orchestrator(result):
    orchestrator = Mock()
    orchestrator.run.return_value = result
    return orchestrator


def test_orchestrate_report_success(capsys):
    """Verify orchestration returns 0 and prints the rendered report."""
    result = ReportResult(reports=[JobReport(name="JobA", samples=[DurationSample(7, 12.5)])])

    with patch("buildtimes.main.ReportOrchestrator", return_value=_orchestrator(result)) as ctor_mock:
        exit_code = orchestrate_report(["--url", "http://ci/job/", "--project", "Catalog"])

    assert exit_code == 0
    config = ctor_mock.call_args.args[0]
    assert config.base_url == "http://ci/job/"
    assert config.project == "Catalog"
    assert config.mark_forever is False
    output = capsys.readouterr().out
    assert "JobA:" in output
    assert "#7: 12.5s" in output


def test_orchestrate_report_prints_marked_count(capsys):
    """Verify the keep-forever count is printed when marking ran."""
    result = ReportResult(reports=[], marked_builds=3)

    with patch("buildtimes.main.ReportOrchestrator", return_value=_orchestrator(result)):
        exit_code = orchestrate_report(["--url", "http://ci/", "--mark-forever", "--format", "json"])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "[]" in output
    assert "Kept 3 builds forever." in output


def test_orchestrate_report_missing_url_returns_configuration_exit_code(monkeypatch):
    """Verify a missing base URL aborts with the configuration exit code before any request."""
    monkeypatch.delenv("JENKINS_URL", raising=False)

    with patch("buildtimes.main.ReportOrchestrator") as ctor_mock:
        exit_code = orchestrate_report([])

    assert exit_code == 2
    ctor_mock.assert_not_called()


def test_orchestrate_report_unexpected_error_returns_generic_exit_code():
    """Verify unexpected exceptions are mapped to the generic non-zero exit code."""
    orchestrator = Mock()
    orchestrator.run.side_effect = RuntimeError("boom")

    with patch("buildtimes.main.ReportOrchestrator", return_value=orchestrator):
        exit_code = orchestrate_report(["--url", "http://ci/"])

    assert exit_code == 1


def test_orchestrate_report_keep_only_marks_without_report(capsys):
    """Verify --keep-only runs the marking flow and skips the duration report."""
    orchestrator = Mock()
    orchestrator.keep_successful_builds_forever.return_value = 4

    with patch("buildtimes.main.ReportOrchestrator", return_value=orchestrator):
        exit_code = orchestrate_report(["--url", "http://ci/", "--keep-only"])

    assert exit_code == 0
    orchestrator.keep_successful_builds_forever.assert_called_once_with()
    orchestrator.run.assert_not_called()
    assert "Kept 4 builds forever." in capsys.readouterr().out
