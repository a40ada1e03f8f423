"""Tests for configuration loading and validation."""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from buildtimes.config import Config, load_config
from buildtimes.errors import ConfigurationError


def test_load_config_missing_url_raises(monkeypatch):
    """Verify a missing base URL is a configuration error."""
    monkeypatch.delenv("JENKINS_URL", raising=False)

    with pytest.raises(ConfigurationError):
        load_config(base_url="   ")


def test_load_config_falls_back_to_environment(monkeypatch):
    """Verify JENKINS_URL is used when no base URL is passed."""
    monkeypatch.setenv("JENKINS_URL", "http://ci.example/")

    config = load_config()

    assert config.base_url == "http://ci.example/"
    assert config.success_count == 3
    assert config.mark_forever is False


def test_load_config_rejects_non_positive_success_count():
    """Verify the successful-build count must be positive."""
    with pytest.raises(ConfigurationError):
        load_config(base_url="http://ci", success_count=0)


def test_project_root_quotes_segments_and_normalizes_slash():
    """Verify the project root composes suite and project under the base URL."""
    config = Config(base_url="http://ci/job/", test_suite="Functional Tests", project="Genresmanagement")

    assert config.project_root == "http://ci/job/Functional%20Tests/job/Genresmanagement"
