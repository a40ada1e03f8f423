"""Custom exception types for the Jenkins build duration reporter."""


class BuildTimesError(Exception):
    """Base exception for all build duration reporter errors."""


class ConfigurationError(BuildTimesError):
    """Raised when runtime configuration values are missing or invalid."""


class FetchError(BuildTimesError):
    """Raised when a Jenkins API request fails or does not return valid JSON."""


class DataShapeError(BuildTimesError):
    """Raised when a Jenkins API payload lacks a field the pipeline depends on."""


class MissingJobsField(DataShapeError):
    """Raised when the project root response has no ``jobs`` collection."""
