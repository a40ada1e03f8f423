"""Domain models for Jenkins build duration reporting.

These dataclasses model only the subset of Jenkins API payload fields that
the selection and aggregation pipeline needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SUCCESS = "SUCCESS"


@dataclass(frozen=True, slots=True)
class JobDescriptor:
    """Represents a child job listed under the project root."""

    name: str
    url: str


@dataclass(slots=True)
class BuildRecord:
    """Represents a build as returned by a job's build list or detail endpoint.

    ``result`` is ``None`` while the build is still running.
    ``duration`` is in milliseconds and only present on detail records.
    """

    number: int
    url: str
    result: Optional[str] = None
    duration: Optional[int] = None

    @property
    def is_success(self) -> bool:
        """Whether the build finished with result ``SUCCESS``."""
        return self.result == SUCCESS


@dataclass(slots=True)
class DurationSample:
    """Represents one build duration measurement in seconds."""

    build_number: int
    duration_seconds: float

    def to_dict(self) -> Dict[str, Any]:
        """Return the sample as ``{number, duration}`` with duration in seconds."""
        return {"number": self.build_number, "duration": self.duration_seconds}


@dataclass(slots=True)
class JobReport:
    """Represents the duration samples collected for one job.

    ``builds`` keeps the successful-build selection the samples were taken
    from, so retention marking can reuse it without another fetch.
    """

    name: str
    samples: List[DurationSample] = field(default_factory=list)
    builds: List[BuildRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return the report as ``{name, data}`` for output rendering."""
        return {"name": self.name, "data": [sample.to_dict() for sample in self.samples]}
