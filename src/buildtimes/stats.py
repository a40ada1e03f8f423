"""Statistics and formatting helpers for build duration reporting.

This module provides utilities for:
- Computing linear-interpolation percentiles from pre-sorted samples.
- Aggregating per-job duration statistics (count, mean, min, max, P50, P90).
- Formatting second-based durations as ``HH:MM:SS``.
- Rendering job reports as human-readable text or JSON.
"""

from __future__ import annotations

import json
import math
from typing import Dict, List, Optional

from .models import JobReport


def calculate_percentile(sorted_values: List[float], p: float) -> Optional[float]:
    """Return the ``p``-th percentile of ascending ``sorted_values``.

    Interpolates linearly between the two nearest ranks. Empty input gives
    ``None``.

    Raises:
        ValueError: If ``p`` is outside ``[0, 100]``.
    """
    if not 0 <= p <= 100:
        raise ValueError("Percentile 'p' must be in the range [0, 100].")
    if not sorted_values:
        return None

    rank = (len(sorted_values) - 1) * p / 100.0
    below = math.floor(rank)
    above = min(below + 1, len(sorted_values) - 1)
    return sorted_values[below] + (sorted_values[above] - sorted_values[below]) * (rank - below)


def compute_statistics(samples: List[float]) -> Dict[str, Optional[float]]:
    """Compute count, mean, min, max, P50 and P90 for duration samples.

    Samples are sorted internally. ``None``, NaN and negative values are
    ignored. All statistics except ``count`` are ``None`` when no valid
    samples exist.
    """
    clean_samples = sorted(
        sample
        for sample in samples
        if sample is not None and not math.isnan(sample) and sample >= 0
    )

    if not clean_samples:
        return {"count": 0, "mean": None, "min": None, "max": None, "p50": None, "p90": None}

    return {
        "count": len(clean_samples),
        "mean": sum(clean_samples) / len(clean_samples),
        "min": clean_samples[0],
        "max": clean_samples[-1],
        "p50": calculate_percentile(clean_samples, 50),
        "p90": calculate_percentile(clean_samples, 90),
    }


def format_duration(seconds: Optional[float]) -> str:
    """Format seconds as ``HH:MM:SS``, or ``"n/a"`` when ``seconds`` is ``None``."""
    if seconds is None:
        return "n/a"

    minutes, secs = divmod(int(round(seconds)), 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def render_job(report: JobReport) -> str:
    stats = compute_statistics([sample.duration_seconds for sample in report.samples])

    lines = [f"{report.name}:"]
    if not report.samples:
        lines.append("   no successful builds")
        return "\n".join(lines)

    for sample in report.samples:
        lines.append(
            f"   #{sample.build_number}: {sample.duration_seconds:g}s"
            f" ({format_duration(sample.duration_seconds)})"
        )

    lines.append(
        f"   Samples: {stats['count']}"
        f" | Mean: {format_duration(stats['mean'])}"
        f" | Min: {format_duration(stats['min'])}"
        f" | Max: {format_duration(stats['max'])}"
        f" | P50: {format_duration(stats['p50'])}"
        f" | P90: {format_duration(stats['p90'])}"
    )
    return "\n".join(lines)


def render_text(reports: List[JobReport]) -> str:
    """Render job reports as a human-readable listing, one block per job."""
    if not reports:
        return "No jobs found."
    return "\n\n".join(render_job(report) for report in reports)


def render_json(reports: List[JobReport]) -> str:
    """Render job reports as ``[{name, data: [{number, duration}]}]`` JSON."""
    return json.dumps([report.to_dict() for report in reports], indent=2)
