"""Input validation: shape checks run before any smoothing starts."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from ..errors import InputShapeError


@dataclass
class ValidationIssue:
    severity: str  # "error", "warning", "info"
    category: str
    message: str
    details: str = ""


@dataclass
class ValidationReport:
    is_valid: bool = True
    issues: list[ValidationIssue] = field(default_factory=list)
    stats: dict = field(default_factory=dict)

    def add(self, severity: str, category: str, message: str, details: str = ""):
        issue = ValidationIssue(severity=severity, category=category, message=message, details=details)
        self.issues.append(issue)
        if severity == "error":
            self.is_valid = False

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "warning"]


def validate_input(data, periodicity: int, times=None) -> ValidationReport:
    """Check that ``data`` can be decomposed with ``periodicity``."""
    report = ValidationReport()

    try:
        values = np.asarray(data, dtype=float)
    except (TypeError, ValueError):
        report.add("error", "data", "Data cannot be converted to floating point values.")
        return report

    if values.ndim != 1:
        report.add("error", "data", f"Data must be one-dimensional, got {values.ndim} dimensions.")
        return report

    n = len(values)
    report.stats["n_points"] = n

    if not np.all(np.isfinite(values)):
        n_bad = int(np.sum(~np.isfinite(values)))
        report.add(
            "error", "data", f"{n_bad} data points are missing or not finite.",
            "Bin the series onto a regular grid and fill gaps before decomposing.",
        )

    if periodicity is None or periodicity < 2:
        report.add("error", "periodicity", f"Periodicity must be at least 2, got {periodicity}.")
    else:
        report.stats["n_periods"] = n / periodicity
        if n <= 2 * periodicity:
            report.add(
                "error", "length",
                f"{n} data points are too few for periodicity {periodicity}.",
                f"More than {2 * periodicity} points are required.",
            )
        elif n < 3 * periodicity:
            report.add(
                "warning", "length",
                f"Only {n / periodicity:.1f} periods of data; the seasonal estimate will be rough.",
            )

    if times is not None:
        labels = pd.Index(times)
        if len(labels) != n:
            report.add("error", "times", f"Got {len(labels)} time labels for {n} data points.")
        elif not (labels.is_monotonic_increasing and labels.is_unique):
            report.add("error", "times", "Time labels must be strictly increasing.")

    return report


def ensure_valid(report: ValidationReport) -> ValidationReport:
    """Raise InputShapeError listing every error in ``report``."""
    if not report.is_valid:
        raise InputShapeError(" ".join(issue.message for issue in report.errors))
    return report
