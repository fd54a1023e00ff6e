"""
qa_service/domain/qa_record.py

Domain models used by the QA ingestion flow.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

_TRUE_FLAGS = frozenset({"yes", "y", "true", "1", "o", "예"})
_FALSE_FLAGS = frozenset({"no", "n", "false", "0", "x", "아니오"})


class Severity(str, Enum):
    """
    Severity labels accepted anywhere in the pipeline.

    Only MINOR, MAJOR and CRITICAL are scored; MEDIUM and LOW are
    recognized for translator-level reporting.
    """

    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: str | None) -> Severity | None:
        """
        Case-insensitive lookup; returns None for blank or unknown labels.
        """

        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def is_scored(self) -> bool:
        return self in SCORED_SEVERITIES

    @property
    def points(self) -> int:
        return ERROR_POINTS.get(self, 0)


SCORED_SEVERITIES: tuple[Severity, ...] = (
    Severity.MINOR,
    Severity.MAJOR,
    Severity.CRITICAL,
)

ERROR_POINTS: dict[Severity, int] = {
    Severity.MINOR: 1,
    Severity.MAJOR: 5,
    Severity.CRITICAL: 10,
}


def parse_bool_flag(value: str | None) -> bool | None:
    """
    Strictly parse a yes/no style cell.

    Blank cells and unrecognized values yield None.
    """

    if value is None:
        return None
    normalized = value.strip().lower()
    if not normalized:
        return None
    if normalized in _TRUE_FLAGS:
        return True
    if normalized in _FALSE_FLAGS:
        return False
    logger.debug("Unrecognized boolean flag value=%r", value)
    return None


@dataclass(frozen=True)
class ClassificationResult:
    """
    Error taxonomy triple produced by the classifier.
    """

    error_group: str
    error_subgroup: str
    severity: Severity


@dataclass(frozen=True)
class CanonicalQARecord:
    """
    One reviewed translation segment in canonical shape.

    Text fields hold an empty string when the source file had no value.
    ``severity_label`` keeps the label as written in the file; ``severity``
    is that label parsed once at ingestion, or None when it is blank or
    not a known severity.
    """

    source: str
    target: str
    correction: str
    translator_id: str
    segment_line: str = ""
    back_translation: str = ""
    error_desc: str = ""
    error_group: str = ""
    error_subgroup: str = ""
    severity: Severity | None = None
    severity_label: str = ""
    human_error: bool | None = None

    @property
    def needs_classification(self) -> bool:
        return not (self.error_group and self.error_subgroup and self.severity_label)


class SkipReason(str, Enum):
    STRUCTURAL = "structural"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True)
class RowSkip:
    """
    Diagnostic detail for one skipped data row.
    """

    row_number: int
    reason: SkipReason
    message: str


@dataclass(frozen=True)
class IngestionSummary:
    """
    End-of-run ingestion summary.
    """

    shape: str
    rows_read: int
    records_emitted: int
    rows_skipped_structural: int
    rows_skipped_incomplete: int
    skipped_rows: list[RowSkip] = field(default_factory=list)


@dataclass(frozen=True)
class IngestionResult:
    records: list[CanonicalQARecord]
    summary: IngestionSummary
