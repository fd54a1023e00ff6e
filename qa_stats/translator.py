"""
qa_stats/translator.py

Translator-centric report over a batch of QA records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from qa_service.domain.qa_record import CanonicalQARecord, Severity
from qa_stats.base import BaseQAAggregator

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"
DEFAULT_SEVERITY_LABEL = "Medium"
DEFAULT_TOP_ERRORS = 10

TRANSLATOR_SEVERITY_BUCKETS: tuple[Severity, ...] = (
    Severity.CRITICAL,
    Severity.MAJOR,
    Severity.MINOR,
    Severity.MEDIUM,
    Severity.LOW,
)


def display_severity(label: str) -> str:
    """
    Lower-case the label and upper-case only its first character.
    """

    lowered = label.lower()
    return lowered[:1].upper() + lowered[1:]


@dataclass
class TranslatorStatsEntry:
    """
    Severity tallies for one translator.
    """

    total: int = 0
    critical: int = 0
    major: int = 0
    minor: int = 0
    medium: int = 0
    low: int = 0

    def add(self, severity: Severity | None) -> None:
        self.total += 1
        bucket = severity if severity in TRANSLATOR_SEVERITY_BUCKETS else Severity.MEDIUM
        setattr(self, bucket.value, getattr(self, bucket.value) + 1)

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "critical": self.critical,
            "major": self.major,
            "minor": self.minor,
            "medium": self.medium,
            "low": self.low,
        }


@dataclass(frozen=True)
class TranslatorStats:
    """
    Result of one translator aggregation run.
    """

    total_errors: int
    translator_stats: dict[str, TranslatorStatsEntry]
    error_group_stats: dict[str, int]
    error_subgroup_stats: dict[str, int]
    severity_stats: dict[str, int]
    top_errors: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "total_errors": self.total_errors,
            "translator_stats": {
                translator_id: entry.to_dict()
                for translator_id, entry in self.translator_stats.items()
            },
            "error_group_stats": dict(self.error_group_stats),
            "error_subgroup_stats": dict(self.error_subgroup_stats),
            "severity_stats": dict(self.severity_stats),
            "top_errors": [
                {"error_subgroup": subgroup, "count": count}
                for subgroup, count in self.top_errors
            ],
        }


class TranslatorStatsAggregator(BaseQAAggregator):
    """
    Folds records by translator and ranks the most frequent subgroups.

    Parameters
    ----------
    top_n:
        Number of subgroups kept in ``top_errors``.
    """

    def __init__(self, *, top_n: int = DEFAULT_TOP_ERRORS) -> None:
        self._top_n = max(1, top_n)

    def aggregate(self, records: Iterable[CanonicalQARecord]) -> TranslatorStats:
        translator_stats: dict[str, TranslatorStatsEntry] = {}
        group_stats: dict[str, int] = {}
        subgroup_stats: dict[str, int] = {}
        severity_stats: dict[str, int] = {}
        total_errors = 0

        for record in records:
            total_errors += 1
            translator_id = record.translator_id or UNKNOWN_LABEL
            error_group = record.error_group or UNKNOWN_LABEL
            error_subgroup = record.error_subgroup or UNKNOWN_LABEL
            severity_label = record.severity_label or DEFAULT_SEVERITY_LABEL

            severity = record.severity
            if severity is None and record.severity_label:
                logger.debug("Unknown severity=%r counted as medium", severity_label)
            translator_stats.setdefault(translator_id, TranslatorStatsEntry()).add(severity)

            group_stats[error_group] = group_stats.get(error_group, 0) + 1
            subgroup_stats[error_subgroup] = subgroup_stats.get(error_subgroup, 0) + 1

            severity_key = display_severity(severity_label)
            severity_stats[severity_key] = severity_stats.get(severity_key, 0) + 1

        ranked = sorted(subgroup_stats.items(), key=lambda item: item[1], reverse=True)

        return TranslatorStats(
            total_errors=total_errors,
            translator_stats=translator_stats,
            error_group_stats=group_stats,
            error_subgroup_stats=subgroup_stats,
            severity_stats=severity_stats,
            top_errors=ranked[: self._top_n],
        )
