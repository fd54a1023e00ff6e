"""
qa_stats/taxonomy.py

Taxonomy-matrix report over a batch of QA records.

Formulas
--------
Total Words  = sum of whitespace-delimited tokens in every ``source``
Error Points = minor * 1 + major * 5 + critical * 10
Error Rate   = round(Error Points / Total Words * 100, 2), 0.0 without words

Placement
---------
``error_group`` is matched against each category and ``error_subgroup``
against that category's subcategories, both case-insensitively and as a
substring in either direction, in declared order. The first pair that
matches receives the record. Records with a scored severity that match no
pair are counted under Accuracy / Mistranslation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from qa_service.domain.qa_record import (
    ERROR_POINTS,
    SCORED_SEVERITIES,
    CanonicalQARecord,
)
from qa_stats.base import BaseQAAggregator

logger = logging.getLogger(__name__)

ERROR_TAXONOMY: dict[str, tuple[str, ...]] = {
    "Accuracy": ("Addition/Omission", "Consistency", "Mistranslation", "Untranslation"),
    "Language": ("Grammar", "Punctuation", "Spelling"),
    "Style": ("Readability", "Text Typology", "Style Guide"),
    "Terminology": ("Glossary", "Authority"),
}

DEFAULT_CATEGORY: tuple[str, str] = ("Accuracy", "Mistranslation")

TaxonomyMatrix = dict[str, dict[str, dict[str, int]]]


def empty_matrix() -> TaxonomyMatrix:
    return {
        category: {
            subcategory: {severity.value: 0 for severity in SCORED_SEVERITIES}
            for subcategory in subcategories
        }
        for category, subcategories in ERROR_TAXONOMY.items()
    }


def word_count(text: str) -> int:
    return len(text.split())


def _matches_either_way(value: str, label: str) -> bool:
    value_lower = value.lower()
    label_lower = label.lower()
    return label_lower in value_lower or value_lower in label_lower


def match_category(error_group: str, error_subgroup: str) -> tuple[str, str] | None:
    """
    Return the first (category, subcategory) pair matching the labels, if any.
    """

    for category, subcategories in ERROR_TAXONOMY.items():
        if not _matches_either_way(error_group, category):
            continue
        for subcategory in subcategories:
            if _matches_either_way(error_subgroup, subcategory):
                return category, subcategory
    return None


@dataclass(frozen=True)
class TaxonomyStats:
    """
    Result of one taxonomy aggregation run.
    """

    total_segments: int
    total_words: int
    error_categories: TaxonomyMatrix
    severity_totals: dict[str, int]
    human_errors: int
    unmatched_severities: int
    error_points: int
    error_rate: float
    defaulted_records: int = 0
    category_totals: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "total_segments": self.total_segments,
            "total_words": self.total_words,
            "error_categories": {
                category: {
                    subcategory: dict(counts)
                    for subcategory, counts in subcategories.items()
                }
                for category, subcategories in self.error_categories.items()
            },
            "category_totals": dict(self.category_totals),
            "severity_totals": dict(self.severity_totals),
            "human_errors": self.human_errors,
            "unmatched_severities": self.unmatched_severities,
            "defaulted_records": self.defaulted_records,
            "error_points": self.error_points,
            "error_rate": self.error_rate,
        }


class TaxonomyStatsAggregator(BaseQAAggregator):
    """
    Folds records into the fixed category/subcategory/severity matrix.
    """

    def aggregate(self, records: Iterable[CanonicalQARecord]) -> TaxonomyStats:
        matrix = empty_matrix()
        severity_totals = {severity.value: 0 for severity in SCORED_SEVERITIES}
        total_segments = 0
        total_words = 0
        human_errors = 0
        unmatched_severities = 0
        defaulted = 0

        for record in records:
            total_segments += 1
            total_words += word_count(record.source)
            if record.human_error:
                human_errors += 1

            severity = record.severity
            if severity is None or not severity.is_scored:
                unmatched_severities += 1
                logger.debug(
                    "Severity not scored severity=%r group=%r subgroup=%r",
                    record.severity_label,
                    record.error_group,
                    record.error_subgroup,
                )
                continue
            severity_totals[severity.value] += 1

            placement = match_category(record.error_group, record.error_subgroup)
            if placement is None:
                defaulted += 1
                placement = DEFAULT_CATEGORY
                logger.debug(
                    "Category defaulted to %s/%s group=%r subgroup=%r",
                    DEFAULT_CATEGORY[0],
                    DEFAULT_CATEGORY[1],
                    record.error_group,
                    record.error_subgroup,
                )
            category, subcategory = placement
            matrix[category][subcategory][severity.value] += 1

        error_points = sum(
            severity_totals[severity.value] * ERROR_POINTS[severity]
            for severity in SCORED_SEVERITIES
        )
        error_rate = round(error_points / total_words * 100, 2) if total_words > 0 else 0.0

        return TaxonomyStats(
            total_segments=total_segments,
            total_words=total_words,
            error_categories=matrix,
            severity_totals=severity_totals,
            human_errors=human_errors,
            unmatched_severities=unmatched_severities,
            error_points=error_points,
            error_rate=error_rate,
            defaulted_records=defaulted,
            category_totals={
                category: sum(sum(counts.values()) for counts in subcategories.values())
                for category, subcategories in matrix.items()
            },
        )
