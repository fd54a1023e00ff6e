"""
qa_service/domain package marker.
"""

from qa_service.domain.qa_record import (
    ERROR_POINTS,
    SCORED_SEVERITIES,
    CanonicalQARecord,
    ClassificationResult,
    IngestionResult,
    IngestionSummary,
    RowSkip,
    Severity,
    SkipReason,
    parse_bool_flag,
)

__all__ = [
    "ERROR_POINTS",
    "SCORED_SEVERITIES",
    "CanonicalQARecord",
    "ClassificationResult",
    "IngestionResult",
    "IngestionSummary",
    "RowSkip",
    "Severity",
    "SkipReason",
    "parse_bool_flag",
]
