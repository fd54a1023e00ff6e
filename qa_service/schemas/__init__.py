"""
qa_service/schemas package marker.
"""

from qa_service.schemas.qa_analysis import (
    ClassificationRequest,
    ClassificationResponse,
    IngestionSummaryResponse,
    QAAnalysisResponse,
    RowSkipResponse,
    TaxonomyReportResponse,
    TopErrorResponse,
    TranslatorEntryResponse,
    TranslatorReportResponse,
)

__all__ = [
    "ClassificationRequest",
    "ClassificationResponse",
    "IngestionSummaryResponse",
    "QAAnalysisResponse",
    "RowSkipResponse",
    "TaxonomyReportResponse",
    "TopErrorResponse",
    "TranslatorEntryResponse",
    "TranslatorReportResponse",
]
