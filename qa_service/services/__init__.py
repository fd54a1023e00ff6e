"""
qa_service/services package marker.
"""

from qa_service.services.qa_analysis_service import (
    QAAnalysisResult,
    QAAnalysisService,
    get_qa_analysis_service,
)
from qa_service.services.row_ingestor import RowIngestor, generate_translator_id, resolve_delimiter

__all__ = [
    "QAAnalysisResult",
    "QAAnalysisService",
    "RowIngestor",
    "generate_translator_id",
    "get_qa_analysis_service",
    "resolve_delimiter",
]
