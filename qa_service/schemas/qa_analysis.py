"""
qa_service/schemas/qa_analysis.py

Request and response schemas for QA analysis endpoints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from qa_service.services.qa_analysis_service import QAAnalysisResult

SeverityLabel = Literal["critical", "major", "minor", "medium", "low"]


class ClassificationRequest(BaseModel):
    """
    One segment to classify outside batch ingestion.
    """

    model_config = ConfigDict(extra="forbid")

    source: str
    correction: str = ""
    error_desc: str = ""


class ClassificationResponse(BaseModel):
    error_group: str
    error_subgroup: str
    severity: SeverityLabel


class RowSkipResponse(BaseModel):
    row_number: int = Field(..., ge=1)
    reason: Literal["structural", "incomplete"]
    message: str


class IngestionSummaryResponse(BaseModel):
    """
    API response model for the ingestion pass.
    """

    shape: str
    rows_read: int = Field(..., ge=0)
    records_emitted: int = Field(..., ge=0)
    rows_skipped_structural: int = Field(..., ge=0)
    rows_skipped_incomplete: int = Field(..., ge=0)
    auto_classified: int = Field(..., ge=0)
    skipped_rows: list[RowSkipResponse] = Field(default_factory=list)


class TaxonomyReportResponse(BaseModel):
    """
    API response model for the taxonomy-matrix report.
    """

    total_segments: int = Field(..., ge=0)
    total_words: int = Field(..., ge=0)
    error_categories: dict[str, dict[str, dict[str, int]]]
    category_totals: dict[str, int]
    severity_totals: dict[str, int]
    human_errors: int = Field(..., ge=0)
    unmatched_severities: int = Field(..., ge=0)
    defaulted_records: int = Field(..., ge=0)
    error_points: int = Field(..., ge=0)
    error_rate: float = Field(..., ge=0.0)


class TranslatorEntryResponse(BaseModel):
    total: int = Field(..., ge=0)
    critical: int = Field(..., ge=0)
    major: int = Field(..., ge=0)
    minor: int = Field(..., ge=0)
    medium: int = Field(..., ge=0)
    low: int = Field(..., ge=0)


class TopErrorResponse(BaseModel):
    error_subgroup: str
    count: int = Field(..., ge=1)


class TranslatorReportResponse(BaseModel):
    """
    API response model for the translator-centric report.
    """

    total_errors: int = Field(..., ge=0)
    translator_stats: dict[str, TranslatorEntryResponse]
    error_group_stats: dict[str, int]
    error_subgroup_stats: dict[str, int]
    severity_stats: dict[str, int]
    top_errors: list[TopErrorResponse] = Field(default_factory=list)


class QAAnalysisResponse(BaseModel):
    ingestion: IngestionSummaryResponse
    taxonomy: TaxonomyReportResponse
    translators: TranslatorReportResponse

    @classmethod
    def from_result(cls, result: "QAAnalysisResult") -> "QAAnalysisResponse":
        summary = result.ingestion
        return cls(
            ingestion=IngestionSummaryResponse(
                shape=summary.shape,
                rows_read=summary.rows_read,
                records_emitted=summary.records_emitted,
                rows_skipped_structural=summary.rows_skipped_structural,
                rows_skipped_incomplete=summary.rows_skipped_incomplete,
                auto_classified=result.auto_classified,
                skipped_rows=[
                    RowSkipResponse(
                        row_number=skip.row_number,
                        reason=skip.reason.value,
                        message=skip.message,
                    )
                    for skip in summary.skipped_rows
                ],
            ),
            taxonomy=TaxonomyReportResponse(**result.taxonomy.to_dict()),
            translators=TranslatorReportResponse(**result.translators.to_dict()),
        )
