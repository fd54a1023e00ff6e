"""
qa_service/api/routers/qa_analysis.py

QA analysis HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from qa_service.api.dependencies import get_qa_upload
from qa_service.errors import UnreadableSourceError, UnsupportedFormatError
from qa_service.schemas.qa_analysis import (
    ClassificationRequest,
    ClassificationResponse,
    QAAnalysisResponse,
)
from qa_service.services.qa_analysis_service import QAAnalysisService, get_qa_analysis_service

router = APIRouter(prefix="/qa", tags=["qa"])


@router.post("/analyze", response_model=QAAnalysisResponse)
def analyze_qa_file(
    file: UploadFile = Depends(get_qa_upload),
    translator_id: str | None = Query(
        default=None,
        description="Optional translator id assigned to every record in the file",
    ),
    analysis_service: QAAnalysisService = Depends(get_qa_analysis_service),
) -> QAAnalysisResponse:
    """
    Ingest one QA table and return the ingestion summary and both reports.
    """

    try:
        file.file.seek(0)
        result = analysis_service.analyze(
            file.file,
            filename=file.filename or "",
            translator_id=translator_id,
        )
    except UnsupportedFormatError as exc:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=str(exc),
        ) from exc
    except UnreadableSourceError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()

    return QAAnalysisResponse.from_result(result)


@router.post("/classify", response_model=ClassificationResponse)
def classify_segment(
    payload: ClassificationRequest,
    analysis_service: QAAnalysisService = Depends(get_qa_analysis_service),
) -> ClassificationResponse:
    """
    Classify a single segment with the rule-based classifier.
    """

    result = analysis_service.classify(
        payload.source,
        payload.correction,
        payload.error_desc,
    )
    return ClassificationResponse(
        error_group=result.error_group,
        error_subgroup=result.error_subgroup,
        severity=result.severity.value,
    )
