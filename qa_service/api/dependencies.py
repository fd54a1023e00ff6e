"""
qa_service/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import File, HTTPException, UploadFile, status

from qa_service.errors import UnsupportedFormatError
from qa_service.services.row_ingestor import resolve_delimiter


def get_qa_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file has a supported delimited-text extension.
    """

    filename = (file.filename or "").strip()
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file must have a name.",
        )

    try:
        resolve_delimiter(filename)
    except UnsupportedFormatError as exc:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=str(exc),
        ) from exc

    return file
