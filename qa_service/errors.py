"""
Pipeline exceptions for QA file ingestion.
"""

from __future__ import annotations


class QAPipelineError(Exception):
    """Base exception for QA pipeline failures."""


class UnreadableSourceError(QAPipelineError):
    """Raised when the input stream or its header row cannot be read."""


class UnsupportedFormatError(QAPipelineError):
    """Raised when a file extension or header shape is not recognized."""
