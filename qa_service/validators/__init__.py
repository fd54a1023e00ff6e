"""
qa_service/validators package marker.
"""

from qa_service.validators.row_validator import QARowValidator

__all__ = [
    "QARowValidator",
]
