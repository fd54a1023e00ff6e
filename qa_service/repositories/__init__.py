"""
qa_service/repositories package marker.
"""

from qa_service.repositories.qa_record_sink import InMemoryQARecordSink, QARecordSink

__all__ = [
    "InMemoryQARecordSink",
    "QARecordSink",
]
