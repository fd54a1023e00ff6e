"""
qa_service/repositories/qa_record_sink.py

Hand-off point between the QA pipeline and whatever stores its records.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from qa_service.domain.qa_record import CanonicalQARecord


@runtime_checkable
class QARecordSink(Protocol):
    """
    Receives each fully classified record once, in file order.
    """

    def save(self, record: CanonicalQARecord) -> None:
        ...


class InMemoryQARecordSink:
    """
    Collects saved records in a list.
    """

    def __init__(self) -> None:
        self.records: list[CanonicalQARecord] = []

    def save(self, record: CanonicalQARecord) -> None:
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)
