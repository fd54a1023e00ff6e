"""
qa_stats/base.py

Abstract base class for all QA batch aggregators.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from qa_service.domain.qa_record import CanonicalQARecord


class BaseQAAggregator(ABC):
    """
    Contract for report aggregators over a batch of QA records.

    Subclasses fold the records in the order given and return a fresh
    result object; they keep no state between calls, so running the same
    aggregator twice over the same batch yields equal results.
    """

    @abstractmethod
    def aggregate(self, records: Iterable[CanonicalQARecord]) -> Any:
        """
        Fold *records* into a report structure.

        Parameters
        ----------
        records:
            Classified canonical QA records, in file order.

        Returns
        -------
        Any
            Aggregator-specific result exposing ``to_dict()``.
        """
