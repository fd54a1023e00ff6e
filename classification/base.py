"""
classification/base.py

Abstract base class for all error classification rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from qa_service.domain.qa_record import ClassificationResult


class BaseClassificationRule(ABC):
    """
    Contract for one stage of the rule-based error classifier.

    A rule inspects the source text, the corrected translation and the
    reviewer's free-text description, and either proposes a full
    classification or abstains by returning ``None``.

    No I/O, no logging, and no side effects are permitted inside
    :meth:`evaluate`.
    """

    name: str = "rule"

    @abstractmethod
    def evaluate(
        self,
        source: str,
        correction: str,
        error_desc: str,
    ) -> ClassificationResult | None:
        """
        Propose a classification for one segment.

        Parameters
        ----------
        source:
            Original (source-language) segment text.

        correction:
            Corrected translation, or the observed translation when no
            separate correction was supplied.

        error_desc:
            Reviewer's description of the error. May be empty.

        Returns
        -------
        ClassificationResult | None
            A fully populated result when the rule fires, otherwise ``None``.
        """
