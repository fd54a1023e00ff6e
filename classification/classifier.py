"""
classification/classifier.py

Rule-based error classifier for QA segments.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Sequence

from classification.base import BaseClassificationRule
from classification.rules import (
    GRAMMAR,
    GRAMMAR_PATTERNS,
    SPELLING,
    SPELLING_PATTERNS,
    DescriptionKeywordRule,
    GlossaryRule,
    LengthRule,
    PatternRule,
)
from qa_service.config import ClassifierSettings, get_classifier_settings
from qa_service.domain.qa_record import CanonicalQARecord, ClassificationResult, Severity

logger = logging.getLogger(__name__)

DEFAULT_CLASSIFICATION = ClassificationResult("Accuracy", "Mistranslation", Severity.MAJOR)


def build_default_rules(settings: ClassifierSettings) -> list[BaseClassificationRule]:
    """
    Return the standard rule battery in evaluation order.
    """

    return [
        LengthRule(addition_ratio=settings.addition_length_ratio),
        PatternRule(name="grammar", patterns=GRAMMAR_PATTERNS, result=GRAMMAR),
        GlossaryRule(terms=settings.glossary_terms),
        PatternRule(name="spelling", patterns=SPELLING_PATTERNS, result=SPELLING),
        DescriptionKeywordRule(),
    ]


class ErrorClassifier:
    """
    Applies an ordered list of rules and keeps the last result proposed.

    Every rule sees the same inputs; a later rule that fires replaces the
    result of an earlier one, so description keywords outrank the spelling
    patterns, which outrank grammar, which outranks the length checks. When
    no rule fires the default ``(Accuracy, Mistranslation, major)`` is
    returned. The classifier is stateless and never raises for string input.
    """

    def __init__(
        self,
        *,
        rules: Sequence[BaseClassificationRule] | None = None,
        settings: ClassifierSettings | None = None,
        default: ClassificationResult = DEFAULT_CLASSIFICATION,
    ) -> None:
        if rules is None:
            rules = build_default_rules(settings or get_classifier_settings())
        self._rules = tuple(rules)
        self._default = default

    @property
    def rules(self) -> tuple[BaseClassificationRule, ...]:
        return self._rules

    def classify(
        self,
        source: str,
        correction: str,
        error_desc: str = "",
    ) -> ClassificationResult:
        """
        Return the best-guess (group, subgroup, severity) for one segment.
        """

        source = source or ""
        correction = correction or ""
        error_desc = error_desc or ""

        result = self._default
        fired: list[str] = []
        for rule in self._rules:
            proposed = rule.evaluate(source, correction, error_desc)
            if proposed is not None:
                result = proposed
                fired.append(rule.name)

        logger.debug(
            "Auto classification source=%r rules=%s result=%s/%s/%s",
            source[:50],
            fired,
            result.error_group,
            result.error_subgroup,
            result.severity.value,
        )
        return result

    def classify_record(self, record: CanonicalQARecord) -> ClassificationResult:
        return self.classify(record.source, record.correction, record.error_desc)


def backfill(record: CanonicalQARecord, result: ClassificationResult) -> CanonicalQARecord:
    """
    Fill only the empty taxonomy fields of *record* from *result*.
    """

    updates: dict[str, object] = {}
    if not record.error_group:
        updates["error_group"] = result.error_group
    if not record.error_subgroup:
        updates["error_subgroup"] = result.error_subgroup
    if not record.severity_label:
        updates["severity"] = result.severity
        updates["severity_label"] = result.severity.value
    if not updates:
        return record
    return dataclasses.replace(record, **updates)
