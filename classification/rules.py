"""
classification/rules.py

Deterministic classification rules for translation QA segments.

Rules evaluated by the default classifier (in order)
----------------------------------------------------
1. Omission / addition  : empty correction, or correction much longer
                          than the source.
2. Grammar              : Hangul clause structure or mixed-script text.
3. Glossary             : a glossary term from the source is missing in
                          the correction.
4. Spelling / format    : run-together clauses or letter-digit runs.
5. Description keywords : reviewer wording (English or Korean).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern, Sequence

from classification.base import BaseClassificationRule
from qa_service.domain.qa_record import ClassificationResult, Severity

UNTRANSLATION = ClassificationResult("Accuracy", "Untranslation", Severity.CRITICAL)
ADDITION_OMISSION = ClassificationResult("Accuracy", "Addition/Omission", Severity.MAJOR)
GRAMMAR = ClassificationResult("Language", "Grammar", Severity.MAJOR)
GLOSSARY = ClassificationResult("Terminology", "Glossary", Severity.CRITICAL)
SPELLING = ClassificationResult("Language", "Spelling", Severity.MINOR)
CONSISTENCY = ClassificationResult("Accuracy", "Consistency", Severity.MAJOR)
READABILITY = ClassificationResult("Style", "Readability", Severity.MINOR)

GRAMMAR_PATTERNS: tuple[Pattern[str], ...] = (
    # Hangul subject/object/predicate clause
    re.compile(r"[가-힣]+[은는이가]?\s+[가-힣]+[을를]?\s+[가-힣]+다?"),
    # Latin word followed by Hangul word
    re.compile(r"[A-Za-z]+\s+[가-힣]+"),
)

SPELLING_PATTERNS: tuple[Pattern[str], ...] = (
    # sentence ending fused into the next clause
    re.compile(r"[가-힣]{2,}다[가-힣]{2,}"),
    re.compile(r"[A-Za-z]{2,}[0-9]{2,}"),
)

BLANK_CHARACTERS = " \t\n\r\0\x0b"


def byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


@dataclass(frozen=True)
class KeywordFamily:
    """
    Description keywords that map to one classification.
    """

    keywords: tuple[str, ...]
    result: ClassificationResult


DESCRIPTION_KEYWORD_FAMILIES: tuple[KeywordFamily, ...] = (
    KeywordFamily(("용어", "terminology"), GLOSSARY),
    KeywordFamily(("문법", "grammar"), GRAMMAR),
    KeywordFamily(("오타", "spelling"), SPELLING),
    KeywordFamily(("일관성", "consistency"), CONSISTENCY),
    KeywordFamily(("가독성", "readability"), READABILITY),
)


class LengthRule(BaseClassificationRule):
    """
    Flags untranslated segments and corrections far longer than the source.

    Lengths are UTF-8 byte counts, so a Hangul syllable weighs three times
    a Latin letter. Only ASCII whitespace and NUL count as blank.
    """

    name = "length"

    def __init__(self, *, addition_ratio: float = 1.5) -> None:
        self._addition_ratio = addition_ratio

    def evaluate(
        self,
        source: str,
        correction: str,
        error_desc: str,
    ) -> ClassificationResult | None:
        if not correction.strip(BLANK_CHARACTERS):
            return UNTRANSLATION
        if byte_length(correction) > byte_length(source) * self._addition_ratio:
            return ADDITION_OMISSION
        return None


class PatternRule(BaseClassificationRule):
    """
    Fires when any pattern matches the correction; patterns are tried in order.
    """

    def __init__(
        self,
        *,
        name: str,
        patterns: Sequence[Pattern[str]],
        result: ClassificationResult,
    ) -> None:
        self.name = name
        self._patterns = tuple(patterns)
        self._result = result

    def evaluate(
        self,
        source: str,
        correction: str,
        error_desc: str,
    ) -> ClassificationResult | None:
        for pattern in self._patterns:
            if pattern.search(correction):
                return self._result
        return None


class GlossaryRule(BaseClassificationRule):
    """
    Fires when a glossary term appears in the source but not in the correction.
    """

    name = "glossary"

    def __init__(self, *, terms: Sequence[str]) -> None:
        self._terms = tuple(term.lower() for term in terms if term.strip())

    def evaluate(
        self,
        source: str,
        correction: str,
        error_desc: str,
    ) -> ClassificationResult | None:
        source_lower = source.lower()
        correction_lower = correction.lower()
        for term in self._terms:
            if term in source_lower and term not in correction_lower:
                return GLOSSARY
        return None


class DescriptionKeywordRule(BaseClassificationRule):
    """
    Maps reviewer wording onto a classification; the first matching family wins.
    """

    name = "description_keywords"

    def __init__(
        self,
        *,
        families: Sequence[KeywordFamily] = DESCRIPTION_KEYWORD_FAMILIES,
    ) -> None:
        self._families = tuple(families)

    def evaluate(
        self,
        source: str,
        correction: str,
        error_desc: str,
    ) -> ClassificationResult | None:
        if not error_desc:
            return None
        desc_lower = error_desc.lower()
        for family in self._families:
            if any(keyword in desc_lower for keyword in family.keywords):
                return family.result
        return None
