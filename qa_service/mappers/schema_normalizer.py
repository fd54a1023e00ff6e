"""
qa_service/mappers/schema_normalizer.py

Alias-driven header mapping from QA spreadsheet variants to canonical fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Sequence

CANONICAL_FIELDS: tuple[str, ...] = (
    "segment_line",
    "source",
    "target",
    "correction",
    "back_translation",
    "error_desc",
    "error_group",
    "error_subgroup",
    "human_error",
    "severity",
    "translator_id",
)


class HeaderShape(str, Enum):
    QA_DETAIL = "qa_detail"
    GENERIC = "generic"


QA_DETAIL_ALIASES: dict[str, tuple[str, ...]] = {
    "segment_line": ("Segment/Line #", "Segment", "Line #", "Line"),
    "source": ("Source",),
    "target": ("Translation", "Target"),
    "correction": ("Correction",),
    "back_translation": ("Back Translation", "BackTranslation", "Back"),
    "error_desc": ("Description of Error", "Error Description", "Description", "Error Desc"),
    "error_group": (
        "Error Category (major)",
        "Error Category (대분류)",
        "Error Category",
        "Category",
        "Error Group",
    ),
    "error_subgroup": (
        "Error Category (minor)",
        "Error Category (소분류)",
        "Subcategory",
        "Sub Category",
    ),
    "human_error": ("Human Error flag", "Human Error 여부", "Human Error", "HumanError"),
    "severity": ("Severity", "Error Severity"),
    "translator_id": ("Translator ID", "Translator"),
}

GENERIC_ALIASES: dict[str, tuple[str, ...]] = {
    canonical: (canonical,) for canonical in CANONICAL_FIELDS
}

SHAPE_ALIASES: dict[HeaderShape, dict[str, tuple[str, ...]]] = {
    HeaderShape.QA_DETAIL: QA_DETAIL_ALIASES,
    HeaderShape.GENERIC: GENERIC_ALIASES,
}


def detect_shape(headers: Sequence[str]) -> HeaderShape | None:
    """
    Identify which known header layout a file uses, if any.
    """

    present = {header.strip() for header in headers}
    if "Source" in present and ({"Translation", "Target"} & present):
        return HeaderShape.QA_DETAIL
    if "source" in present and ({"target", "correction"} & present):
        return HeaderShape.GENERIC
    return None


@dataclass(frozen=True)
class HeaderIndex:
    """
    Column positions for each alias present in a header row.
    """

    headers: tuple[str, ...]
    positions: dict[str, int]

    @classmethod
    def from_headers(cls, headers: Sequence[str]) -> HeaderIndex:
        cleaned = tuple(header.strip() for header in headers)
        positions: dict[str, int] = {}
        for position, header in enumerate(cleaned):
            if header and header not in positions:
                positions[header] = position
        return cls(headers=cleaned, positions=positions)

    @property
    def column_count(self) -> int:
        return len(self.headers)


class SchemaNormalizer:
    """
    Maps raw rows onto the canonical QA field set.

    For each canonical field the alias list is tried in declared order and
    the first alias that is present in the header with a non-empty value in
    the row wins.
    """

    def __init__(self, aliases: Mapping[str, Sequence[str]]) -> None:
        self._aliases: dict[str, tuple[str, ...]] = {
            canonical: tuple(values) for canonical, values in aliases.items()
        }

    @classmethod
    def for_shape(cls, shape: HeaderShape) -> SchemaNormalizer:
        return cls(SHAPE_ALIASES[shape])

    @property
    def aliases(self) -> dict[str, tuple[str, ...]]:
        return dict(self._aliases)

    def normalize_row(
        self,
        *,
        header_index: HeaderIndex,
        cells: Sequence[str],
    ) -> dict[str, str]:
        """
        Resolve one raw row into canonical field values.
        """

        return {
            canonical: self._resolve_field(
                alias_list=self._aliases.get(canonical, ()),
                header_index=header_index,
                cells=cells,
            )
            for canonical in CANONICAL_FIELDS
        }

    @staticmethod
    def _resolve_field(
        *,
        alias_list: Sequence[str],
        header_index: HeaderIndex,
        cells: Sequence[str],
    ) -> str:
        for alias in alias_list:
            position = header_index.positions.get(alias)
            if position is None or position >= len(cells):
                continue
            value = (cells[position] or "").strip()
            if value:
                return value
        return ""
