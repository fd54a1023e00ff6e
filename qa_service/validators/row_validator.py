"""
qa_service/validators/row_validator.py

Structural and required-field checks for raw QA rows.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from qa_service.domain.qa_record import RowSkip, SkipReason


class QARowValidator:
    """
    Decides whether a raw row is skipped before or after normalization.
    """

    def check_structure(
        self,
        *,
        cells: Sequence[str],
        column_count: int,
        row_number: int,
    ) -> RowSkip | None:
        """
        Return a skip entry for blank rows and rows whose width differs from the header.
        """

        if self.is_completely_empty_row(cells):
            return RowSkip(
                row_number=row_number,
                reason=SkipReason.STRUCTURAL,
                message="Completely empty row.",
            )
        if len(cells) != column_count:
            return RowSkip(
                row_number=row_number,
                reason=SkipReason.STRUCTURAL,
                message=f"Column count mismatch: header has {column_count}, row has {len(cells)}.",
            )
        return None

    def check_required_fields(
        self,
        *,
        mapped_row: Mapping[str, str],
        row_number: int,
    ) -> RowSkip | None:
        """
        Require `source` plus at least one of `target` or `correction`.
        """

        missing: list[str] = []
        if self._is_blank(mapped_row.get("source")):
            missing.append("source")
        if self._is_blank(mapped_row.get("target")) and self._is_blank(mapped_row.get("correction")):
            missing.append("target/correction")
        if not missing:
            return None
        return RowSkip(
            row_number=row_number,
            reason=SkipReason.INCOMPLETE,
            message=f"Required value is missing: {', '.join(missing)}.",
        )

    def is_completely_empty_row(self, cells: Sequence[Any]) -> bool:
        """
        Return True when all values in the row are empty or whitespace.
        """

        return all(self._is_blank(value) for value in cells)

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return str(value).strip() == ""
