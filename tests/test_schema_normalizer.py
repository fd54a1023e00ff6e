from __future__ import annotations

import unittest

from qa_service.mappers.schema_normalizer import (
    CANONICAL_FIELDS,
    HeaderIndex,
    HeaderShape,
    SchemaNormalizer,
    detect_shape,
)


class TestSchemaNormalizer(unittest.TestCase):
    def setUp(self) -> None:
        self.normalizer = SchemaNormalizer.for_shape(HeaderShape.QA_DETAIL)

    def _normalize(self, headers: list[str], cells: list[str]) -> dict[str, str]:
        return self.normalizer.normalize_row(
            header_index=HeaderIndex.from_headers(headers),
            cells=cells,
        )

    def test_first_declared_alias_wins_over_header_order(self) -> None:
        row = self._normalize(
            ["Source", "Target", "Translation"],
            ["Hello", "from target", "from translation"],
        )

        self.assertEqual(row["target"], "from translation")

    def test_empty_alias_value_falls_through_to_next_alias(self) -> None:
        row = self._normalize(
            ["Source", "Target", "Translation"],
            ["Hello", "from target", "   "],
        )

        self.assertEqual(row["target"], "from target")

    def test_localized_labels_map_to_canonical_fields(self) -> None:
        row = self._normalize(
            [
                "Segment/Line #",
                "Source",
                "Translation",
                "Back Translation",
                "Description of Error",
                "Error Category (대분류)",
                "Error Category (소분류)",
                "Human Error 여부",
                "Severity",
            ],
            ["12", "Take one tablet", "한 알 복용", "Take one pill", "용어 오류", "Terminology", "Glossary", "yes", "Critical"],
        )

        self.assertEqual(row["segment_line"], "12")
        self.assertEqual(row["back_translation"], "Take one pill")
        self.assertEqual(row["error_desc"], "용어 오류")
        self.assertEqual(row["error_group"], "Terminology")
        self.assertEqual(row["error_subgroup"], "Glossary")
        self.assertEqual(row["human_error"], "yes")
        self.assertEqual(row["severity"], "Critical")

    def test_missing_fields_resolve_to_empty_string(self) -> None:
        row = self._normalize(["Source", "Translation"], ["Hello", "안녕"])

        self.assertEqual(set(row), set(CANONICAL_FIELDS))
        self.assertEqual(row["error_group"], "")
        self.assertEqual(row["translator_id"], "")
        self.assertEqual(row["correction"], "")

    def test_values_are_stripped(self) -> None:
        row = self._normalize(["Source", "Translation"], ["  Hello ", "\t안녕 "])

        self.assertEqual(row["source"], "Hello")
        self.assertEqual(row["target"], "안녕")

    def test_generic_shape_uses_lower_case_names(self) -> None:
        normalizer = SchemaNormalizer.for_shape(HeaderShape.GENERIC)
        row = normalizer.normalize_row(
            header_index=HeaderIndex.from_headers(["source", "correction", "translator_id", "Severity"]),
            cells=["Hi", "Salut", "T-7", "major"],
        )

        self.assertEqual(row["source"], "Hi")
        self.assertEqual(row["correction"], "Salut")
        self.assertEqual(row["translator_id"], "T-7")
        self.assertEqual(row["severity"], "")

    def test_custom_alias_table(self) -> None:
        normalizer = SchemaNormalizer({"source": ("Original", "Src"), "target": ("Output",)})
        row = normalizer.normalize_row(
            header_index=HeaderIndex.from_headers(["Src", "Output"]),
            cells=["Hi", "Hallo"],
        )

        self.assertEqual(row["source"], "Hi")
        self.assertEqual(row["target"], "Hallo")


class TestHeaderIndex(unittest.TestCase):
    def test_strips_headers_and_keeps_first_duplicate(self) -> None:
        index = HeaderIndex.from_headers([" Source ", "Translation", "Source"])

        self.assertEqual(index.headers, ("Source", "Translation", "Source"))
        self.assertEqual(index.positions["Source"], 0)
        self.assertEqual(index.column_count, 3)


class TestDetectShape(unittest.TestCase):
    def test_qa_detail_shape(self) -> None:
        self.assertEqual(detect_shape(["Source", "Translation"]), HeaderShape.QA_DETAIL)
        self.assertEqual(detect_shape(["Source", "Target"]), HeaderShape.QA_DETAIL)

    def test_generic_shape(self) -> None:
        self.assertEqual(detect_shape(["source", "target"]), HeaderShape.GENERIC)
        self.assertEqual(detect_shape(["translator_id", "source", "correction"]), HeaderShape.GENERIC)

    def test_unknown_shape(self) -> None:
        self.assertIsNone(detect_shape(["Source"]))
        self.assertIsNone(detect_shape(["text", "translation"]))


if __name__ == "__main__":
    unittest.main()
