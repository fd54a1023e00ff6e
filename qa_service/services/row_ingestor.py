"""
qa_service/services/row_ingestor.py

Streams delimited QA tables into canonical QA records.

Rows that are blank or whose width differs from the header are skipped as
structural problems; rows that survive normalization without a source and
a translation (or correction) are skipped as incomplete. Neither case
raises: both are tallied in the returned IngestionSummary.
"""

from __future__ import annotations

import csv
import io
import logging
import random
from datetime import datetime
from pathlib import PurePath
from typing import BinaryIO, Callable

from qa_service.config import QAIngestionSettings, get_qa_ingestion_settings
from qa_service.domain.qa_record import (
    CanonicalQARecord,
    IngestionResult,
    IngestionSummary,
    RowSkip,
    Severity,
    SkipReason,
    parse_bool_flag,
)
from qa_service.errors import UnreadableSourceError, UnsupportedFormatError
from qa_service.logging_utils import log_event
from qa_service.mappers.schema_normalizer import HeaderIndex, SchemaNormalizer, detect_shape
from qa_service.validators.row_validator import QARowValidator

logger = logging.getLogger(__name__)

DELIMITERS_BY_EXTENSION: dict[str, str] = {
    ".csv": ",",
    ".txt": ",",
    ".tsv": "\t",
}


def resolve_delimiter(filename: str) -> str:
    """
    Pick the field delimiter for a file name, rejecting unknown extensions.
    """

    extension = PurePath(filename.strip()).suffix.lower()
    delimiter = DELIMITERS_BY_EXTENSION.get(extension)
    if delimiter is None:
        supported = ", ".join(sorted(DELIMITERS_BY_EXTENSION))
        raise UnsupportedFormatError(
            f"Unsupported file type '{extension or filename}'. Supported extensions: {supported}."
        )
    return delimiter


def generate_translator_id(prefix: str) -> str:
    """
    Build a best-effort unique translator id: prefix, timestamp, random suffix.
    """

    return f"{prefix}_{datetime.now():%Y%m%d%H%M%S}_{random.randint(1000, 9999)}"


class RowIngestor:
    """
    Reads one delimited table and emits canonical QA records.
    """

    def __init__(
        self,
        *,
        settings: QAIngestionSettings | None = None,
        validator: QARowValidator | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._settings = settings or get_qa_ingestion_settings()
        self._validator = validator or QARowValidator()
        self._id_factory = id_factory or (
            lambda: generate_translator_id(self._settings.translator_id_prefix)
        )

    def ingest(
        self,
        stream: BinaryIO,
        *,
        delimiter: str = ",",
        translator_id: str | None = None,
    ) -> IngestionResult:
        """
        Parse the whole stream and return the emitted records with a summary.

        Args:
            stream:         Binary stream positioned at the start of the table.
                            The caller keeps ownership; it is not closed.
            delimiter:      Field delimiter (see :func:`resolve_delimiter`).
            translator_id:  When given, assigned to every emitted record.

        Raises:
            UnreadableSourceError:  The header cannot be read or the bytes
                                    are not valid UTF-8 / CSV.
            UnsupportedFormatError: The header matches no known layout.
        """

        text_stream: io.TextIOWrapper | None = None

        records: list[CanonicalQARecord] = []
        skipped: list[RowSkip] = []
        structural = 0
        incomplete = 0
        rows_read = 0

        try:
            text_stream = io.TextIOWrapper(stream, encoding="utf-8-sig", newline="")
            reader = csv.reader(text_stream, delimiter=delimiter)
            header = next(reader, None)
            if header is None or self._validator.is_completely_empty_row(header):
                raise UnreadableSourceError("Header row is missing or empty.")

            shape = detect_shape(header)
            if shape is None:
                raise UnsupportedFormatError(
                    "Header does not match a known QA layout: " + ", ".join(header)
                )
            logger.debug("Detected header shape=%s headers=%s", shape.value, header)

            header_index = HeaderIndex.from_headers(header)
            normalizer = SchemaNormalizer.for_shape(shape)

            for row_number, cells in enumerate(reader, start=2):
                rows_read += 1
                skip = self._validator.check_structure(
                    cells=cells,
                    column_count=header_index.column_count,
                    row_number=row_number,
                )
                if skip is None:
                    mapped_row = normalizer.normalize_row(header_index=header_index, cells=cells)
                    skip = self._validator.check_required_fields(
                        mapped_row=mapped_row,
                        row_number=row_number,
                    )
                if skip is not None:
                    if skip.reason is SkipReason.STRUCTURAL:
                        structural += 1
                    else:
                        incomplete += 1
                    self._record_skip(skipped, skip)
                    continue

                records.append(self._build_record(mapped_row, translator_id=translator_id))

        except UnicodeDecodeError as exc:
            raise UnreadableSourceError("QA file must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise UnreadableSourceError(f"Invalid delimited format: {exc}") from exc
        finally:
            if text_stream is not None:
                try:
                    text_stream.detach()
                except ValueError:
                    pass

        summary = IngestionSummary(
            shape=shape.value,
            rows_read=rows_read,
            records_emitted=len(records),
            rows_skipped_structural=structural,
            rows_skipped_incomplete=incomplete,
            skipped_rows=skipped,
        )
        log_event(
            logger,
            logging.INFO,
            "qa_ingestion_completed",
            shape=summary.shape,
            rows_read=summary.rows_read,
            records_emitted=summary.records_emitted,
            rows_skipped_structural=summary.rows_skipped_structural,
            rows_skipped_incomplete=summary.rows_skipped_incomplete,
        )
        return IngestionResult(records=records, summary=summary)

    def _build_record(
        self,
        mapped_row: dict[str, str],
        *,
        translator_id: str | None,
    ) -> CanonicalQARecord:
        target = mapped_row["target"]
        correction = mapped_row["correction"] or target
        resolved_translator = (
            (translator_id or "").strip()
            or mapped_row["translator_id"]
            or self._id_factory()
        )
        return CanonicalQARecord(
            source=mapped_row["source"],
            target=target,
            correction=correction,
            translator_id=resolved_translator,
            segment_line=mapped_row["segment_line"],
            back_translation=mapped_row["back_translation"],
            error_desc=mapped_row["error_desc"],
            error_group=mapped_row["error_group"],
            error_subgroup=mapped_row["error_subgroup"],
            severity=Severity.parse(mapped_row["severity"]),
            severity_label=mapped_row["severity"],
            human_error=parse_bool_flag(mapped_row["human_error"]),
        )

    def _record_skip(self, skipped: list[RowSkip], skip: RowSkip) -> None:
        if self._settings.log_skipped_rows:
            logger.warning(
                "QA row skipped row=%s reason=%s message=%s",
                skip.row_number,
                skip.reason.value,
                skip.message,
            )

        if len(skipped) < self._settings.max_skip_details:
            skipped.append(skip)
