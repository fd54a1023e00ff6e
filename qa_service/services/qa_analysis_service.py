"""
qa_service/services/qa_analysis_service.py

Service layer for QA file analysis.

One call runs the whole batch in order:

    1. resolve_delimiter()                 : rejects unknown file types
    2. RowIngestor.ingest()                : canonical records + skip tally
    3. ErrorClassifier.classify()          : backfills empty taxonomy fields
    4. QARecordSink.save()                 : one call per record (optional)
    5. TaxonomyStatsAggregator.aggregate() : category matrix report
    6. TranslatorStatsAggregator.aggregate() : translator report

Both aggregators read the same finished record list; neither mutates it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import BinaryIO

from classification.classifier import ErrorClassifier, backfill
from qa_service.config import (
    ClassifierSettings,
    QAIngestionSettings,
    ReportSettings,
    get_classifier_settings,
    get_qa_ingestion_settings,
    get_report_settings,
)
from qa_service.domain.qa_record import CanonicalQARecord, ClassificationResult, IngestionSummary
from qa_service.logging_utils import log_event
from qa_service.repositories.qa_record_sink import QARecordSink
from qa_service.services.row_ingestor import RowIngestor, resolve_delimiter
from qa_stats.taxonomy import TaxonomyStats, TaxonomyStatsAggregator
from qa_stats.translator import TranslatorStats, TranslatorStatsAggregator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QAAnalysisResult:
    """
    Everything produced for one uploaded QA file.
    """

    records: list[CanonicalQARecord]
    ingestion: IngestionSummary
    auto_classified: int
    taxonomy: TaxonomyStats
    translators: TranslatorStats


class QAAnalysisService:
    """
    Coordinates ingestion, classification backfill, hand-off and aggregation.
    """

    def __init__(
        self,
        *,
        ingestor: RowIngestor,
        classifier: ErrorClassifier,
        taxonomy_aggregator: TaxonomyStatsAggregator | None = None,
        translator_aggregator: TranslatorStatsAggregator | None = None,
    ) -> None:
        self._ingestor = ingestor
        self._classifier = classifier
        self._taxonomy_aggregator = taxonomy_aggregator or TaxonomyStatsAggregator()
        self._translator_aggregator = translator_aggregator or TranslatorStatsAggregator()

    @classmethod
    def from_settings(
        cls,
        *,
        ingestion: QAIngestionSettings,
        classifier: ClassifierSettings,
        reports: ReportSettings,
    ) -> QAAnalysisService:
        return cls(
            ingestor=RowIngestor(settings=ingestion),
            classifier=ErrorClassifier(settings=classifier),
            translator_aggregator=TranslatorStatsAggregator(top_n=reports.top_errors_limit),
        )

    def analyze(
        self,
        stream: BinaryIO,
        *,
        filename: str,
        translator_id: str | None = None,
        sink: QARecordSink | None = None,
    ) -> QAAnalysisResult:
        """
        Ingest one QA table and build both reports.

        Args:
            stream:         Binary stream holding the delimited table.
            filename:       Original file name; its extension picks the delimiter.
            translator_id:  Optional id assigned to every record.
            sink:           Optional persistence collaborator.

        Raises:
            UnsupportedFormatError: Unknown extension or header layout.
            UnreadableSourceError:  Header or encoding cannot be read.
        """

        delimiter = resolve_delimiter(filename)
        ingestion = self._ingestor.ingest(
            stream,
            delimiter=delimiter,
            translator_id=translator_id,
        )

        records: list[CanonicalQARecord] = []
        auto_classified = 0
        for record in ingestion.records:
            if record.needs_classification:
                record = backfill(record, self._classifier.classify_record(record))
                auto_classified += 1
            if sink is not None:
                sink.save(record)
            records.append(record)

        taxonomy = self._taxonomy_aggregator.aggregate(records)
        translators = self._translator_aggregator.aggregate(records)

        log_event(
            logger,
            logging.INFO,
            "qa_analysis_completed",
            filename=filename,
            records=len(records),
            auto_classified=auto_classified,
            total_words=taxonomy.total_words,
            error_points=taxonomy.error_points,
            error_rate=taxonomy.error_rate,
            translators=len(translators.translator_stats),
        )
        return QAAnalysisResult(
            records=records,
            ingestion=ingestion.summary,
            auto_classified=auto_classified,
            taxonomy=taxonomy,
            translators=translators,
        )

    def classify(
        self,
        source: str,
        correction: str,
        error_desc: str = "",
    ) -> ClassificationResult:
        """
        Classify a single segment outside batch ingestion.
        """

        return self._classifier.classify(source, correction, error_desc)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_qa_analysis_service() -> QAAnalysisService:
    """
    Build and cache the analysis service with env-driven settings.
    """

    return QAAnalysisService.from_settings(
        ingestion=get_qa_ingestion_settings(),
        classifier=get_classifier_settings(),
        reports=get_report_settings(),
    )
