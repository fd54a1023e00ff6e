"""
Run QA file analysis from CLI.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from qa_service.errors import QAPipelineError
from qa_service.logging_utils import configure_logging
from qa_service.repositories.qa_record_sink import InMemoryQARecordSink
from qa_service.schemas.qa_analysis import QAAnalysisResponse
from qa_service.services.qa_analysis_service import get_qa_analysis_service


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a translation QA file.")
    parser.add_argument("path", type=Path, help="CSV/TSV file with QA rows.")
    parser.add_argument(
        "--translator-id",
        dest="translator_id",
        default=None,
        help="Optional translator id assigned to every record.",
    )
    parser.add_argument(
        "--include-records",
        action="store_true",
        help="Also print the classified records.",
    )
    args = parser.parse_args(argv)

    configure_logging(default_level="WARNING")
    service = get_qa_analysis_service()
    sink = InMemoryQARecordSink()

    try:
        with args.path.open("rb") as handle:
            result = service.analyze(
                handle,
                filename=args.path.name,
                translator_id=args.translator_id,
                sink=sink,
            )
    except OSError as exc:
        print(f"Cannot open {args.path}: {exc}", file=sys.stderr)
        return 2
    except QAPipelineError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    payload = QAAnalysisResponse.from_result(result).model_dump()
    if args.include_records:
        payload["records"] = [
            {
                "translator_id": record.translator_id,
                "segment_line": record.segment_line,
                "source": record.source,
                "correction": record.correction,
                "error_group": record.error_group,
                "error_subgroup": record.error_subgroup,
                "severity": record.severity_label,
                "human_error": record.human_error,
            }
            for record in sink.records
        ]
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
