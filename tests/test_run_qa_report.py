"""
tests/test_run_qa_report.py

Pytest tests for the run_qa_report command line entry point.

Coverage
--------
- Successful run prints the JSON report and exits 0
- --include-records and --translator-id
- Exit code 2 when the input cannot be analyzed
"""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from types import ModuleType

import pytest

from classification.classifier import ErrorClassifier
from qa_service.config import ClassifierSettings, QAIngestionSettings
from qa_service.services.qa_analysis_service import QAAnalysisService
from qa_service.services.row_ingestor import RowIngestor

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "run_qa_report.py"

QA_DETAIL_CSV = (
    "Segment/Line #,Source,Translation,Description of Error,"
    "Error Category (대분류),Error Category (소분류),Human Error 여부,Severity,Translator ID\n"
    "1,Take one tablet daily,하루 한 알 복용,용어 오류,Terminology,Glossary,예,Critical,T-01\n"
    "2,Hi there,Hi there there there,,,,,,\n"
)


# ---------------------------------------------------------------------------
# Fixtures / helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def cli(monkeypatch: pytest.MonkeyPatch) -> ModuleType:
    module_spec = importlib.util.spec_from_file_location("run_qa_report", SCRIPT_PATH)
    assert module_spec is not None and module_spec.loader is not None
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)

    service = QAAnalysisService(
        ingestor=RowIngestor(settings=QAIngestionSettings(), id_factory=lambda: "AUTO_TEST"),
        classifier=ErrorClassifier(settings=ClassifierSettings()),
    )
    monkeypatch.setattr(module, "get_qa_analysis_service", lambda: service)
    return module


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Successful runs
# ---------------------------------------------------------------------------


class TestReport:
    def test_prints_report_and_exits_zero(
        self, cli: ModuleType, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "batch.csv", QA_DETAIL_CSV)

        assert cli.main([str(path)]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert set(payload) == {"ingestion", "taxonomy", "translators"}
        assert payload["ingestion"]["shape"] == "qa_detail"
        assert payload["ingestion"]["records_emitted"] == 2
        assert payload["ingestion"]["auto_classified"] == 1
        assert payload["translators"]["translator_stats"]["T-01"]["critical"] == 1
        assert payload["translators"]["translator_stats"]["AUTO_TEST"]["major"] == 1

    def test_include_records(
        self, cli: ModuleType, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "batch.csv", QA_DETAIL_CSV)

        assert cli.main([str(path), "--include-records"]) == 0

        records = json.loads(capsys.readouterr().out)["records"]
        assert [record["severity"] for record in records] == ["Critical", "major"]
        assert records[0]["source"] == "Take one tablet daily"
        assert records[0]["human_error"] is True
        assert records[1]["error_subgroup"] == "Addition/Omission"

    def test_translator_override(
        self, cli: ModuleType, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "batch.tsv", "source\ttarget\nHello\tBonjour\n")

        assert cli.main([str(path), "--translator-id", "vendor-9"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert list(payload["translators"]["translator_stats"]) == ["vendor-9"]


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_unsupported_extension_exits_two(
        self, cli: ModuleType, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "batch.xlsx", "source,target\nHello,Bonjour\n")

        assert cli.main([str(path)]) == 2

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err

    def test_missing_file_exits_two(
        self, cli: ModuleType, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert cli.main([str(tmp_path / "absent.csv")]) == 2

        assert "Cannot open" in capsys.readouterr().err

    def test_unknown_header_exits_two(
        self, cli: ModuleType, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "batch.csv", "text,translation\nHello,Bonjour\n")

        assert cli.main([str(path)]) == 2

        assert capsys.readouterr().out == ""
