"""
qa_service/config.py

Application-level configuration helpers.

Settings are read from ``QA_*`` environment variables (plus ``LOG_LEVEL``).
Values may also live in ``.env`` / ``.env.local`` at the project root; only
the variables this service reads are taken from those files, and variables
already set in the process always win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from qa_service.domain.qa_record import parse_bool_flag

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILENAMES: tuple[str, ...] = (".env", ".env.local")
ENV_PREFIX = "QA_"
ENV_EXTRA_KEYS = frozenset({"LOG_LEVEL"})

DEFAULT_GLOSSARY_TERMS: tuple[str, ...] = (
    "FEV1",
    "COPD",
    "asthma",
    "bronchitis",
    "pneumonia",
    "diabetes",
    "hypertension",
)


def _is_service_key(key: str) -> bool:
    return key.startswith(ENV_PREFIX) or key in ENV_EXTRA_KEYS


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if "=" not in line:
        return None

    key, value = line.split("=", 1)
    key = key.strip()
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        value = value[1:-1]
    elif " #" in value:
        value = value.split(" #", 1)[0].rstrip()
    return (key, value) if key else None


def load_env_files(
    project_root: Path | None = None,
    filenames: Sequence[str] = ENV_FILENAMES,
) -> list[str]:
    """
    Load QA settings from env files under *project_root*.

    Files are read in order, so `.env.local` can refine `.env`, but nothing
    replaces a variable that was already set before loading started.
    Keys outside the ``QA_`` namespace (other than ``LOG_LEVEL``) are
    ignored so a shared `.env` does not leak unrelated secrets into the
    process. Returns the names of the variables that were set.
    """

    root = project_root or PROJECT_ROOT
    preexisting = set(os.environ)
    loaded: list[str] = []
    for filename in filenames:
        env_path = root / filename
        if not env_path.is_file():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is None:
                continue
            key, value = parsed
            if not _is_service_key(key) or key in preexisting:
                continue
            os.environ[key] = value
            if key not in loaded:
                loaded.append(key)
    return loaded


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a yes/no flag; unrecognized values keep the default.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    parsed = parse_bool_flag(raw_value)
    return default if parsed is None else parsed


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items if items else default


@dataclass(frozen=True)
class QAIngestionSettings:
    """
    Runtime settings for QA file ingestion.
    """

    translator_id_prefix: str = "AUTO"
    max_skip_details: int = 500
    log_skipped_rows: bool = True


@dataclass(frozen=True)
class ClassifierSettings:
    """
    Tunables for the rule-based error classifier.
    """

    glossary_terms: tuple[str, ...] = DEFAULT_GLOSSARY_TERMS
    addition_length_ratio: float = 1.5


@dataclass(frozen=True)
class ReportSettings:
    """
    Settings for the aggregate reports.
    """

    top_errors_limit: int = 10


@lru_cache(maxsize=1)
def get_qa_ingestion_settings() -> QAIngestionSettings:
    """
    Return cached QA ingestion settings from environment variables.
    """

    return QAIngestionSettings(
        translator_id_prefix=_get_str_env("QA_TRANSLATOR_ID_PREFIX", "AUTO"),
        max_skip_details=max(1, _get_int_env("QA_MAX_SKIP_DETAILS", 500)),
        log_skipped_rows=_get_bool_env("QA_LOG_SKIPPED_ROWS", True),
    )


@lru_cache(maxsize=1)
def get_classifier_settings() -> ClassifierSettings:
    """
    Return cached classifier settings from environment variables.
    """

    return ClassifierSettings(
        glossary_terms=_get_csv_env("QA_GLOSSARY_TERMS", DEFAULT_GLOSSARY_TERMS),
        addition_length_ratio=max(1.0, _get_float_env("QA_ADDITION_LENGTH_RATIO", 1.5)),
    )


@lru_cache(maxsize=1)
def get_report_settings() -> ReportSettings:
    """
    Return cached report settings from environment variables.
    """

    return ReportSettings(
        top_errors_limit=max(1, _get_int_env("QA_TOP_ERRORS_LIMIT", 10)),
    )
