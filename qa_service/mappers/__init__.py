"""
qa_service/mappers package marker.
"""

from qa_service.mappers.schema_normalizer import (
    CANONICAL_FIELDS,
    GENERIC_ALIASES,
    QA_DETAIL_ALIASES,
    HeaderIndex,
    HeaderShape,
    SchemaNormalizer,
    detect_shape,
)

__all__ = [
    "CANONICAL_FIELDS",
    "GENERIC_ALIASES",
    "QA_DETAIL_ALIASES",
    "HeaderIndex",
    "HeaderShape",
    "SchemaNormalizer",
    "detect_shape",
]
