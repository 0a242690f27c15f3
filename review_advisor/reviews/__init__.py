"""Review retrieval, typed-field extraction and aggregation."""

from review_advisor.reviews.aggregator import ReviewAggregator
from review_advisor.reviews.extractor import extract_fragments
from review_advisor.reviews.models import (
    ArrayValue,
    Corpus,
    ReviewDocument,
    StringValue,
    TypedValue,
    UnknownValue,
    parse_typed_value,
)
from review_advisor.reviews.store import FirestoreClient

__all__ = [
    "ArrayValue",
    "Corpus",
    "FirestoreClient",
    "ReviewAggregator",
    "ReviewDocument",
    "StringValue",
    "TypedValue",
    "UnknownValue",
    "extract_fragments",
    "parse_typed_value",
]
