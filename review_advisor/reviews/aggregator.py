"""Collect review text across a document set."""

from __future__ import annotations

import logging
from typing import Iterable, List

from review_advisor.config import Settings
from review_advisor.reviews.extractor import DEFAULT_SYNTHETIC_PREFIX, extract_fragments
from review_advisor.reviews.models import Corpus, ReviewDocument

logger = logging.getLogger(__name__)


class ReviewAggregator:
    """Builds a Corpus from one configured field of every document, in input order."""

    def __init__(
        self,
        field_name: str = "comment",
        synthetic_prefix: str = DEFAULT_SYNTHETIC_PREFIX,
    ) -> None:
        self.field_name = field_name
        self.synthetic_prefix = synthetic_prefix

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReviewAggregator":
        return cls(
            field_name=settings.review_field,
            synthetic_prefix=settings.synthetic_tag_prefix,
        )

    def aggregate(self, documents: Iterable[ReviewDocument]) -> Corpus:
        fragments: List[str] = []
        document_count = 0
        for document in documents:
            document_count += 1
            fragments.extend(
                extract_fragments(
                    document.fields.get(self.field_name), self.synthetic_prefix
                )
            )

        logger.info(
            f"Aggregated {len(fragments)} fragments from {document_count} documents "
            f"(field '{self.field_name}')"
        )
        return Corpus(tuple(fragments))
