"""One-shot review summary: fetch, aggregate, prompt, generate, check language."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from review_advisor.errors import RetrievalEmpty
from review_advisor.generation.client import TextGenerator
from review_advisor.generation.language import LanguageConformanceGate
from review_advisor.generation.models import SummaryResult
from review_advisor.generation.prompts import PromptBuilder
from review_advisor.reviews.aggregator import ReviewAggregator
from review_advisor.reviews.models import ReviewDocument

logger = logging.getLogger(__name__)


class ReviewSource(Protocol):
    def list_reviews(self, restaurant_id: str) -> Sequence[ReviewDocument]:
        ...


class SummaryPipeline:
    """Stateless composition; every run starts from freshly fetched reviews."""

    def __init__(
        self,
        store: ReviewSource,
        aggregator: ReviewAggregator,
        prompts: PromptBuilder,
        generator: TextGenerator,
        gate: LanguageConformanceGate,
    ) -> None:
        self.store = store
        self.aggregator = aggregator
        self.prompts = prompts
        self.generator = generator
        self.gate = gate

    def run(self, restaurant_id: str) -> SummaryResult:
        """
        Summarize the reviews of one restaurant.

        Raises:
            RetrievalEmpty: If there are no reviews or none carry usable text
            RetrievalFailed: If the store read fails
            GenerationFailed: If either generation call fails
        """
        documents = self.store.list_reviews(restaurant_id)
        if not documents:
            raise RetrievalEmpty(f"No reviews found for restaurant {restaurant_id}")
        return self.summarize_documents(documents)

    def summarize_documents(self, documents: Sequence[ReviewDocument]) -> SummaryResult:
        corpus = self.aggregator.aggregate(documents)
        if corpus.is_empty:
            raise RetrievalEmpty("No usable review text to analyze")

        logger.info(f"Summarizing {len(corpus)} review fragments")
        summary = self.generator.generate(self.prompts.summary(corpus.text))
        summary = self.gate.ensure(summary).strip()
        return SummaryResult(summary=summary, review_count=len(documents))
