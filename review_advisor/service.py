"""Wiring of stores, generators and flows from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import httpx

from review_advisor.config import Settings, get_settings
from review_advisor.generation.client import OllamaClient, TextGenerator
from review_advisor.generation.language import LanguageConformanceGate
from review_advisor.generation.models import ConversationTurn
from review_advisor.generation.pipeline import SummaryPipeline
from review_advisor.generation.prompts import PromptBuilder, load_templates
from review_advisor.generation.session import ConversationSession
from review_advisor.reviews.aggregator import ReviewAggregator
from review_advisor.reviews.store import FirestoreClient

logger = logging.getLogger(__name__)


@dataclass
class AdvisorServices:
    settings: Settings
    store: FirestoreClient
    generator: TextGenerator
    prompts: PromptBuilder
    gate: LanguageConformanceGate
    aggregator: ReviewAggregator

    def summary_pipeline(self) -> SummaryPipeline:
        return SummaryPipeline(
            store=self.store,
            aggregator=self.aggregator,
            prompts=self.prompts,
            generator=self.generator,
            gate=self.gate,
        )

    def conversation(
        self, features: str, history: Iterable[ConversationTurn] = ()
    ) -> ConversationSession:
        return ConversationSession(
            features,
            generator=self.generator,
            gate=self.gate,
            prompts=self.prompts,
            exit_keyword=self.settings.exit_keyword,
            history=history,
        )

    def close(self) -> None:
        self.store.close()
        close = getattr(self.generator, "close", None)
        if close is not None:
            close()


def build_services(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.Client] = None,
    generator: Optional[TextGenerator] = None,
) -> AdvisorServices:
    """
    Build the application services from settings.

    Args:
        settings: Application settings; the cached settings when omitted
        http_client: Shared httpx client for the store and the generator
        generator: Replacement text generator (defaults to Ollama)
    """
    settings = settings or get_settings()
    prompts = PromptBuilder(load_templates(settings.prompts_file))
    generator = generator or OllamaClient(settings, client=http_client)
    store = FirestoreClient(settings, client=http_client)
    gate = LanguageConformanceGate.from_settings(generator, prompts, settings)
    logger.debug(
        f"Services ready: model={settings.ollama_model}, "
        f"project={settings.firestore_project_id}, field={settings.review_field}"
    )
    return AdvisorServices(
        settings=settings,
        store=store,
        generator=generator,
        prompts=prompts,
        gate=gate,
        aggregator=ReviewAggregator.from_settings(settings),
    )
