"""Prompt templates and prompt assembly for the generation endpoint."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from review_advisor.generation.models import ConversationTurn, Speaker

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_PATH = Path(__file__).with_name("templates.yaml")


class AdvisoryTemplate(BaseModel):
    """Framing for the interactive advisory conversation."""

    framing: str = Field(..., description="Role-framing instruction")
    features_heading: str
    history_heading: str
    operator_label: str
    assistant_label: str
    separator: str = Field(default="：", description="Between label and utterance")


class SummaryTemplate(BaseModel):
    """Fixed instruction for the batch review summary."""

    instruction: str = Field(..., min_length=1)
    corpus_heading: str


class TranslationTemplate(BaseModel):
    """Corrective translation instruction."""

    instruction: str = Field(..., min_length=1)


class PromptTemplates(BaseModel):
    advisory: AdvisoryTemplate
    summary: SummaryTemplate
    translation: TranslationTemplate


def load_templates(path: Optional[str | Path] = None) -> PromptTemplates:
    """
    Load prompt templates from a YAML file.

    Args:
        path: Template file; the packaged templates when omitted

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file doesn't describe every template
    """
    template_path = Path(path) if path else DEFAULT_TEMPLATES_PATH
    try:
        with open(template_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        templates = PromptTemplates.model_validate(data or {})
    except yaml.YAMLError as e:
        logger.error(f"YAML parse error in {template_path}: {e}")
        raise
    except ValidationError as e:
        logger.error(f"Validation error in {template_path}: {e}")
        raise

    logger.debug(f"Loaded prompt templates from {template_path}")
    return templates


class PromptBuilder:
    """Deterministic construction of advisory, summary and translation prompts."""

    def __init__(self, templates: Optional[PromptTemplates] = None) -> None:
        self.templates = templates or load_templates()

    def speaker_label(self, speaker: Speaker) -> str:
        advisory = self.templates.advisory
        if speaker is Speaker.OPERATOR:
            return advisory.operator_label
        return advisory.assistant_label

    def render_turn(self, turn: ConversationTurn) -> str:
        return f"{self.speaker_label(turn.speaker)}{self.templates.advisory.separator}{turn.text}"

    def advisory(self, features: str, history: Iterable[ConversationTurn]) -> str:
        """Framing, restaurant features, every prior turn, then an open assistant turn."""
        advisory = self.templates.advisory
        lines = [
            advisory.framing,
            advisory.features_heading,
            features,
            advisory.history_heading,
        ]
        lines.extend(self.render_turn(turn) for turn in history)
        open_turn = f"{advisory.assistant_label}{advisory.separator}"
        return "\n".join(lines) + "\n" + open_turn

    def summary(self, corpus_text: str) -> str:
        summary = self.templates.summary
        return f"{summary.instruction}\n{summary.corpus_heading}\n{corpus_text}"

    def translation(self, text: str) -> str:
        return f"{self.templates.translation.instruction}\n{text}"
