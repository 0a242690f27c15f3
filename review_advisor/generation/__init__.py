"""Prompting, generation and conversation flows."""

from review_advisor.generation.client import OllamaClient, TextGenerator
from review_advisor.generation.language import LanguageConformanceGate, script_ratio
from review_advisor.generation.models import ConversationTurn, Speaker, SummaryResult
from review_advisor.generation.pipeline import SummaryPipeline
from review_advisor.generation.prompts import PromptBuilder, load_templates
from review_advisor.generation.session import ConversationSession, SessionState

__all__ = [
    "ConversationSession",
    "ConversationTurn",
    "LanguageConformanceGate",
    "OllamaClient",
    "PromptBuilder",
    "SessionState",
    "Speaker",
    "SummaryPipeline",
    "SummaryResult",
    "TextGenerator",
    "load_templates",
    "script_ratio",
]
