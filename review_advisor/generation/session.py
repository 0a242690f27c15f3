"""Interactive advisory conversation state."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from review_advisor.errors import SessionTerminated
from review_advisor.generation.client import TextGenerator
from review_advisor.generation.language import LanguageConformanceGate
from review_advisor.generation.models import ConversationTurn, Speaker
from review_advisor.generation.prompts import PromptBuilder

logger = logging.getLogger(__name__)


class SessionState(Enum):
    ACTIVE = "active"
    TERMINATED = "terminated"


class ConversationSession:
    """
    Advisory chat seeded with a restaurant's feature description.

    The history is append-only and grows for the lifetime of the session;
    every turn re-sends the whole of it to the generator.
    """

    def __init__(
        self,
        features: str,
        generator: TextGenerator,
        gate: LanguageConformanceGate,
        prompts: Optional[PromptBuilder] = None,
        exit_keyword: str = "exit",
        history: Iterable[ConversationTurn] = (),
    ) -> None:
        self.features = features
        self.generator = generator
        self.gate = gate
        self.prompts = prompts or gate.prompts
        self.exit_keyword = exit_keyword
        self.state = SessionState.ACTIVE
        # Prior turns are only accepted at construction (resumed conversations).
        self._history: List[ConversationTurn] = list(history)

    @property
    def history(self) -> Tuple[ConversationTurn, ...]:
        return tuple(self._history)

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def submit(self, line: str) -> Optional[str]:
        """
        Handle one line of operator input.

        Returns:
            The assistant reply, or None for blank input and the exit keyword

        Raises:
            SessionTerminated: If the session already ended
            GenerationFailed: If the generator call fails; the history is left
                unchanged
        """
        if not self.is_active:
            raise SessionTerminated("Conversation has ended")

        question = line.strip()
        if not question:
            return None
        if question.casefold() == self.exit_keyword.casefold():
            logger.info(f"Session ended after {len(self._history)} turns")
            self.state = SessionState.TERMINATED
            return None

        turn = ConversationTurn(Speaker.OPERATOR, question)
        prompt = self.prompts.advisory(self.features, [*self._history, turn])
        reply = self.gate.ensure(self.generator.generate(prompt)).strip()
        self._history.extend((turn, ConversationTurn(Speaker.ASSISTANT, reply)))
        return reply

    def close(self) -> None:
        self.state = SessionState.TERMINATED
