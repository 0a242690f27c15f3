"""Domain models shared by the conversation and summary flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


class Speaker(Enum):
    OPERATOR = "operator"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    speaker: Speaker
    text: str


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    model: str
    prompt: str
    stream: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {"model": self.model, "prompt": self.prompt, "stream": self.stream}


@dataclass(frozen=True, slots=True)
class SummaryResult:
    summary: str
    review_count: int = 0
    analysis_time: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc).astimezone()
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analysis_time": self.analysis_time.isoformat(),
            "summary": self.summary,
        }
