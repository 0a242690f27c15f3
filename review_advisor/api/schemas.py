# review_advisor/api/schemas.py
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from review_advisor.generation.models import ConversationTurn, Speaker, SummaryResult
from review_advisor.reviews.models import ArrayValue, ReviewDocument, TypedValue

RoleLiteral = Literal["operator", "assistant"]


def _field_text(value: TypedValue) -> List[str]:
    if isinstance(value, ArrayValue):
        return [item.text for item in value.values if item.text is not None]
    return [value.text] if value.text is not None else []


class ReviewModel(BaseModel):
    review_id: str
    fields: Dict[str, List[str]] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, document: ReviewDocument) -> "ReviewModel":
        return cls(
            review_id=document.review_id,
            fields={key: _field_text(value) for key, value in document.fields.items()},
        )


class ReviewListModel(BaseModel):
    restaurant_id: str
    reviews: List[ReviewModel]


class SummaryResponseModel(BaseModel):
    restaurant_id: str
    analysis_time: str
    summary: str
    review_count: int

    @classmethod
    def from_domain(cls, restaurant_id: str, result: SummaryResult) -> "SummaryResponseModel":
        return cls(
            restaurant_id=restaurant_id,
            analysis_time=result.analysis_time.isoformat(),
            summary=result.summary,
            review_count=result.review_count,
        )


class TurnModel(BaseModel):
    role: RoleLiteral
    content: str

    def to_domain(self) -> ConversationTurn:
        return ConversationTurn(Speaker(self.role), self.content)

    @classmethod
    def from_domain(cls, turn: ConversationTurn) -> "TurnModel":
        return cls(role=turn.speaker.value, content=turn.text)


class AdviceRequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    features: str = Field(..., min_length=1, description="Restaurant feature description.")
    history: List[TurnModel] = Field(
        default_factory=list, description="Earlier turns of this conversation."
    )
    question: str = Field(..., description="The operator's new question.")

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("`question` must not be blank.")
        return value


class AdviceResponseModel(BaseModel):
    reply: Optional[str]
    state: str
    history: List[TurnModel]
