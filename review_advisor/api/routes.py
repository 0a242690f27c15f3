"""HTTP route handlers for reviews, summaries and advice."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from review_advisor.service import AdvisorServices

from .schemas import (
    AdviceRequestModel,
    AdviceResponseModel,
    ReviewListModel,
    ReviewModel,
    SummaryResponseModel,
    TurnModel,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_services(request: Request) -> AdvisorServices:
    return request.app.state.services


@router.get("/v1/restaurants/{restaurant_id}/reviews", response_model=ReviewListModel)
def list_reviews(
    restaurant_id: str, services: AdvisorServices = Depends(get_services)
) -> ReviewListModel:
    documents = services.store.list_reviews(restaurant_id)
    return ReviewListModel(
        restaurant_id=restaurant_id,
        reviews=[ReviewModel.from_domain(document) for document in documents],
    )


@router.post(
    "/v1/restaurants/{restaurant_id}/summary", response_model=SummaryResponseModel
)
def summarize_reviews(
    restaurant_id: str, services: AdvisorServices = Depends(get_services)
) -> SummaryResponseModel:
    result = services.summary_pipeline().run(restaurant_id)
    return SummaryResponseModel.from_domain(restaurant_id, result)


@router.post("/v1/advice", response_model=AdviceResponseModel)
def advice(
    advice_request: AdviceRequestModel,
    services: AdvisorServices = Depends(get_services),
) -> AdviceResponseModel:
    # Stateless: the client carries the conversation between calls.
    session = services.conversation(
        advice_request.features,
        history=[turn.to_domain() for turn in advice_request.history],
    )
    reply = session.submit(advice_request.question)
    logger.debug(f"Advice turn answered with {len(session.history)} turns of context")
    return AdviceResponseModel(
        reply=reply,
        state=session.state.value,
        history=[TurnModel.from_domain(turn) for turn in session.history],
    )
