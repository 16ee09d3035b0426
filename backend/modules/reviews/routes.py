"""
Review API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_query_plan, get_review_service
from api.middleware.auth import authorize
from shared.models import CollectionEnvelope, Envelope, ListEnvelope
from modules.auth.models import Account, Role
from modules.query import QueryPlan

from .models import CreateReviewRequest, Review, UpdateReviewRequest
from .service import ReviewService

router = APIRouter()

reviewer = authorize(Role.USER, Role.ADMIN)


@router.get("/reviews", response_model=ListEnvelope)
async def list_reviews(
    plan: QueryPlan = Depends(get_query_plan),
    service: ReviewService = Depends(get_review_service),
) -> ListEnvelope:
    return await service.list_reviews(plan)


@router.get("/bootcamps/{bootcamp_id}/reviews", response_model=CollectionEnvelope)
async def list_bootcamp_reviews(
    bootcamp_id: str,
    service: ReviewService = Depends(get_review_service),
) -> CollectionEnvelope:
    return await service.list_bootcamp_reviews(bootcamp_id)


@router.get("/reviews/{review_id}", response_model=Envelope[Review])
async def get_review(
    review_id: str,
    service: ReviewService = Depends(get_review_service),
) -> Envelope[Review]:
    return Envelope(data=await service.get_review(review_id))


@router.post("/bootcamps/{bootcamp_id}/reviews", response_model=Envelope[Review])
async def create_review(
    bootcamp_id: str,
    request: CreateReviewRequest,
    user: Account = Depends(reviewer),
    service: ReviewService = Depends(get_review_service),
) -> Envelope[Review]:
    """
    Review a bootcamp.

    Each user may review a bootcamp once.
    """
    return Envelope(data=await service.create_review(bootcamp_id, user, request))


@router.put("/reviews/{review_id}", response_model=Envelope[Review])
async def update_review(
    review_id: str,
    request: UpdateReviewRequest,
    user: Account = Depends(reviewer),
    service: ReviewService = Depends(get_review_service),
) -> Envelope[Review]:
    return Envelope(data=await service.update_review(review_id, user, request))


@router.delete("/reviews/{review_id}", response_model=Envelope[dict])
async def delete_review(
    review_id: str,
    user: Account = Depends(reviewer),
    service: ReviewService = Depends(get_review_service),
) -> Envelope[dict]:
    await service.delete_review(review_id, user)
    return Envelope(data={})
