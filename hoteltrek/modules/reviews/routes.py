from fastapi import APIRouter, Depends, Query
from hoteltrek.database.supabase_client import get_supabase
from hoteltrek.modules.reviews.schemas import ReviewCreate, ReviewUpdate, ReviewResponse, RatingSummary
from hoteltrek.modules.reviews.service import ReviewService
from hoteltrek.core.dependencies import get_current_user
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["reviews"])


def get_review_service(supabase: Client = Depends(get_supabase)) -> ReviewService:
    return ReviewService(supabase)


@router.get("/hotels/{hotel_id}/reviews", response_model=List[ReviewResponse])
async def list_reviews(
    hotel_id: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: ReviewService = Depends(get_review_service)
):
    return service.list_reviews(hotel_id, limit=limit, offset=offset)


@router.get("/hotels/{hotel_id}/rating", response_model=RatingSummary)
async def get_rating(
    hotel_id: str,
    service: ReviewService = Depends(get_review_service)
):
    """Average rating and star distribution"""
    return service.get_summary(hotel_id)


@router.post("/hotels/{hotel_id}/reviews", response_model=ReviewResponse, status_code=201)
async def create_review(
    hotel_id: str,
    review_data: ReviewCreate,
    user_data: Dict = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    return service.create_review(hotel_id, review_data, user_data)


@router.put("/reviews/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str,
    review_data: ReviewUpdate,
    user_data: Dict = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    return service.update_review(review_id, review_data, user_data)


@router.delete("/reviews/{review_id}", status_code=204)
async def delete_review(
    review_id: str,
    user_data: Dict = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    service.delete_review(review_id, user_data)
    return None
