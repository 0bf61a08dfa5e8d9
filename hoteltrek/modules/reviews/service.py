from supabase import Client
from hoteltrek.core.dependencies import check_owner_or_admin
from hoteltrek.modules.admin.service import HotelService
from hoteltrek.modules.reviews.schemas import ReviewCreate, ReviewUpdate, ReviewResponse, RatingSummary
from typing import List, Dict, Any
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.hotels = HotelService(supabase)

    def list_reviews(self, hotel_id: str, limit: int = 20, offset: int = 0) -> List[ReviewResponse]:
        """Reviews for a hotel, newest first"""
        try:
            result = self.supabase.table("reviews")\
                .select("*")\
                .eq("hotel_id", hotel_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [ReviewResponse(**r) for r in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_summary(self, hotel_id: str) -> RatingSummary:
        try:
            result = self.supabase.table("reviews")\
                .select("rating")\
                .eq("hotel_id", hotel_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        ratings = [int(r["rating"]) for r in (result.data or [])]
        distribution = {str(star): 0 for star in range(1, 6)}
        for rating in ratings:
            distribution[str(rating)] += 1
        return RatingSummary(
            hotel_id=hotel_id,
            average=round(sum(ratings) / len(ratings), 2) if ratings else None,
            count=len(ratings),
            distribution=distribution,
        )

    def get_review(self, review_id: str) -> ReviewResponse:
        try:
            result = self.supabase.table("reviews")\
                .select("*")\
                .eq("id", review_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Review not found")
        return ReviewResponse(**result.data)

    def create_review(self, hotel_id: str, review_data: ReviewCreate, user_data: Dict[str, Any]) -> ReviewResponse:
        """One review per user and hotel"""
        self.hotels.get_hotel(hotel_id)
        try:
            existing = self.supabase.table("reviews")\
                .select("id")\
                .eq("hotel_id", hotel_id)\
                .eq("user_id", user_data["id"])\
                .execute()
            if existing.data:
                raise HTTPException(status_code=409, detail="You have already reviewed this hotel")

            metadata = user_data.get("user_metadata") or {}
            result = self.supabase.table("reviews").insert({
                "hotel_id": hotel_id,
                "user_id": user_data["id"],
                "user_name": metadata.get("full_name") or "Guest",
                "rating": review_data.rating,
                "comment": review_data.comment,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create review")

            logger.info("User %s reviewed hotel %s (%d stars)", user_data["id"], hotel_id, review_data.rating)
            return ReviewResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_review(self, review_id: str, review_data: ReviewUpdate, user_data: Dict[str, Any]) -> ReviewResponse:
        """Only the author can edit a review"""
        review = self.get_review(review_id)
        if review.user_id != user_data["id"]:
            raise HTTPException(status_code=403, detail="You can only edit your own reviews")

        update_data = review_data.model_dump(exclude_unset=True)
        if not update_data:
            return review
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self.supabase.table("reviews")\
                .update(update_data)\
                .eq("id", review_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Review not found")
        return ReviewResponse(**result.data[0])

    def delete_review(self, review_id: str, user_data: Dict[str, Any]) -> bool:
        """Author or admin"""
        review = self.get_review(review_id)
        check_owner_or_admin(review.user_id, user_data, "review")
        try:
            self.supabase.table("reviews").delete().eq("id", review_id).execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        logger.info("Deleted review %s", review_id)
        return True
