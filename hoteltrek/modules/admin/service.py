from supabase import Client
from hoteltrek.config import settings
from hoteltrek.modules.admin.schemas import (
    HotelCreate, HotelUpdate, HotelResponse, HotelImageResponse, AdminStatsResponse
)
from hoteltrek.modules.uploads.images import ImageRules
from hoteltrek.modules.uploads.service import UploadService
from typing import List, Optional, Dict
from fastapi import HTTPException, UploadFile
from datetime import date, datetime, timezone
import logging

logger = logging.getLogger(__name__)


def hotel_image_rules() -> ImageRules:
    return ImageRules(
        max_bytes=settings.hotel_image_max_bytes,
        allowed_formats=settings.get_hotel_image_formats(),
        max_size=settings.hotel_image_max_size,
    )


class HotelService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_hotel(self, hotel_data: HotelCreate) -> HotelResponse:
        """Create a new hotel"""
        try:
            result = self.supabase.table("hotels").insert({
                **hotel_data.model_dump(),
                "image_urls": [],
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create hotel")

            logger.info("Created hotel %s (%s)", result.data[0]["id"], hotel_data.name)
            return HotelResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_hotel(self, hotel_id: str) -> HotelResponse:
        """Get hotel by ID"""
        try:
            result = self.supabase.table("hotels")\
                .select("*")\
                .eq("id", hotel_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Hotel not found")

            return HotelResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_hotels(
        self,
        city: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[HotelResponse]:
        """List hotels, optionally filtered by city (case-insensitive substring) and nightly price."""
        try:
            query = self.supabase.table("hotels").select("*")
            if city:
                query = query.ilike("city", f"%{city}%")
            if min_price is not None:
                query = query.gte("price_per_night", min_price)
            if max_price is not None:
                query = query.lte("price_per_night", max_price)
            result = query.order("created_at", desc=True).limit(limit).offset(offset).execute()
            return [HotelResponse(**h) for h in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_hotel(self, hotel_id: str, hotel_data: HotelUpdate) -> HotelResponse:
        """Update hotel; only fields present in the request are written"""
        update_data = hotel_data.model_dump(exclude_unset=True)
        if not update_data:
            return self.get_hotel(hotel_id)
        try:
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
            result = self.supabase.table("hotels")\
                .update(update_data)\
                .eq("id", hotel_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Hotel not found")

            return HotelResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_location(self, hotel_id: str, latitude: float, longitude: float) -> HotelResponse:
        return self.update_hotel(hotel_id, HotelUpdate(latitude=latitude, longitude=longitude))

    def delete_hotel(self, hotel_id: str, uploads: Optional[UploadService] = None) -> bool:
        """Delete a hotel with its reviews. Refused while guests still have upcoming stays."""
        hotel = self.get_hotel(hotel_id)
        try:
            upcoming = self.supabase.table("bookings")\
                .select("id")\
                .eq("hotel_id", hotel_id)\
                .eq("status", "confirmed")\
                .gt("check_out", date.today().isoformat())\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if upcoming.data:
            raise HTTPException(
                status_code=409,
                detail="Hotel has upcoming confirmed bookings; cancel them before deleting"
            )

        try:
            self.supabase.table("reviews").delete().eq("hotel_id", hotel_id).execute()
            self.supabase.table("hotels").delete().eq("id", hotel_id).execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if uploads:
            for url in hotel.image_urls:
                uploads.delete_by_url(url)
        logger.info("Deleted hotel %s", hotel_id)
        return True

    async def add_image(self, hotel_id: str, file: UploadFile, uploads: UploadService) -> HotelImageResponse:
        """Store an uploaded image and append it to the hotel's gallery"""
        hotel = self.get_hotel(hotel_id)
        stored = await uploads.store_image(file, settings.hotel_image_folder, hotel_image_rules())
        image_urls = [*hotel.image_urls, stored.url]
        try:
            self.supabase.table("hotels")\
                .update({"image_urls": image_urls, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", hotel_id)\
                .execute()
        except Exception as e:
            uploads.delete_by_url(stored.url)
            raise HTTPException(status_code=500, detail=str(e))
        return HotelImageResponse(
            hotel_id=hotel_id,
            url=stored.url,
            public_id=stored.public_id,
            image_urls=image_urls,
        )

    def remove_image(self, hotel_id: str, url: str, uploads: UploadService) -> HotelResponse:
        hotel = self.get_hotel(hotel_id)
        if url not in hotel.image_urls:
            raise HTTPException(status_code=404, detail="Image not found on this hotel")
        image_urls = [u for u in hotel.image_urls if u != url]
        try:
            result = self.supabase.table("hotels")\
                .update({"image_urls": image_urls, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", hotel_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        uploads.delete_by_url(url)
        return HotelResponse(**result.data[0])


class AdminService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_stats(self) -> AdminStatsResponse:
        """Dashboard totals across hotels, bookings and reviews"""
        try:
            hotels = self.supabase.table("hotels").select("id").execute().data or []
            bookings = self.supabase.table("bookings").select("status, total_price").execute().data or []
            reviews = self.supabase.table("reviews").select("rating").execute().data or []
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        by_status: Dict[str, int] = {"confirmed": 0, "cancelled": 0, "completed": 0}
        revenue = 0.0
        for b in bookings:
            status = b.get("status") or "unknown"
            by_status[status] = by_status.get(status, 0) + 1
            if status in ("confirmed", "completed"):
                revenue += float(b.get("total_price") or 0)

        ratings = [r["rating"] for r in reviews if r.get("rating") is not None]
        average = round(sum(ratings) / len(ratings), 2) if ratings else None

        return AdminStatsResponse(
            hotels=len(hotels),
            bookings=len(bookings),
            bookings_by_status=by_status,
            revenue=round(revenue, 2),
            reviews=len(ratings),
            average_rating=average,
        )
