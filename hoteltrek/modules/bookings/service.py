from supabase import Client
from hoteltrek.config import settings
from hoteltrek.core.dependencies import check_owner_or_admin
from hoteltrek.modules.admin.schemas import HotelResponse
from hoteltrek.modules.admin.service import HotelService
from hoteltrek.modules.bookings.schemas import BookingCreate, BookingResponse, AvailabilityResponse
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
from datetime import date, datetime, timezone
import logging

logger = logging.getLogger(__name__)

# Statuses an admin may move a booking to, keyed by current status
ALLOWED_TRANSITIONS = {
    "confirmed": {"cancelled", "completed"},
}


def nights_between(check_in: date, check_out: date) -> int:
    return (check_out - check_in).days


def stay_price(hotel: HotelResponse, nights: int, rooms: int) -> float:
    return round(nights * rooms * hotel.price_per_night, 2)


class BookingService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.hotels = HotelService(supabase)

    def _validate_stay(self, check_in: date, check_out: date) -> int:
        nights = nights_between(check_in, check_out)
        if nights < 1:
            raise HTTPException(status_code=400, detail="check_out must be after check_in")
        if nights > settings.max_stay_nights:
            raise HTTPException(
                status_code=400,
                detail=f"Stays are limited to {settings.max_stay_nights} nights"
            )
        return nights

    def get_booked_rooms(self, hotel_id: str, check_in: date, check_out: date) -> int:
        """Rooms held by non-cancelled bookings overlapping [check_in, check_out)"""
        try:
            result = self.supabase.table("bookings")\
                .select("rooms")\
                .eq("hotel_id", hotel_id)\
                .neq("status", "cancelled")\
                .lt("check_in", check_out.isoformat())\
                .gt("check_out", check_in.isoformat())\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return sum(int(b.get("rooms") or 0) for b in (result.data or []))

    def check_availability(self, hotel_id: str, check_in: date, check_out: date, rooms: int = 1) -> AvailabilityResponse:
        hotel = self.hotels.get_hotel(hotel_id)
        nights = self._validate_stay(check_in, check_out)
        available = max(hotel.total_rooms - self.get_booked_rooms(hotel_id, check_in, check_out), 0)
        return AvailabilityResponse(
            hotel_id=hotel_id,
            check_in=check_in,
            check_out=check_out,
            nights=nights,
            rooms=rooms,
            available_rooms=available,
            is_available=available >= rooms,
            total_price=stay_price(hotel, nights, rooms),
        )

    def create_booking(self, booking_data: BookingCreate, user_data: Dict[str, Any]) -> BookingResponse:
        """Book rooms for the current user"""
        if booking_data.check_in < date.today():
            raise HTTPException(status_code=400, detail="check_in cannot be in the past")
        if booking_data.guests > booking_data.rooms * settings.max_guests_per_room:
            raise HTTPException(
                status_code=400,
                detail=f"At most {settings.max_guests_per_room} guests per room"
            )

        availability = self.check_availability(
            booking_data.hotel_id, booking_data.check_in, booking_data.check_out, booking_data.rooms
        )
        if not availability.is_available:
            raise HTTPException(
                status_code=409,
                detail=f"Only {availability.available_rooms} room(s) available for the selected dates"
            )

        metadata = user_data.get("user_metadata") or {}
        insert_data = {
            **booking_data.model_dump(mode="json"),
            "user_id": user_data["id"],
            "total_price": availability.total_price,
            "status": "confirmed",
            "guest_name": booking_data.guest_name or metadata.get("full_name"),
            "guest_email": booking_data.guest_email or user_data.get("email"),
        }
        try:
            result = self.supabase.table("bookings").insert(insert_data).execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create booking")

        booking = BookingResponse(**result.data[0])
        logger.info(
            "Booking %s: user %s, hotel %s, %s -> %s, %d room(s)",
            booking.id, booking.user_id, booking.hotel_id,
            booking.check_in, booking.check_out, booking.rooms
        )
        return booking

    def get_booking(self, booking_id: str) -> BookingResponse:
        try:
            result = self.supabase.table("bookings")\
                .select("*")\
                .eq("id", booking_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Booking not found")
        return BookingResponse(**result.data)

    def get_booking_for_user(self, booking_id: str, user_data: Dict[str, Any]) -> BookingResponse:
        booking = self.get_booking(booking_id)
        check_owner_or_admin(booking.user_id, user_data, "booking")
        return booking

    def list_user_bookings(self, user_id: str) -> List[BookingResponse]:
        """All bookings of a user, newest first"""
        try:
            result = self.supabase.table("bookings")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [BookingResponse(**b) for b in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_bookings(
        self,
        status: Optional[str] = None,
        hotel_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[BookingResponse]:
        try:
            query = self.supabase.table("bookings").select("*")
            if status:
                query = query.eq("status", status)
            if hotel_id:
                query = query.eq("hotel_id", hotel_id)
            result = query.order("created_at", desc=True).limit(limit).offset(offset).execute()
            return [BookingResponse(**b) for b in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _set_status(self, booking_id: str, status: str) -> BookingResponse:
        try:
            result = self.supabase.table("bookings")\
                .update({"status": status, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", booking_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Booking not found")
        logger.info("Booking %s is now %s", booking_id, status)
        return BookingResponse(**result.data[0])

    def cancel_booking(self, booking_id: str, user_data: Dict[str, Any]) -> BookingResponse:
        """Cancel a booking before the stay begins"""
        booking = self.get_booking_for_user(booking_id, user_data)
        if booking.status != "confirmed":
            raise HTTPException(status_code=400, detail=f"Booking is already {booking.status}")
        if booking.check_in <= date.today():
            raise HTTPException(status_code=400, detail="Booking has already started and cannot be cancelled")
        return self._set_status(booking_id, "cancelled")

    def update_status(self, booking_id: str, status: str) -> BookingResponse:
        """Admin status change, restricted to ALLOWED_TRANSITIONS"""
        booking = self.get_booking(booking_id)
        if status == booking.status:
            return booking
        if status not in ALLOWED_TRANSITIONS.get(booking.status, set()):
            raise HTTPException(
                status_code=400,
                detail=f"Cannot change booking from {booking.status} to {status}"
            )
        return self._set_status(booking_id, status)
