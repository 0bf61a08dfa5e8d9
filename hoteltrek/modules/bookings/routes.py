from fastapi import APIRouter, Depends, Query
from hoteltrek.database.supabase_client import get_supabase
from hoteltrek.modules.admin.schemas import HotelResponse
from hoteltrek.modules.admin.service import HotelService
from hoteltrek.modules.bookings.schemas import BookingCreate, BookingResponse, AvailabilityResponse
from hoteltrek.modules.bookings.service import BookingService
from hoteltrek.core.dependencies import get_current_user
from supabase import Client
from typing import List, Optional, Dict
from datetime import date

router = APIRouter(prefix="/booking", tags=["booking"])


def get_booking_service(supabase: Client = Depends(get_supabase)) -> BookingService:
    return BookingService(supabase)


def get_hotel_service(supabase: Client = Depends(get_supabase)) -> HotelService:
    return HotelService(supabase)


@router.get("/hotels", response_model=List[HotelResponse])
async def search_hotels(
    city: Optional[str] = None,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: HotelService = Depends(get_hotel_service)
):
    """Browse hotels by city and nightly price"""
    return service.list_hotels(city=city, min_price=min_price, max_price=max_price, limit=limit, offset=offset)


@router.get("/hotels/{hotel_id}", response_model=HotelResponse)
async def get_hotel(
    hotel_id: str,
    service: HotelService = Depends(get_hotel_service)
):
    return service.get_hotel(hotel_id)


@router.get("/hotels/{hotel_id}/availability", response_model=AvailabilityResponse)
async def get_availability(
    hotel_id: str,
    check_in: date,
    check_out: date,
    rooms: int = Query(1, ge=1),
    service: BookingService = Depends(get_booking_service)
):
    """Free rooms and price for a stay"""
    return service.check_availability(hotel_id, check_in, check_out, rooms)


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    booking_data: BookingCreate,
    user_data: Dict = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    """Create a booking for the current user"""
    return service.create_booking(booking_data, user_data)


@router.get("/my", response_model=List[BookingResponse])
async def list_my_bookings(
    user_data: Dict = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    return service.list_user_bookings(user_data["id"])


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    user_data: Dict = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    """Get booking by ID (owner or admin)"""
    return service.get_booking_for_user(booking_id, user_data)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    user_data: Dict = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    """Cancel a booking (owner or admin) before check-in"""
    return service.cancel_booking(booking_id, user_data)
