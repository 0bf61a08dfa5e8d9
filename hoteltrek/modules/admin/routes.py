from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, File
from hoteltrek.database.supabase_client import get_supabase
from hoteltrek.modules.admin.schemas import (
    HotelCreate, HotelUpdate, HotelResponse, HotelImageResponse, AdminStatsResponse
)
from hoteltrek.modules.admin.service import HotelService, AdminService
from hoteltrek.modules.bookings.schemas import BookingResponse, BookingStatus, BookingStatusUpdate
from hoteltrek.modules.bookings.service import BookingService
from hoteltrek.modules.uploads.service import UploadService, get_upload_service
from hoteltrek.core.dependencies import require_admin
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(tags=["admin"], dependencies=[Depends(require_admin)])


def get_hotel_service(supabase: Client = Depends(get_supabase)) -> HotelService:
    return HotelService(supabase)


def get_admin_service(supabase: Client = Depends(get_supabase)) -> AdminService:
    return AdminService(supabase)


def get_booking_service(supabase: Client = Depends(get_supabase)) -> BookingService:
    return BookingService(supabase)


@router.get("/hotels", response_model=List[HotelResponse])
async def list_hotels(
    city: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: HotelService = Depends(get_hotel_service)
):
    return service.list_hotels(city=city, limit=limit, offset=offset)


@router.post("/hotels", response_model=HotelResponse, status_code=201)
async def create_hotel(
    hotel_data: HotelCreate,
    service: HotelService = Depends(get_hotel_service)
):
    """Create a new hotel"""
    return service.create_hotel(hotel_data)


@router.get("/hotels/{hotel_id}", response_model=HotelResponse)
async def get_hotel(
    hotel_id: str,
    service: HotelService = Depends(get_hotel_service)
):
    return service.get_hotel(hotel_id)


@router.put("/hotels/{hotel_id}", response_model=HotelResponse)
async def update_hotel(
    hotel_id: str,
    hotel_data: HotelUpdate,
    service: HotelService = Depends(get_hotel_service)
):
    """Update hotel"""
    return service.update_hotel(hotel_id, hotel_data)


@router.delete("/hotels/{hotel_id}", status_code=204)
async def delete_hotel(
    hotel_id: str,
    service: HotelService = Depends(get_hotel_service),
    uploads: UploadService = Depends(get_upload_service)
):
    """Delete hotel, its reviews and its stored images"""
    service.delete_hotel(hotel_id, uploads)
    return None


@router.post("/hotels/{hotel_id}/images", response_model=HotelImageResponse, status_code=201)
async def upload_hotel_image(
    hotel_id: str,
    file: UploadFile = File(...),
    service: HotelService = Depends(get_hotel_service),
    uploads: UploadService = Depends(get_upload_service)
):
    """Upload a gallery image for a hotel"""
    if not file.filename:
        raise HTTPException(status_code=400, detail="An image file is required")
    return await service.add_image(hotel_id, file, uploads)


@router.delete("/hotels/{hotel_id}/images", response_model=HotelResponse)
async def delete_hotel_image(
    hotel_id: str,
    url: str = Query(..., min_length=1),
    service: HotelService = Depends(get_hotel_service),
    uploads: UploadService = Depends(get_upload_service)
):
    return service.remove_image(hotel_id, url, uploads)


@router.get("/bookings", response_model=List[BookingResponse])
async def list_bookings(
    status: Optional[BookingStatus] = None,
    hotel_id: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: BookingService = Depends(get_booking_service)
):
    """List all bookings, optionally filtered by status or hotel"""
    return service.list_bookings(status=status, hotel_id=hotel_id, limit=limit, offset=offset)


@router.patch("/bookings/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    status_data: BookingStatusUpdate,
    service: BookingService = Depends(get_booking_service)
):
    """Mark a confirmed booking as completed or cancelled"""
    return service.update_status(booking_id, status_data.status)


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(service: AdminService = Depends(get_admin_service)):
    """Dashboard totals"""
    return service.get_stats()
