from fastapi import APIRouter, Depends, Query
from hoteltrek.database.supabase_client import get_supabase
from hoteltrek.modules.admin.schemas import HotelResponse
from hoteltrek.modules.admin.service import HotelService
from hoteltrek.modules.maps.schemas import LocationUpdate, MapMarker, NearbyHotel
from hoteltrek.modules.maps.service import MapService
from hoteltrek.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/map", tags=["map"])


def get_map_service(supabase: Client = Depends(get_supabase)) -> MapService:
    return MapService(supabase)


def get_hotel_service(supabase: Client = Depends(get_supabase)) -> HotelService:
    return HotelService(supabase)


@router.get("/hotels", response_model=List[MapMarker])
async def list_markers(service: MapService = Depends(get_map_service)):
    """Markers for all located hotels"""
    return service.list_markers()


@router.get("/nearby", response_model=List[NearbyHotel])
async def find_nearby(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius_km: float = Query(10, gt=0, le=500),
    limit: int = Query(20, ge=1, le=100),
    service: MapService = Depends(get_map_service)
):
    """Hotels around a point ordered by distance"""
    return service.find_nearby(lat, lng, radius_km=radius_km, limit=limit)


@router.put("/hotels/{hotel_id}/location", response_model=HotelResponse)
async def set_hotel_location(
    hotel_id: str,
    location: LocationUpdate,
    user_data: Dict = Depends(require_admin),
    service: HotelService = Depends(get_hotel_service)
):
    """Pin a hotel on the map"""
    return service.set_location(hotel_id, location.latitude, location.longitude)
