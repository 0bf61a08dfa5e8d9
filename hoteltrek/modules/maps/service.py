from supabase import Client
from hoteltrek.modules.maps.geo import bounding_box, haversine_km
from hoteltrek.modules.maps.schemas import MapMarker, NearbyHotel
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

MARKER_COLUMNS = "id, name, city, address, latitude, longitude, price_per_night"


def _has_location(row: dict) -> bool:
    return row.get("latitude") is not None and row.get("longitude") is not None


class MapService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_markers(self) -> List[MapMarker]:
        """Every hotel that has coordinates"""
        try:
            result = self.supabase.table("hotels")\
                .select(MARKER_COLUMNS)\
                .order("name")\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return [MapMarker(**h) for h in (result.data or []) if _has_location(h)]

    def find_nearby(self, lat: float, lng: float, radius_km: float = 10, limit: int = 20) -> List[NearbyHotel]:
        """Hotels within radius_km of a point, closest first"""
        min_lat, max_lat, min_lng, max_lng = bounding_box(lat, lng, radius_km)
        try:
            query = self.supabase.table("hotels")\
                .select(MARKER_COLUMNS)\
                .gte("latitude", min_lat)\
                .lte("latitude", max_lat)
            if min_lng is not None:
                query = query.gte("longitude", min_lng).lte("longitude", max_lng)
            result = query.execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        nearby = []
        for hotel in result.data or []:
            if not _has_location(hotel):
                continue
            distance = haversine_km(lat, lng, hotel["latitude"], hotel["longitude"])
            if distance <= radius_km:
                nearby.append(NearbyHotel(**hotel, distance_km=round(distance, 3)))
        nearby.sort(key=lambda h: h.distance_km)
        logger.debug("Nearby search (%s, %s, %skm): %d hit(s)", lat, lng, radius_km, len(nearby))
        return nearby[:limit]
