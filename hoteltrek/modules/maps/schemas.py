from pydantic import BaseModel, Field
from typing import Optional


class LocationUpdate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class MapMarker(BaseModel):
    id: str
    name: str
    city: str
    address: Optional[str] = None
    latitude: float
    longitude: float
    price_per_night: float


class NearbyHotel(MapMarker):
    distance_km: float
