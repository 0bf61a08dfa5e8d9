from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict
from datetime import datetime


class HotelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    address: Optional[str] = None
    city: str = Field(..., min_length=1, max_length=100)
    country: Optional[str] = None
    price_per_night: float = Field(..., gt=0)
    total_rooms: int = Field(..., ge=1)
    amenities: List[str] = []
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class HotelUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    country: Optional[str] = None
    price_per_night: Optional[float] = Field(None, gt=0)
    total_rooms: Optional[int] = Field(None, ge=1)
    amenities: Optional[List[str]] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    @model_validator(mode="after")
    def reject_null_required(self):
        # omitted means unchanged; these columns are NOT NULL
        for name in ("name", "city", "price_per_night", "total_rooms", "amenities"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class HotelResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    city: str
    country: Optional[str] = None
    price_per_night: float
    total_rooms: int
    amenities: List[str] = []
    image_urls: List[str] = []
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HotelImageResponse(BaseModel):
    hotel_id: str
    url: str
    public_id: str
    image_urls: List[str]


class AdminStatsResponse(BaseModel):
    hotels: int
    bookings: int
    bookings_by_status: Dict[str, int]
    revenue: float
    reviews: int
    average_rating: Optional[float] = None
