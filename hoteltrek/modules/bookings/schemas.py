from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, Literal
from datetime import date, datetime

BookingStatus = Literal["confirmed", "cancelled", "completed"]


class BookingCreate(BaseModel):
    hotel_id: str
    check_in: date
    check_out: date
    guests: int = Field(1, ge=1)
    rooms: int = Field(1, ge=1)
    guest_name: Optional[str] = Field(None, max_length=100)
    guest_email: Optional[EmailStr] = None
    guest_phone: Optional[str] = Field(None, max_length=32)
    special_requests: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def check_dates(self):
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


class BookingResponse(BaseModel):
    id: str
    user_id: str
    hotel_id: Optional[str] = None
    check_in: date
    check_out: date
    guests: int
    rooms: int
    total_price: float
    status: str
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    guest_phone: Optional[str] = None
    special_requests: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class AvailabilityResponse(BaseModel):
    hotel_id: str
    check_in: date
    check_out: date
    nights: int
    rooms: int
    available_rooms: int
    is_available: bool
    total_price: float
