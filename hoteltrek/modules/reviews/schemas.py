from pydantic import BaseModel, Field, model_validator
from typing import Optional, Dict
from datetime import datetime


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def reject_null_rating(self):
        if "rating" in self.model_fields_set and self.rating is None:
            raise ValueError("rating cannot be null")
        return self


class ReviewResponse(BaseModel):
    id: str
    hotel_id: str
    user_id: str
    user_name: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RatingSummary(BaseModel):
    hotel_id: str
    average: Optional[float] = None
    count: int
    distribution: Dict[str, int]
