from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class ProfileUpdate(BaseModel):
    # email is owned by the auth provider; sending it is an error
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=32)
    location: Optional[str] = Field(None, max_length=200)
    profile_picture: Optional[str] = Field(None, max_length=2048)


class ProfileResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str = ""
    location: str = ""
    profile_picture: str = ""
    public_id: Optional[str] = None
    last_updated: Optional[datetime] = None
