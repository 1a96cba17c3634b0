"""
Database Schemas

MongoDB collection schemas defined as Pydantic models.
Each Pydantic model represents a collection in the database.
Model name is converted to lowercase for the collection name:
- User -> "user" collection
- Hotel -> "hotel" collection
- Review -> "review" collection
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any, Literal
from datetime import date

EMAIL_PATTERN = r".+@.+\..+"


class User(BaseModel):
    name: str = Field(..., description="Full name")
    role: Literal["guest", "admin", "hotel_owner"] = Field(..., description="guest | admin | hotel_owner")
    email: str = Field(..., pattern=EMAIL_PATTERN, description="Unique email address")


class Hotel(BaseModel):
    name: str = Field(..., description="Hotel name")
    location: str = Field(..., description="City/Country or full address")
    rating: Optional[float] = Field(None, ge=1, le=5, description="Rating 1-5")
    amenities: List[str] = Field(default_factory=list, description="Amenities list")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Free-form nested attributes")


class HotelUpdate(BaseModel):
    """Partial hotel body for field-level merges; only fields sent are written."""

    name: Optional[str] = None
    location: Optional[str] = None
    rating: Optional[float] = Field(None, ge=1, le=5)
    amenities: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("name", "location", "amenities")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value


class AmenityRequest(BaseModel):
    amenity: str


class Room(BaseModel):
    hotel_id: str = Field(..., description="Related hotel id as string")
    type: str = Field(..., description="Room type, e.g. Deluxe")
    price: float = Field(..., ge=0, description="Nightly rate")
    status: Literal["available", "booked"] = Field("available")


class Booking(BaseModel):
    user_id: str = Field(...)
    hotel_id: str = Field(...)
    room_id: str = Field(...)
    check_in: date = Field(...)
    check_out: date = Field(...)
    status: Literal["confirmed", "cancelled"] = Field("confirmed", description="confirmed | cancelled")


class Review(BaseModel):
    user_id: str = Field(...)
    hotel_id: str = Field(...)
    rating: float = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    comment: Optional[str] = Field(None, max_length=500, description="Review text")
