from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from .common import CamelModel


class DriverRead(CamelModel):
    id: str
    name: str
    phone: str
    email: Optional[str] = None
    is_available: bool
    current_location: Optional[str] = None
    last_active_at: Optional[datetime] = None


class ProfileUpdateRequest(CamelModel):
    # Unknown keys in the body are ignored
    driver_id: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    current_location: Optional[str] = None
    is_available: Optional[bool] = None


class LocationUpdateRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class ProfileResponse(CamelModel):
    success: bool = True
    driver: DriverRead
