"""Organization — responder entities the user can contact."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class OrganizationType(str, Enum):
    AUTHORITY = "Authority"
    CORPORATION = "Corporation"
    NGO = "NGO"


class Organization(BaseModel):
    id: str
    name: str
    type: str                               # "Authority" | "Corporation" | "NGO"
    location_lat: float
    location_lng: float
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    created_at: Optional[datetime] = None


class OrganizationDistance(BaseModel):
    """An organization paired with its display distance from the user."""

    organization: Organization
    distance_km: float                      # Whole kilometers; NaN when coordinates are malformed
