"""Pollution records — monitored-location snapshots and citizen reports."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """A point on the globe, in degrees."""

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class Clarity(str, Enum):
    CLEAR = "Clear"
    MODERATE = "Moderate"
    POOR = "Poor"


class Trend(str, Enum):
    RISING = "Rising"
    STABLE = "Stable"
    DECLINING = "Declining"


class ReportCategory(str, Enum):
    PLASTIC = "Plastic"
    CHEMICAL = "Chemical"
    OIL = "Oil"
    SEWAGE = "Sewage"


class ReportStatus(str, Enum):
    """Report lifecycle. Only moves forward: New → Verified → Resolved."""

    NEW = "New"
    VERIFIED = "Verified"
    RESOLVED = "Resolved"

    def can_transition_to(self, target: "ReportStatus") -> bool:
        order = list(ReportStatus)
        return order.index(target) > order.index(self)


class PollutionMetric(BaseModel):
    """Latest snapshot for a monitored location. Written only by the store."""

    id: str
    location_lat: float
    location_lng: float
    location_name: str
    plastic_density_index: int = Field(ge=0, le=100)
    water_clarity_level: str                # "Clear" | "Moderate" | "Poor"; anything else is unknown
    microplastic_count: int = Field(ge=0)   # particles per m³
    pollution_trend: str                    # "Rising" | "Stable" | "Declining"; anything else is unknown
    last_updated: datetime
    created_at: datetime

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.location_lat, lng=self.location_lng)


class PollutionReport(BaseModel):
    """A normalized citizen observation, ready for the store."""

    id: str
    location_lat: float = Field(ge=-90, le=90)
    location_lng: float = Field(ge=-180, le=180)
    category: ReportCategory
    description: Optional[str] = None
    photo_url: Optional[str] = None
    plastic_density_index: int = Field(ge=0, le=100)
    water_clarity_level: Clarity
    reported_by: str = "Anonymous"
    status: ReportStatus = ReportStatus.NEW
    created_at: datetime

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.location_lat, lng=self.location_lng)


class ReportSubmission(BaseModel):
    """
    Raw candidate report as submitted by a user.

    Deliberately loose: values here have not been checked yet and may be
    out of range, non-finite or misspelled. ReportValidator turns this into
    a PollutionReport or rejects it.
    """

    location_lat: float
    location_lng: float
    category: str
    description: Optional[str] = None
    photo_url: Optional[str] = None
    plastic_density_index: float = 50
    water_clarity_level: str = Clarity.MODERATE.value
    reported_by: Optional[str] = None
    status: Optional[str] = None
