"""AI Prediction — precomputed risk forecasts produced by an external job."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PredictionRisk(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class PredictionFactors(BaseModel):
    """Contributing factors behind a forecast. All optional."""

    weather: Optional[str] = None
    waste_hotspots: Optional[int] = None
    historical_trend: Optional[str] = None


class AIPrediction(BaseModel):
    """A forecast record. The core only derives display attributes from it."""

    id: str
    location_lat: float
    location_lng: float
    risk_level: str                         # "Low" | "Moderate" | "High"; anything else is unknown
    prediction_text: str
    confidence_score: float = Field(ge=0.0, le=1.0)
    factors: PredictionFactors = PredictionFactors()
    valid_until: datetime
    created_at: datetime
