"""Display attributes derived by the RiskClassifier. Never persisted."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class RiskBand(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"


class DensityClassification(BaseModel):
    band: RiskBand
    color: str                              # Hex fill color for markers and gauges


class BadgeStyle(BaseModel):
    """A labelled badge. `tone` is a palette name, "gray" when the value is unknown."""

    label: str
    tone: str
    known: bool = True


class TrendIndicator(BaseModel):
    label: str
    icon: str                               # "warning" | "neutral" | "positive"
    tone: str
    known: bool = True


class PredictionStyle(BaseModel):
    label: str
    color: str
    icon: Optional[str] = None              # "alert" | "rising" | "check"; None when unknown
    known: bool = True


class MetricDisplay(BaseModel):
    metric_id: str
    location_name: str
    density: DensityClassification
    clarity: BadgeStyle
    trend: TrendIndicator


class ReportDisplay(BaseModel):
    report_id: str
    category: BadgeStyle
    status: BadgeStyle
    density: DensityClassification
    clarity: BadgeStyle


class PredictionDisplay(BaseModel):
    prediction_id: str
    risk: PredictionStyle
    confidence_percent: int


class MapMarker(BaseModel):
    """A point pushed to the map surface."""

    record_id: str
    kind: str                               # "metric" | "report"
    lat: float
    lng: float
    color: str
    label: str
