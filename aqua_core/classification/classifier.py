"""
Risk Classifier — turns raw measurements into display semantics.

Behavioral Contract:
- Density bands are evaluated highest first; a boundary value belongs
  to the higher band (70 → Critical, 50 → High, 30 → Moderate)
- Clarity, trend, prediction risk, category, status and organization type
  map through fixed lookup tables
- Unrecognized values get the neutral style; nothing here ever raises
- Stateless: classifying the same record twice gives identical output
"""

import math
from enum import Enum
from typing import Dict, List, Tuple, Union

from aqua_core.models.display import (
    BadgeStyle,
    DensityClassification,
    MetricDisplay,
    PredictionDisplay,
    PredictionStyle,
    ReportDisplay,
    RiskBand,
    TrendIndicator,
)
from aqua_core.models.pollution import PollutionMetric, PollutionReport
from aqua_core.models.prediction import AIPrediction

NEUTRAL_TONE = "gray"
NEUTRAL_COLOR = "#6b7280"
REPORT_MARKER_COLOR = "#ff6b6b"

# (minimum density, band, color), highest threshold first
DENSITY_BANDS: List[Tuple[float, RiskBand, str]] = [
    (70, RiskBand.CRITICAL, "#ef4444"),
    (50, RiskBand.HIGH, "#f59e0b"),
    (30, RiskBand.MODERATE, "#eab308"),
]
LOW_BAND_COLOR = "#10b981"

CLARITY_TONES: Dict[str, str] = {
    "Clear": "green",
    "Moderate": "yellow",
    "Poor": "red",
}

# trend → (icon, tone)
TREND_ICONS: Dict[str, Tuple[str, str]] = {
    "Rising": ("warning", "red"),
    "Stable": ("neutral", "yellow"),
    "Declining": ("positive", "green"),
}

# prediction risk → (color, icon)
PREDICTION_STYLES: Dict[str, Tuple[str, str]] = {
    "High": ("#dc2626", "alert"),
    "Moderate": ("#eab308", "rising"),
    "Low": ("#16a34a", "check"),
}

CATEGORY_TONES: Dict[str, str] = {
    "Plastic": "blue",
    "Chemical": "purple",
    "Oil": "dark",
    "Sewage": "brown",
}

STATUS_TONES: Dict[str, str] = {
    "New": "yellow",
    "Verified": "green",
    "Resolved": "gray",
}

ORGANIZATION_TONES: Dict[str, str] = {
    "Authority": "blue",
    "Corporation": "purple",
    "NGO": "green",
}


def _key(value: Union[str, Enum, None]) -> str:
    """Lookup key for a raw string or a str-valued enum."""
    if isinstance(value, Enum):
        return str(value.value)
    return "" if value is None else str(value)


def _badge(value: Union[str, Enum, None], table: Dict[str, str]) -> BadgeStyle:
    key = _key(value)
    tone = table.get(key)
    if tone is None:
        return BadgeStyle(label=key or "Unknown", tone=NEUTRAL_TONE, known=False)
    return BadgeStyle(label=key, tone=tone)


def classify_density(density: float) -> DensityClassification:
    """Band and color for a density index."""
    for threshold, band, color in DENSITY_BANDS:
        if density >= threshold:
            return DensityClassification(band=band, color=color)
    return DensityClassification(band=RiskBand.LOW, color=LOW_BAND_COLOR)


def density_band(density: float) -> RiskBand:
    return classify_density(density).band


def density_color(density: float) -> str:
    return classify_density(density).color


def clarity_badge(clarity: Union[str, Enum, None]) -> BadgeStyle:
    return _badge(clarity, CLARITY_TONES)


def trend_indicator(trend: Union[str, Enum, None]) -> TrendIndicator:
    key = _key(trend)
    entry = TREND_ICONS.get(key)
    if entry is None:
        return TrendIndicator(
            label=key or "Unknown", icon="neutral", tone=NEUTRAL_TONE, known=False
        )
    icon, tone = entry
    return TrendIndicator(label=key, icon=icon, tone=tone)


def prediction_style(risk_level: Union[str, Enum, None]) -> PredictionStyle:
    key = _key(risk_level)
    entry = PREDICTION_STYLES.get(key)
    if entry is None:
        return PredictionStyle(label=key or "Unknown", color=NEUTRAL_COLOR, known=False)
    color, icon = entry
    return PredictionStyle(label=key, color=color, icon=icon)


def category_badge(category: Union[str, Enum, None]) -> BadgeStyle:
    return _badge(category, CATEGORY_TONES)


def status_badge(status: Union[str, Enum, None]) -> BadgeStyle:
    return _badge(status, STATUS_TONES)


def organization_type_badge(org_type: Union[str, Enum, None]) -> BadgeStyle:
    return _badge(org_type, ORGANIZATION_TONES)


class RiskClassifier:
    """Derives display attributes for whole records."""

    def classify_metric(self, metric: PollutionMetric) -> MetricDisplay:
        return MetricDisplay(
            metric_id=metric.id,
            location_name=metric.location_name,
            density=classify_density(metric.plastic_density_index),
            clarity=clarity_badge(metric.water_clarity_level),
            trend=trend_indicator(metric.pollution_trend),
        )

    def classify_report(self, report: PollutionReport) -> ReportDisplay:
        return ReportDisplay(
            report_id=report.id,
            category=category_badge(report.category),
            status=status_badge(report.status),
            density=classify_density(report.plastic_density_index),
            clarity=clarity_badge(report.water_clarity_level),
        )

    def classify_prediction(self, prediction: AIPrediction) -> PredictionDisplay:
        return PredictionDisplay(
            prediction_id=prediction.id,
            risk=prediction_style(prediction.risk_level),
            confidence_percent=math.floor(prediction.confidence_score * 100 + 0.5),
        )
