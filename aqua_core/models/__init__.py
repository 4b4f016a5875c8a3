"""AquaSentinel core data models."""

from aqua_core.models.config import AquaConfig
from aqua_core.models.dialogue import (
    DialogueRole,
    DialogueTurn,
    DialogueTurnResult,
    ResponseContext,
)
from aqua_core.models.display import (
    BadgeStyle,
    DensityClassification,
    MapMarker,
    MetricDisplay,
    PredictionDisplay,
    PredictionStyle,
    ReportDisplay,
    RiskBand,
    TrendIndicator,
)
from aqua_core.models.organization import (
    Organization,
    OrganizationDistance,
    OrganizationType,
)
from aqua_core.models.pollution import (
    Clarity,
    Coordinates,
    PollutionMetric,
    PollutionReport,
    ReportCategory,
    ReportStatus,
    ReportSubmission,
    Trend,
)
from aqua_core.models.prediction import (
    AIPrediction,
    PredictionFactors,
    PredictionRisk,
)

__all__ = [
    "AIPrediction",
    "AquaConfig",
    "BadgeStyle",
    "Clarity",
    "Coordinates",
    "DensityClassification",
    "DialogueRole",
    "DialogueTurn",
    "DialogueTurnResult",
    "MapMarker",
    "MetricDisplay",
    "Organization",
    "OrganizationDistance",
    "OrganizationType",
    "PollutionMetric",
    "PollutionReport",
    "PredictionDisplay",
    "PredictionFactors",
    "PredictionRisk",
    "PredictionStyle",
    "ReportCategory",
    "ReportDisplay",
    "ReportStatus",
    "ReportSubmission",
    "ResponseContext",
    "RiskBand",
    "Trend",
    "TrendIndicator",
]
