"""
Report Validator — the gate between a raw submission and the record store.

Behavioral Contract:
- Accepts a ReportSubmission, returns a complete PollutionReport or raises
- Coordinates must be finite and in range (InvalidLocation)
- Category must be one of the known categories (InvalidCategory)
- Density is clamped into [0, 100], never rejected
- Blank reporter names become "Anonymous"
- Status is always "New"; a caller-supplied status is ignored
"""

import logging
import math
from datetime import datetime
from typing import Optional
from uuid import uuid4

from aqua_core.errors import InvalidCategory, InvalidLocation
from aqua_core.models.pollution import (
    Clarity,
    PollutionReport,
    ReportCategory,
    ReportStatus,
    ReportSubmission,
)

logger = logging.getLogger(__name__)

ANONYMOUS_REPORTER = "Anonymous"
DEFAULT_DENSITY = 50
DEFAULT_CLARITY = Clarity.MODERATE


def _check_coordinate(value: float, limit: float, field: str) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise InvalidLocation(f"{field} must be a number", field=field)
    if not math.isfinite(value):
        raise InvalidLocation(f"{field} must be a finite number", field=field)
    if value < -limit or value > limit:
        raise InvalidLocation(
            f"{field} {value} is outside [-{limit:g}, {limit:g}]", field=field
        )
    return float(value)


def clamp_density(value: float) -> int:
    """Clamp a density estimate into [0, 100]. NaN takes the form default."""
    if math.isnan(value):
        return DEFAULT_DENSITY
    return math.floor(max(0.0, min(100.0, float(value))) + 0.5)


def normalize_reporter(name: Optional[str]) -> str:
    if name is None or not name.strip():
        return ANONYMOUS_REPORTER
    return name.strip()


def _parse_category(raw: str) -> ReportCategory:
    value = (raw or "").strip()
    try:
        return ReportCategory(value)
    except ValueError:
        allowed = ", ".join(c.value for c in ReportCategory)
        raise InvalidCategory(
            f"Unknown category '{raw}'. Expected one of: {allowed}", field="category"
        ) from None


def _parse_clarity(raw: Optional[str]) -> Clarity:
    value = (raw or "").strip()
    try:
        return Clarity(value)
    except ValueError:
        logger.info("Unrecognized clarity %r, using %s", raw, DEFAULT_CLARITY.value)
        return DEFAULT_CLARITY


class ReportValidator:
    """Validates and normalizes citizen submissions. Holds no state."""

    def validate(
        self,
        submission: ReportSubmission,
        now: Optional[datetime] = None,
    ) -> PollutionReport:
        """Produce a store-ready report, or raise a ReportValidationError."""
        try:
            lat = _check_coordinate(submission.location_lat, 90, "location_lat")
            lng = _check_coordinate(submission.location_lng, 180, "location_lng")
            category = _parse_category(submission.category)
        except (InvalidLocation, InvalidCategory) as e:
            logger.info("Rejected report submission: %s (%s)", e, e.code)
            raise

        if submission.status and submission.status != ReportStatus.NEW.value:
            logger.warning(
                "Ignoring submitted status %r; new reports always start as %s",
                submission.status,
                ReportStatus.NEW.value,
            )

        description = (submission.description or "").strip() or None

        return PollutionReport(
            id=f"report_{uuid4().hex[:12]}",
            location_lat=lat,
            location_lng=lng,
            category=category,
            description=description,
            photo_url=submission.photo_url,
            plastic_density_index=clamp_density(submission.plastic_density_index),
            water_clarity_level=_parse_clarity(submission.water_clarity_level),
            reported_by=normalize_reporter(submission.reported_by),
            status=ReportStatus.NEW,
            created_at=now or datetime.utcnow(),
        )
