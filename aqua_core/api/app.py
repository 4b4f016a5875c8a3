"""
AquaSentinel API — FastAPI endpoints.

Exposes the core's functionality via a REST API for:
- Pollution metrics with derived risk display
- Citizen report submission and listing
- AI prediction display
- Responder organizations with distances
- The Aqua AI assistant
- The tutorial-seen flag
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from aqua_core.classification.classifier import (
    RiskClassifier,
    classify_density,
    organization_type_badge,
)
from aqua_core.dashboard.loader import DashboardLoader
from aqua_core.dialogue.router import IntentRouter
from aqua_core.dialogue.session import (
    QUICK_ACTIONS,
    DialogueSession,
    greeting_transcript,
)
from aqua_core.errors import FetchFailure, ReportValidationError, StoreError
from aqua_core.geo.distance import annotate_organizations, rank_organizations
from aqua_core.geolocation.provider import GeolocationProvider, resolve_user_location
from aqua_core.mapping.adapter import InMemoryMapAdapter, MarkerPlotter
from aqua_core.models.config import AquaConfig
from aqua_core.models.dialogue import DialogueTurn, ResponseContext
from aqua_core.models.pollution import Coordinates, ReportSubmission
from aqua_core.store.records import (
    METRICS,
    ORGANIZATIONS,
    REPORTS,
    TUTORIAL_SEEN_FLAG,
    RecordStore,
)
from aqua_core.validation.validator import ReportValidator

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging on stdout."""
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging once the server starts, not at import."""
    setup_logging(app.state.config.log_level)
    logger.info("AquaSentinel API starting (store: %s)", app.state.config.db_path)
    yield
    logger.info("AquaSentinel API shutting down")


# --- Request/Response Models ---

class ChatRequest(BaseModel):
    message: str = ""
    transcript: List[DialogueTurn] = []
    metric_id: Optional[str] = None
    organization_id: Optional[str] = None


# --- Application Factory ---

def create_app(
    store: Optional[RecordStore] = None,
    config: Optional[AquaConfig] = None,
    router: Optional[IntentRouter] = None,
    geolocation: Optional[GeolocationProvider] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="AquaSentinel API",
        description="Water pollution classification and assistant",
        version="0.1.0",
        lifespan=lifespan,
    )

    cfg = config or AquaConfig()
    rs = store or RecordStore(db_path=cfg.db_path)
    classifier = RiskClassifier()
    validator = ReportValidator()
    session = DialogueSession(router=router or IntentRouter())

    app.state.config = cfg
    app.state.store = rs
    app.state.session = session
    app.state.geolocation = geolocation

    def _fetch(fetch, *args, **kwargs):
        try:
            return fetch(*args, **kwargs)
        except FetchFailure as e:
            raise HTTPException(503, f"Store unavailable: {e.collection}")

    # === METRICS ===

    @app.get("/metrics")
    def list_metrics():
        """Latest metrics, newest first, with risk display."""
        return [
            {"metric": m.model_dump(mode="json"),
             "display": classifier.classify_metric(m).model_dump(mode="json")}
            for m in _fetch(rs.metrics)
        ]

    @app.get("/metrics/{metric_id}")
    def get_metric(metric_id: str):
        metric = _fetch(rs.get_by_id, METRICS, metric_id)
        if not metric:
            raise HTTPException(404, "Metric not found")
        return {
            "metric": metric.model_dump(mode="json"),
            "display": classifier.classify_metric(metric).model_dump(mode="json"),
        }

    @app.get("/classify")
    def classify(density: float = Query(..., ge=0, le=100)):
        """Band and color for a density index."""
        return classify_density(density).model_dump(mode="json")

    # === REPORTS ===

    @app.get("/reports")
    def list_reports(limit: Optional[int] = Query(None, ge=1)):
        """Recent community reports."""
        reports = _fetch(rs.reports, limit=limit or cfg.recent_reports_limit)
        return [
            {"report": r.model_dump(mode="json"),
             "display": classifier.classify_report(r).model_dump(mode="json")}
            for r in reports
        ]

    @app.post("/reports", status_code=201)
    def submit_report(submission: ReportSubmission):
        """Validate a submission and hand it to the store."""
        try:
            report = validator.validate(submission)
        except ReportValidationError as e:
            raise HTTPException(422, e.to_dict())
        try:
            rs.insert(REPORTS, report)
        except StoreError as e:
            raise HTTPException(503, f"Store unavailable: {e.collection}")
        logger.info("Accepted report %s (%s)", report.id, report.category.value)
        return report.model_dump(mode="json")

    # === PREDICTIONS ===

    @app.get("/predictions")
    def list_predictions():
        return [
            {"prediction": p.model_dump(mode="json"),
             "display": classifier.classify_prediction(p).model_dump(mode="json")}
            for p in _fetch(rs.predictions)
        ]

    # === ORGANIZATIONS ===

    @app.get("/organizations")
    async def list_organizations(
        org_type: Optional[str] = Query(None, alias="type"),
        lat: Optional[float] = Query(None, ge=-90, le=90),
        lng: Optional[float] = Query(None, ge=-180, le=180),
        sort: str = Query("name", pattern="^(name|distance)$"),
    ):
        """Organizations with their distance from the user."""
        if (lat is None) != (lng is None):
            raise HTTPException(422, "lat and lng must be given together")
        if lat is not None:
            user = Coordinates(lat=lat, lng=lng)
        else:
            user = await resolve_user_location(app.state.geolocation, cfg.default_location)

        organizations = _fetch(rs.organizations)
        if sort == "distance":
            entries = rank_organizations(user, organizations, org_type=org_type)
        else:
            entries = annotate_organizations(user, organizations, org_type=org_type)
        return [
            {**e.model_dump(mode="json"),
             "type_badge": organization_type_badge(e.organization.type).model_dump(mode="json")}
            for e in entries
        ]

    # === DASHBOARD ===

    @app.get("/dashboard")
    async def dashboard():
        """All four collections at once; failed slots are reported as still loading."""
        snapshot = await DashboardLoader(rs, cfg.recent_reports_limit).load()
        return {
            **snapshot.model_dump(mode="json"),
            "loading": snapshot.loading,
        }

    # === MAP ===

    @app.get("/map/markers")
    def map_markers():
        """Markers as they would be pushed to the map surface."""
        plotter = MarkerPlotter(InMemoryMapAdapter(), classifier)
        markers = plotter.plot(_fetch(rs.metrics), _fetch(rs.reports))
        return {
            "center": cfg.map_center.model_dump(),
            "markers": [m.model_dump(mode="json") for m in markers],
        }

    # === ASSISTANT ===

    @app.get("/assistant/greeting")
    def assistant_greeting():
        return [t.model_dump(mode="json") for t in greeting_transcript()]

    @app.get("/assistant/quick-actions")
    def assistant_quick_actions():
        return list(QUICK_ACTIONS)

    @app.post("/assistant/chat")
    def assistant_chat(req: ChatRequest):
        """One dialogue turn. The client owns the transcript."""
        context = ResponseContext()
        if req.metric_id:
            context.metric = _fetch(rs.get_by_id, METRICS, req.metric_id)
        if req.organization_id:
            context.organization = _fetch(rs.get_by_id, ORGANIZATIONS, req.organization_id)
        result = session.take_turn(req.transcript, req.message, context)
        return result.model_dump(mode="json")

    # === TUTORIAL ===

    @app.get("/tutorial")
    def tutorial_status():
        return {"seen": rs.get_flag(TUTORIAL_SEEN_FLAG)}

    @app.post("/tutorial/dismiss")
    def dismiss_tutorial():
        rs.set_flag(TUTORIAL_SEEN_FLAG, True)
        return {"seen": True}

    return app


# Default application instance
app = create_app(config=AquaConfig.from_env())
