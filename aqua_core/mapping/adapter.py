"""
Map adapter — the only way the core talks to a map surface.

A map provider implements `render_marker` and `on_marker_click`. The
MarkerPlotter pushes classified metrics and raw reports through it; the
classification color and a label are the only data that cross.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Protocol

from aqua_core.classification.classifier import (
    REPORT_MARKER_COLOR,
    RiskClassifier,
    density_color,
)
from aqua_core.models.display import MapMarker, MetricDisplay
from aqua_core.models.pollution import Coordinates, PollutionMetric, PollutionReport

logger = logging.getLogger(__name__)

MarkerClickHandler = Callable[[str], None]


class MapAdapter(Protocol):
    """Narrow interface over a concrete map provider."""

    def render_marker(self, point: Coordinates, color: str, label: str) -> str:
        """Place a marker and return the provider's handle for it."""
        ...

    def on_marker_click(self, handler: MarkerClickHandler) -> None:
        """Register a callback receiving the clicked marker's handle."""
        ...


class InMemoryMapAdapter:
    """Map surface that keeps markers in a list. Used by the API and tests."""

    def __init__(self):
        self.markers: List[Dict[str, object]] = []
        self._handlers: List[MarkerClickHandler] = []

    def render_marker(self, point: Coordinates, color: str, label: str) -> str:
        handle = f"marker_{len(self.markers)}"
        self.markers.append(
            {"handle": handle, "lat": point.lat, "lng": point.lng, "color": color, "label": label}
        )
        return handle

    def on_marker_click(self, handler: MarkerClickHandler) -> None:
        self._handlers.append(handler)

    def click(self, handle: str) -> None:
        """Simulate the user clicking a marker."""
        for handler in self._handlers:
            handler(handle)


class MarkerPlotter:
    """Pushes metric and report markers to a map and tracks the selected metric."""

    def __init__(self, adapter: MapAdapter, classifier: Optional[RiskClassifier] = None):
        self.adapter = adapter
        self.classifier = classifier or RiskClassifier()
        self._metrics_by_handle: Dict[str, PollutionMetric] = {}
        self.selected: Optional[MetricDisplay] = None
        self.adapter.on_marker_click(self._handle_click)

    def plot(
        self,
        metrics: Iterable[PollutionMetric],
        reports: Iterable[PollutionReport] = (),
    ) -> List[MapMarker]:
        placed: List[MapMarker] = []
        for metric in metrics:
            marker = MapMarker(
                record_id=metric.id,
                kind="metric",
                lat=metric.location_lat,
                lng=metric.location_lng,
                color=density_color(metric.plastic_density_index),
                label=metric.location_name,
            )
            handle = self._render(marker)
            self._metrics_by_handle[handle] = metric
            placed.append(marker)

        for report in reports:
            marker = MapMarker(
                record_id=report.id,
                kind="report",
                lat=report.location_lat,
                lng=report.location_lng,
                color=REPORT_MARKER_COLOR,
                label=report.category.value,
            )
            self._render(marker)
            placed.append(marker)

        logger.debug("Plotted %d markers", len(placed))
        return placed

    def _render(self, marker: MapMarker) -> str:
        return self.adapter.render_marker(
            Coordinates(lat=marker.lat, lng=marker.lng), marker.color, marker.label
        )

    def _handle_click(self, handle: str) -> None:
        metric = self._metrics_by_handle.get(handle)
        if metric is None:
            # Report markers are not selectable
            return
        self.selected = self.classifier.classify_metric(metric)
