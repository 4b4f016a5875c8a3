"""
Dashboard loader — fetches every collection into its own result slot.

Fetches run concurrently and independently. A failed fetch leaves its slot
empty (the view keeps showing its loading state) without touching the
others. There is no timeout and no de-duplication: when two loads overlap,
whichever finishes last wins.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from pydantic import BaseModel

from aqua_core.errors import FetchFailure
from aqua_core.models.organization import Organization
from aqua_core.models.pollution import PollutionMetric, PollutionReport
from aqua_core.models.prediction import AIPrediction
from aqua_core.store.records import RecordStore

logger = logging.getLogger(__name__)


class DashboardSnapshot(BaseModel):
    """One slot per collection. `None` means still loading."""

    metrics: Optional[List[PollutionMetric]] = None
    reports: Optional[List[PollutionReport]] = None
    predictions: Optional[List[AIPrediction]] = None
    organizations: Optional[List[Organization]] = None
    failed: List[str] = []

    @property
    def loading(self) -> List[str]:
        slots = ("metrics", "reports", "predictions", "organizations")
        return [name for name in slots if getattr(self, name) is None]


async def _fetch(name: str, fetch: Callable[[], list]):
    try:
        return await asyncio.to_thread(fetch)
    except FetchFailure as e:
        logger.error("Fetching %s failed: %s", name, e)
        return None


class DashboardLoader:
    def __init__(self, store: RecordStore, recent_reports_limit: Optional[int] = None):
        self.store = store
        self.recent_reports_limit = recent_reports_limit
        self.snapshot = DashboardSnapshot()

    async def load(self) -> DashboardSnapshot:
        """Fetch all slots and replace the current snapshot with the result."""
        fetches = {
            "metrics": self.store.metrics,
            "reports": lambda: self.store.reports(limit=self.recent_reports_limit),
            "predictions": self.store.predictions,
            "organizations": self.store.organizations,
        }
        results = await asyncio.gather(
            *(_fetch(name, fetch) for name, fetch in fetches.items())
        )
        values = dict(zip(fetches, results))
        snapshot = DashboardSnapshot(
            **values,
            failed=[name for name, value in values.items() if value is None],
        )
        self.snapshot = snapshot
        return snapshot
