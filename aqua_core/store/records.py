"""
Record Store — adapter for the external pollution database.

Four collections, each supporting select-all-ordered and insert-one:
pollution_reports, pollution_metrics, ai_predictions, organizations.

Behavioral Contract:
- The store is the single source of truth; nothing is cached here
- Reads are ordered by a caller-chosen field, optionally paginated
- Failures surface as FetchFailure / StoreWriteFailure, never as sqlite errors
- One local flag table holds UI flags such as the tutorial-seen marker
"""

import logging
import sqlite3
import threading
from typing import Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from aqua_core.errors import FetchFailure, StoreWriteFailure
from aqua_core.models.organization import Organization
from aqua_core.models.pollution import PollutionMetric, PollutionReport
from aqua_core.models.prediction import AIPrediction

logger = logging.getLogger(__name__)

REPORTS = "pollution_reports"
METRICS = "pollution_metrics"
PREDICTIONS = "ai_predictions"
ORGANIZATIONS = "organizations"

COLLECTIONS: Dict[str, Type[BaseModel]] = {
    REPORTS: PollutionReport,
    METRICS: PollutionMetric,
    PREDICTIONS: AIPrediction,
    ORGANIZATIONS: Organization,
}

# Fields callers may order by, per collection
ORDERABLE_FIELDS: Dict[str, tuple] = {
    REPORTS: ("created_at", "plastic_density_index", "status", "category"),
    METRICS: ("created_at", "last_updated", "plastic_density_index", "location_name"),
    PREDICTIONS: ("created_at", "valid_until", "confidence_score", "risk_level"),
    ORGANIZATIONS: ("created_at", "name", "type"),
}

TUTORIAL_SEEN_FLAG = "aquasentinel_tutorial_seen"


class RecordStore:
    """
    SQLite-backed stand-in for the hosted record store.
    Each collection is one table of JSON documents.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        # One connection is shared by the dashboard loader and request threads;
        # every statement runs under this lock
        self._lock = threading.Lock()
        self._init_schema()

    def _init_schema(self) -> None:
        """Create the collection tables if they don't exist."""
        for collection in COLLECTIONS:
            self._conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {collection} (
                    id TEXT PRIMARY KEY,
                    record_json TEXT NOT NULL
                )
            """)
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS local_flags (
                key TEXT PRIMARY KEY,
                value INTEGER NOT NULL
            )
        """)
        self._conn.commit()

    def _model_for(self, collection: str) -> Type[BaseModel]:
        model = COLLECTIONS.get(collection)
        if model is None:
            raise ValueError(f"Unknown collection: {collection}")
        return model

    def insert(self, collection: str, record: BaseModel) -> BaseModel:
        """Insert one record. Returns it unchanged."""
        self._model_for(collection)
        try:
            with self._lock:
                self._conn.execute(
                    f"INSERT INTO {collection} (id, record_json) VALUES (?, ?)",
                    (record.id, record.model_dump_json()),
                )
                self._conn.commit()
        except sqlite3.Error as e:
            logger.error("Insert into %s failed: %s", collection, e)
            raise StoreWriteFailure(str(e), collection=collection) from e
        return record

    def select_all(
        self,
        collection: str,
        order_by: str = "created_at",
        descending: bool = True,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[BaseModel]:
        """All records of a collection, ordered by a field."""
        model = self._model_for(collection)
        if order_by not in ORDERABLE_FIELDS[collection]:
            raise ValueError(f"Cannot order {collection} by {order_by}")

        direction = "DESC" if descending else "ASC"
        sql = (
            f"SELECT record_json FROM {collection} "
            f"ORDER BY json_extract(record_json, '$.{order_by}') {direction}, rowid {direction}"
        )
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params = (limit, offset)
        elif offset:
            sql += " LIMIT -1 OFFSET ?"
            params = (offset,)

        try:
            with self._lock:
                rows = self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            logger.error("Fetch from %s failed: %s", collection, e)
            raise FetchFailure(str(e), collection=collection) from e
        return [self._decode(collection, model, r["record_json"]) for r in rows]

    def get_by_id(self, collection: str, record_id: str) -> Optional[BaseModel]:
        model = self._model_for(collection)
        try:
            with self._lock:
                row = self._conn.execute(
                    f"SELECT record_json FROM {collection} WHERE id = ?", (record_id,)
                ).fetchone()
        except sqlite3.Error as e:
            raise FetchFailure(str(e), collection=collection) from e
        return self._decode(collection, model, row["record_json"]) if row else None

    def _decode(self, collection: str, model: Type[BaseModel], raw: str) -> BaseModel:
        """A stored document that no longer fits its model is a fetch failure."""
        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            logger.error("Corrupt record in %s: %s", collection, e)
            raise FetchFailure(str(e), collection=collection) from e

    def count(self, collection: str) -> int:
        self._model_for(collection)
        with self._lock:
            row = self._conn.execute(f"SELECT COUNT(*) as cnt FROM {collection}").fetchone()
        return row["cnt"]

    # --- Convenience reads matching the screens that use them ---

    def metrics(self) -> List[PollutionMetric]:
        return self.select_all(METRICS)

    def reports(self, limit: Optional[int] = None) -> List[PollutionReport]:
        return self.select_all(REPORTS, limit=limit)

    def predictions(self) -> List[AIPrediction]:
        return self.select_all(PREDICTIONS)

    def organizations(self) -> List[Organization]:
        return self.select_all(ORGANIZATIONS, order_by="name", descending=False)

    # --- Local flags ---

    def get_flag(self, key: str) -> bool:
        with self._lock:
            row = self._conn.execute(
                "SELECT value FROM local_flags WHERE key = ?", (key,)
            ).fetchone()
        return bool(row["value"]) if row else False

    def set_flag(self, key: str, value: bool = True) -> None:
        with self._lock:
            self._conn.execute(
                "INSERT INTO local_flags (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, int(value)),
            )
            self._conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

