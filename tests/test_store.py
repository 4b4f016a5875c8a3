"""Tests for the Record Store adapter."""

import json
import threading
from datetime import datetime, timedelta

import pytest

from aqua_core.errors import FetchFailure, StoreWriteFailure
from aqua_core.models.organization import Organization
from aqua_core.models.pollution import PollutionMetric, PollutionReport
from aqua_core.models.prediction import AIPrediction
from aqua_core.store.records import (
    METRICS,
    ORGANIZATIONS,
    PREDICTIONS,
    REPORTS,
    TUTORIAL_SEEN_FLAG,
    RecordStore,
)

BASE_TIME = datetime(2024, 3, 1, 10, 0)


def _make_report(report_id: str, minutes: int, density: int = 40) -> PollutionReport:
    return PollutionReport(
        id=report_id,
        location_lat=19.0,
        location_lng=72.8,
        category="Plastic",
        plastic_density_index=density,
        water_clarity_level="Moderate",
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def _make_metric(metric_id: str, minutes: int, name: str = "Mahim Bay") -> PollutionMetric:
    ts = BASE_TIME + timedelta(minutes=minutes)
    return PollutionMetric(
        id=metric_id,
        location_lat=19.04,
        location_lng=72.83,
        location_name=name,
        plastic_density_index=65,
        water_clarity_level="Poor",
        microplastic_count=900,
        pollution_trend="Stable",
        last_updated=ts,
        created_at=ts,
    )


def _make_org(org_id: str, name: str) -> Organization:
    return Organization(
        id=org_id,
        name=name,
        type="NGO",
        location_lat=19.0,
        location_lng=72.8,
        address="Mumbai",
        created_at=BASE_TIME,
    )


@pytest.fixture
def store():
    s = RecordStore(db_path=":memory:")
    yield s
    s.close()


class TestInsertAndSelect:
    def test_round_trip(self, store):
        report = _make_report("r1", 0)
        store.insert(REPORTS, report)
        assert store.get_by_id(REPORTS, "r1") == report
        assert store.count(REPORTS) == 1

    def test_newest_first_by_default(self, store):
        for i in range(3):
            store.insert(REPORTS, _make_report(f"r{i}", i))
        assert [r.id for r in store.select_all(REPORTS)] == ["r2", "r1", "r0"]

    def test_ascending(self, store):
        for i in range(3):
            store.insert(REPORTS, _make_report(f"r{i}", i))
        ids = [r.id for r in store.select_all(REPORTS, descending=False)]
        assert ids == ["r0", "r1", "r2"]

    def test_order_by_numeric_field(self, store):
        store.insert(REPORTS, _make_report("low", 0, density=10))
        store.insert(REPORTS, _make_report("high", 1, density=90))
        store.insert(REPORTS, _make_report("mid", 2, density=55))
        ids = [r.id for r in store.select_all(REPORTS, order_by="plastic_density_index")]
        assert ids == ["high", "mid", "low"]

    def test_pagination(self, store):
        for i in range(5):
            store.insert(REPORTS, _make_report(f"r{i}", i))
        page = store.select_all(REPORTS, limit=2, offset=2)
        assert [r.id for r in page] == ["r2", "r1"]
        assert [r.id for r in store.select_all(REPORTS, offset=3)] == ["r1", "r0"]

    def test_recent_reports_limit(self, store):
        for i in range(12):
            store.insert(REPORTS, _make_report(f"r{i}", i))
        assert len(store.reports(limit=10)) == 10
        assert store.reports(limit=10)[0].id == "r11"

    def test_organizations_by_name(self, store):
        store.insert(ORGANIZATIONS, _make_org("o1", "Zero Waste Mumbai"))
        store.insert(ORGANIZATIONS, _make_org("o2", "Afroz Beach Cleanup"))
        assert [o.name for o in store.organizations()] == ["Afroz Beach Cleanup", "Zero Waste Mumbai"]

    def test_each_collection_returns_its_model(self, store):
        store.insert(METRICS, _make_metric("m1", 0))
        store.insert(PREDICTIONS, AIPrediction(
            id="p1",
            location_lat=19.0,
            location_lng=72.8,
            risk_level="Moderate",
            prediction_text="Festival waste expected",
            confidence_score=0.7,
            valid_until=BASE_TIME + timedelta(days=1),
            created_at=BASE_TIME,
        ))
        assert isinstance(store.metrics()[0], PollutionMetric)
        assert isinstance(store.predictions()[0], AIPrediction)

    def test_missing_record(self, store):
        assert store.get_by_id(METRICS, "nope") is None


class TestErrors:
    def test_unknown_collection(self, store):
        with pytest.raises(ValueError):
            store.select_all("sightings")

    def test_unknown_order_field(self, store):
        with pytest.raises(ValueError):
            store.select_all(REPORTS, order_by="reported_by; DROP TABLE pollution_reports")

    def test_duplicate_id_is_write_failure(self, store):
        store.insert(REPORTS, _make_report("r1", 0))
        with pytest.raises(StoreWriteFailure) as exc:
            store.insert(REPORTS, _make_report("r1", 1))
        assert exc.value.collection == REPORTS

    def test_closed_store_is_fetch_failure(self):
        store = RecordStore()
        store.close()
        with pytest.raises(FetchFailure):
            store.select_all(METRICS)

    def test_corrupt_record_is_fetch_failure(self, store):
        doc = json.loads(_make_metric("m1", 0).model_dump_json())
        doc["plastic_density_index"] = 150
        store._conn.execute(
            "INSERT INTO pollution_metrics (id, record_json) VALUES (?, ?)",
            ("m1", json.dumps(doc)),
        )
        store._conn.commit()
        with pytest.raises(FetchFailure) as exc:
            store.select_all(METRICS)
        assert exc.value.collection == METRICS
        with pytest.raises(FetchFailure):
            store.get_by_id(METRICS, "m1")


class TestLocalFlags:
    def test_tutorial_flag(self, store):
        assert store.get_flag(TUTORIAL_SEEN_FLAG) is False
        store.set_flag(TUTORIAL_SEEN_FLAG)
        assert store.get_flag(TUTORIAL_SEEN_FLAG) is True
        store.set_flag(TUTORIAL_SEEN_FLAG, False)
        assert store.get_flag(TUTORIAL_SEEN_FLAG) is False

    def test_flag_persists_in_file(self, tmp_path):
        path = str(tmp_path / "aqua.db")
        first = RecordStore(db_path=path)
        first.set_flag(TUTORIAL_SEEN_FLAG)
        first.close()
        second = RecordStore(db_path=path)
        assert second.get_flag(TUTORIAL_SEEN_FLAG) is True
        second.close()

    def test_flags_and_inserts_from_many_threads(self, store):
        def work(i):
            store.set_flag(f"flag_{i}")
            store.insert(REPORTS, _make_report(f"r{i}", i))
            store.get_flag(f"flag_{i}")
            store.count(REPORTS)

        threads = [threading.Thread(target=work, args=(i,)) for i in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(store.get_flag(f"flag_{i}") for i in range(16))
        assert store.count(REPORTS) == 16
