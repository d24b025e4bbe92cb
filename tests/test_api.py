# /tests/test_api.py

import pytest
from fastapi.testclient import TestClient

from app.db.database import build_engine
from app.main import create_app
from app.services.database_helpers.data_client import DatabaseError
from app.services.database_service import DatabaseService
from app.services.metrics_service import MetricsStore


@pytest.fixture
def metrics_store():
    return MetricsStore()


@pytest.fixture
def client(fake_db, metrics_store):
    """An app wired to the fake database and an isolated counter store."""
    app = create_app(db_service=fake_db, metrics_store=metrics_store)
    return TestClient(app)


@pytest.fixture
def empty_database_client(tmp_path):
    """An app on a real SQLite database that has none of the expected tables."""
    engine = build_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    app = create_app(db_service=DatabaseService(engine=engine), metrics_store=MetricsStore())
    yield TestClient(app)
    engine.dispose()


def _metric_value(body: str, line_prefix: str) -> str:
    return next(line for line in body.splitlines() if line.startswith(line_prefix)).split()[-1]


def test_root_reports_running(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.json()["status"]


def test_metrics_endpoint_does_not_count_itself(client):
    for _ in range(3):
        response = client.get("/api/metrics")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")

    assert _metric_value(response.text, "http_requests_total ") == "0.0"
    assert "http_requests_by_endpoint_total{" not in response.text


def test_requests_are_counted_by_path(client):
    client.get("/api/health?detailed=false")
    client.get("/api/health")
    client.get("/api/teachers")

    body = client.get("/api/metrics").text

    assert _metric_value(body, "http_requests_total ") == "3.0"
    assert 'http_requests_by_endpoint_total{path="/api/health"} 2.0' in body
    assert 'http_requests_by_endpoint_total{path="/api/teachers"} 1.0' in body


def test_health_basic_shape(client):
    body = client.get("/api/health").json()

    assert body["status"] == "ok"
    for key in ("timestamp", "version", "uptime", "environment", "database"):
        assert key in body
    assert body["database"]["status"] == "connected"
    assert "system" not in body and "process" not in body
    assert "pingResult" not in body["database"]


def test_health_detailed_adds_system_and_process(client):
    body = client.get("/api/health", params={"detailed": "true"}).json()

    assert "system" in body and "process" in body
    assert body["database"]["databaseUrl"]


def test_health_ping_error_is_inline(client, fake_db):
    fake_db.ping_error = ConnectionError("connection refused")

    response = client.get("/api/health", params={"checkDatabase": "true"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"]["pingResult"] == "error"
    assert body["database"]["pingError"] == "connection refused"


def test_health_internal_failure_returns_500(client, fake_db, mocker):
    mocker.patch.object(fake_db, "get_status", side_effect=RuntimeError("status unavailable"))

    response = client.get("/api/health")

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "error"
    assert body["error"] == "status unavailable"
    assert body["timestamp"]


def test_reconnect(client, fake_db):
    fake_db.offline = True

    body = client.post("/api/database/reconnect").json()

    assert body == {"connected": True, "status": "connected"}
    assert fake_db.offline is False


def test_check_teachers_samples_three_rows(client, fake_db):
    fake_db.rows["Teachers"].append({"Teacher_ID": 4, "Teacher_name": "Wang Mei", "Teacher_Type": "Local"})

    body = client.get("/api/check-teachers").json()

    assert body["success"] is True
    assert len(body["teachers"]) == 3
    assert "Teacher_name" in body["columnNames"]


def test_check_teachers_query_failure(client, fake_db):
    fake_db.rows_error = DatabaseError("relation \"Teachers\" does not exist")

    response = client.get("/api/check-teachers")

    assert response.status_code == 500
    assert response.json()["details"] == 'relation "Teachers" does not exist'
    assert "error" in response.json()


def test_list_teachers_by_type(client):
    response = client.get("/api/teachers", params={"type": "native"})

    assert response.status_code == 200
    assert [t["Teacher_name"] for t in response.json()] == ["John Smith", "Sarah Johnson"]


def test_get_teacher_not_found(client):
    assert client.get("/api/teachers/2").json()["Teacher_name"] == "Li Wei"
    assert client.get("/api/teachers/99").status_code == 404


def test_dashboard_workload(client):
    body = client.get("/api/dashboard/workload").json()

    assert body["teacherWorkload"] == {"John Smith": 2, "Li Wei": 3, "Sarah Johnson": 1}
    assert body["classTypeData"] == [3, 1]
    assert body["totalScheduledClasses"] == 4


def test_dashboard_workload_failure(client, fake_db, mocker):
    mocker.patch.object(fake_db, "get_teachers", side_effect=DatabaseError("timeout"))

    response = client.get("/api/dashboard/workload")

    assert response.status_code == 500
    assert "timeout" in response.json()["detail"]


def test_weekly_schedule(client):
    response = client.get("/api/schedule", params={"week_start": "2025-03-05", "teacher": "Li Wei"})

    assert response.status_code == 200
    body = response.json()
    assert body["weekStart"] == "2025-03-03"
    assert body["totalEntries"] == 2


def test_weekly_schedule_rejects_non_calendar_table(client):
    response = client.get("/api/schedule", params={"table": "Teachers"})

    assert response.status_code == 400


def test_explorer_table_data(client):
    body = client.get("/api/explorer/tables/Teachers", params={"limit": 2}).json()

    assert body["tableName"] == "Teachers"
    assert len(body["rows"]) == 2
    assert body["count"] == 3
    assert "Teacher_Type" in body["columns"]


def test_missing_teachers_table_returns_json_error(empty_database_client):
    response = empty_database_client.get("/api/teachers")

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert "Teachers" in response.json()["detail"]

    response = empty_database_client.get("/api/teachers/1")
    assert response.status_code == 500
    assert "Teachers" in response.json()["detail"]


@pytest.mark.parametrize("method, url", [
    ("get_calendar_entries", "/api/schedule?table=Clovers1A-Course-Calendar"),
    ("get_calendar_tables", "/api/schedule/tables"),
    ("count_rows", "/api/explorer/tables/Teachers"),
    ("list_tables", "/api/explorer/tables"),
])
def test_unexpected_errors_return_json_detail(client, fake_db, mocker, method, url):
    mocker.patch.object(fake_db, method, side_effect=ValueError("bad row"))

    response = client.get(url)

    assert response.status_code == 500
    assert "bad row" in response.json()["detail"]
