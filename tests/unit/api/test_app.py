"""HTTP-level tests through the FastAPI app, backed by in-memory stubs."""

from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from clinitrack.api.dependencies.assessment import (
    get_archive_coordinator_dependency,
    get_audit_writer_dependency,
    get_record_service_dependency,
    get_summary_service_dependency,
)
from clinitrack.api.main import app
from clinitrack.application.services.archive_restore_coordinator import (
    ArchiveRestoreCoordinator,
)
from clinitrack.application.services.assessment_record_service import (
    AssessmentRecordService,
)
from clinitrack.application.services.assessment_summary_service import (
    AssessmentSummaryService,
)
from clinitrack.application.services.audit_log_writer import AuditLogWriter
from clinitrack.infrastructure.stubs import AuditLogStoreStub, RecordStoreStub

ACTOR_HEADERS = {"X-Actor-Id": "uid-admin", "X-Actor-Name": "admin@example.org"}


@pytest.fixture
def client(
    active_store: RecordStoreStub,
    archive_store: RecordStoreStub,
    audit_store: AuditLogStoreStub,
) -> Iterator[TestClient]:
    writer = AuditLogWriter(store=audit_store)
    app.dependency_overrides[get_record_service_dependency] = lambda: (
        AssessmentRecordService(active_store=active_store, audit_writer=writer)
    )
    app.dependency_overrides[get_archive_coordinator_dependency] = lambda: (
        ArchiveRestoreCoordinator(
            active_store=active_store, archive_store=archive_store, audit_writer=writer
        )
    )
    app.dependency_overrides[get_summary_service_dependency] = lambda: (
        AssessmentSummaryService(active_store=active_store)
    )
    app.dependency_overrides[get_audit_writer_dependency] = lambda: writer
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client: TestClient, project_version: str) -> None:
        response = client.get("/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": project_version}

    def test_correlation_id_echoed(self, client: TestClient) -> None:
        response = client.get("/v1/health", headers={"X-Correlation-ID": "corr-42"})
        assert response.headers["X-Correlation-ID"] == "corr-42"

    def test_correlation_id_generated(self, client: TestClient) -> None:
        response = client.get("/v1/health")
        assert response.headers["X-Correlation-ID"]


class TestRecordLifecycle:
    def test_save_delete_restore(
        self,
        client: TestClient,
        complete_physiotherapy: dict[str, Any],
        audit_store: AuditLogStoreStub,
    ) -> None:
        created = client.post(
            "/v1/records/domains/Physiotherapy",
            json={"data": complete_physiotherapy},
            headers=ACTOR_HEADERS,
        )
        assert created.status_code == 201
        record = created.json()
        assert record["status"] == "in_progress"
        assert record["domain_statuses"]["Physiotherapy"] == "completed"
        record_id = record["record_id"]

        summary = client.get("/v1/records/summary").json()
        assert summary["total"] == 1
        assert summary["by_status"]["in_progress"] == 1

        deleted = client.delete(f"/v1/records/{record_id}", headers=ACTOR_HEADERS)
        assert deleted.status_code == 200
        assert deleted.json()["audit_logged"] is True
        assert client.get(f"/v1/records/{record_id}").status_code == 404

        restorable = client.get("/v1/governance/restorable").json()
        assert restorable["total_count"] == 1
        entry = restorable["entries"][0]
        assert entry["archive_id"] == record_id
        assert entry["actor_name"] == "admin@example.org"

        restored = client.post(
            "/v1/governance/restore",
            json={"entry_id": entry["entry_id"]},
            headers=ACTOR_HEADERS,
        )
        assert restored.status_code == 200
        assert client.get(f"/v1/records/{record_id}").json() == record

        critical = client.get("/v1/governance/critical").json()
        assert [item["action"] for item in critical["entries"]] == ["RESTORED", "DELETED"]

        log = client.get("/v1/governance/audit-log", params={"action": "created"}).json()
        assert log["total_count"] == 1

    def test_unknown_domain(self, client: TestClient) -> None:
        response = client.post("/v1/records/domains/Cardiology", json={"data": {}})
        assert response.status_code == 422
        assert response.json()["detail"]["title"] == "Unknown Domain"

    def test_restore_request_validation(self, client: TestClient) -> None:
        response = client.post("/v1/governance/restore", json={})
        assert response.status_code == 422

    def test_restore_missing_archive(self, client: TestClient) -> None:
        response = client.post("/v1/governance/restore", json={"archive_id": "gone"})
        assert response.status_code == 404
        assert response.json()["detail"]["retryable"] is False


class TestDashboardRoutes:
    def test_dashboard_views(
        self, client: TestClient, complete_physiotherapy: dict[str, Any]
    ) -> None:
        assert client.get("/v1/records/resume", headers=ACTOR_HEADERS).json() is None
        assert len(client.get("/v1/records/growth").json()["points"]) == 6

        record = client.post(
            "/v1/records/domains/Physiotherapy",
            json={"data": complete_physiotherapy},
            headers=ACTOR_HEADERS,
        ).json()

        attention = client.get("/v1/records/attention").json()
        [item] = attention["items"]
        assert item["record_id"] == record["record_id"]
        assert item["completion_percentage"] == 20

        resume = client.get("/v1/records/resume", headers=ACTOR_HEADERS).json()
        assert resume["record_id"] == record["record_id"]
        assert resume["active_domain"] == "Biomechanics"

        [point] = client.get("/v1/records/growth").json()["points"]
        assert point["assessments"] == point["cumulative"] == 1

    def test_attention_limit_validated(self, client: TestClient) -> None:
        assert client.get("/v1/records/attention", params={"limit": 0}).status_code == 422
