from fastapi.testclient import TestClient

from mydpo.bootstrap import create_app
from mydpo.core.config import settings
from mydpo.lifecycle import register_lifecycle
from mydpo.repositories.memory_repo import MemoryOrganizationRepository


def test_health(client):
    assert client.get("/api/health/live").json() == {"status": "alive"}
    assert client.get("/api/health/ready").json() == {"status": "ready"}


def test_evaluate_endpoint_is_stateless(client, org_repo):
    res = client.post("/api/compliance/evaluate", json={
        "profile": {
            "databases": ["medical"],
            "securityOwner": "it",
            "dbDetails": {"medical": {"size": "under100", "access": "100+"}},
        },
        "documents": [{"type": "ropa", "status": "active", "id": "doc-1"}],
        "incidents": [],
    })

    assert res.status_code == 200
    body = res.json()
    assert body["securityLevel"] == "high"
    assert body["securityLevelHe"] == "גבוהה"
    assert body["needsCiso"] is True
    assert body["cisoReason"]

    ropa = next(a for a in body["actions"] if a["id"] == "ropa")
    assert ropa["status"] == "completed"
    assert ropa["legalBasis"]

    ciso = next(a for a in body["actions"] if a["id"] == "ciso-check")
    assert ciso["status"] == "completed"
    assert "estimatedMinutes" not in ciso

    assert org_repo.db["snapshots"] == {}


def test_evaluate_endpoint_accepts_empty_body(client):
    res = client.post("/api/compliance/evaluate", json={})

    assert res.status_code == 200
    body = res.json()
    assert body["dbCount"] == 0
    assert "cisoReason" not in body


def test_evaluate_endpoint_rejects_non_list_documents(client):
    res = client.post("/api/compliance/evaluate", json={"documents": "ropa"})
    assert res.status_code == 422


def test_get_compliance(client):
    res = client.get("/api/compliance/org-1")

    assert res.status_code == 200
    body = res.json()
    assert body["totalRecords"] == 150000
    assert body["needsReporting"] is True


def test_unknown_org_is_404(client):
    assert client.get("/api/compliance/missing").status_code == 404
    assert client.get("/api/compliance/missing/progress").status_code == 404
    assert client.post("/api/compliance/missing/refresh").status_code == 404


def test_refresh_endpoint(client, org_repo, audit_repo):
    res = client.post("/api/compliance/org-1/refresh")

    assert res.status_code == 200
    assert org_repo.db["snapshots"]["org-1"]["complianceScore"] == res.json()["score"]
    assert audit_repo.events[0]["event_type"] == "COMPLIANCE_RECALCULATED"


def test_progress_endpoint(client):
    res = client.get("/api/compliance/org-1/progress")

    assert res.status_code == 200
    body = res.json()
    assert set(body) == {"score", "doneCount", "pendingCount", "byCategory", "topAction"}


def test_startup_falls_back_to_memory_repositories(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", None)
    app = create_app()
    register_lifecycle(app)

    with TestClient(app) as c:
        assert isinstance(app.state.org_repo, MemoryOrganizationRepository)
        assert c.get("/api/compliance/missing").status_code == 404


def test_startup_keeps_preset_repositories(org_repo, audit_repo):
    app = create_app()
    app.state.org_repo = org_repo
    app.state.audit_repo = audit_repo
    register_lifecycle(app)

    with TestClient(app) as c:
        assert c.get("/api/compliance/org-1/progress").status_code == 200

    assert app.state.org_repo is org_repo
