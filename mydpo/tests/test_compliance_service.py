import pytest

from mydpo.services.compliance_service import ComplianceService, OrganizationNotFound


@pytest.fixture
def service(org_repo, audit_repo):
    return ComplianceService(org_repo, audit_repo, dpo_name="Test DPO")


def test_evaluate_reads_repository_rows(service):
    summary = service.evaluate("org-1")

    assert summary.total_records == 150000
    ids = [a.id for a in summary.actions]
    assert "open-incidents" in ids
    assert next(a for a in summary.actions if a.id == "dpo-letter-sign").status == "completed"
    assert next(a for a in summary.actions if a.id == "ropa").status == "pending_dpo"


def test_existing_org_without_answers_is_evaluated(service):
    summary = service.evaluate("org-empty")
    assert summary.db_count == 0
    assert summary.security_level == "basic"


def test_unknown_org_raises(service):
    with pytest.raises(OrganizationNotFound):
        service.evaluate("nope")


def test_refresh_persists_snapshot_and_audits(service, org_repo, audit_repo):
    summary = service.refresh("org-1", actor="dpo@example.com")

    snapshot = org_repo.db["snapshots"]["org-1"]
    assert snapshot["complianceScore"] == summary.score
    assert snapshot["risk_level"] == "high"
    assert [a["id"] for a in snapshot["complianceActions"]] == [a.id for a in summary.actions]
    assert "legalBasis" in snapshot["complianceActions"][0]

    events = audit_repo.list_events("org-1")
    assert len(events) == 1
    assert events[0]["event_type"] == "COMPLIANCE_RECALCULATED"
    assert events[0]["actor"] == "dpo@example.com"
    assert events[0]["payload"]["score"] == summary.score


def test_refresh_unknown_org_writes_nothing(service, org_repo, audit_repo):
    with pytest.raises(OrganizationNotFound):
        service.refresh("nope")

    assert org_repo.db["snapshots"] == {}
    assert audit_repo.events == []


def test_progress_digest(service):
    progress = service.progress("org-1")

    # dpo-appointed + signed letter
    assert progress.done_count == 2
    assert progress.pending_count == 7
    assert progress.by_category["reporting"] == 1
    assert sum(progress.by_category.values()) == 9
    # first critical pending action in rule order
    assert progress.top_action == "רישום מאגרים ברשות להגנת הפרטיות"
