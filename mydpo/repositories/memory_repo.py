from datetime import datetime, timezone
from typing import List, Optional

from mydpo.repositories.audit_base import AuditRepository
from mydpo.repositories.base import OrganizationRepository
from mydpo.schemas.compliance import ComplianceSummary


class MemoryOrganizationRepository(OrganizationRepository):
    """
    Dict-backed repository for tests and local runs without Supabase.

    db layout:
    {
        "profiles":  {org_id: {...v3Answers...}},
        "documents": {org_id: [{"type": ..., "status": ...}]},
        "incidents": {org_id: [{"status": ...}]},
        "snapshots": {org_id: {...}},
    }
    """

    def __init__(self, db: Optional[dict] = None):
        self.db = db if db is not None else {}
        for key in ("profiles", "documents", "incidents", "snapshots"):
            self.db.setdefault(key, {})

    def get_profile(self, org_id: str) -> Optional[dict]:
        return self.db["profiles"].get(org_id)

    def list_documents(self, org_id: str) -> List[dict]:
        return list(self.db["documents"].get(org_id, []))

    def list_incidents(self, org_id: str) -> List[dict]:
        return list(self.db["incidents"].get(org_id, []))

    def save_compliance_snapshot(self, org_id: str, summary: ComplianceSummary) -> None:
        self.db["snapshots"][org_id] = {
            "complianceScore": summary.score,
            "complianceActions": summary.model_dump(
                by_alias=True, exclude_none=True, mode="json"
            )["actions"],
            "risk_level": summary.security_level,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }


class MemoryAuditRepository(AuditRepository):

    def __init__(self):
        self.events: List[dict] = []

    def append_event(
        self,
        org_id: Optional[str],
        event_type: str,
        actor: str,
        payload: dict,
    ) -> None:
        self.events.append({
            "org_id": org_id,
            "event_type": event_type,
            "actor": actor,
            "payload": payload,
            "created_at": datetime.now(timezone.utc).isoformat(),
        })

    def list_events(self, org_id: str) -> List[dict]:
        return [e for e in self.events if e["org_id"] == org_id]
