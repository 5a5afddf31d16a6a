from datetime import datetime, timezone
from typing import List, Optional

from mydpo.db.supabase_client import get_supabase
from mydpo.repositories.audit_base import AuditRepository


class SupabaseAuditRepository(AuditRepository):
    """
    Supabase-backed audit trail (audit_logs table, append-only)
    """

    def __init__(self, client=None):
        self.client = client or get_supabase()

    # -------------------------
    # Write
    # -------------------------
    def append_event(
        self,
        org_id: Optional[str],
        event_type: str,
        actor: str,
        payload: dict,
    ) -> None:
        self.client.table("audit_logs").insert(
            {
                "org_id": org_id,
                "event_type": event_type,
                "details": {**payload, "actor": actor},
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        ).execute()

    # -------------------------
    # Read – timeline by org
    # -------------------------
    def list_events(self, org_id: str) -> List[dict]:
        res = (
            self.client
            .table("audit_logs")
            .select("*")
            .eq("org_id", org_id)
            .order("created_at", desc=False)
            .execute()
        )
        return res.data or []
