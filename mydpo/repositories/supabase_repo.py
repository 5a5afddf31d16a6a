from datetime import datetime, timezone
from typing import List, Optional

from mydpo.db.supabase_client import get_supabase
from mydpo.repositories.base import OrganizationRepository
from mydpo.schemas.compliance import ComplianceSummary


class SupabaseOrganizationRepository(OrganizationRepository):
    """
    Supabase (Postgres) implementation of OrganizationRepository

    Tables:
    - organization_profiles (org_id, profile_data jsonb)
    - documents (org_id, type, status)
    - security_incidents (org_id, status)
    - org_compliance_scores (org_id, overall_score, risk_level, updated_at)
    """

    def __init__(self, client=None):
        self.client = client or get_supabase()

    # -------------------------
    # Profile
    # -------------------------
    def _get_profile_row(self, org_id: str) -> Optional[dict]:
        res = (
            self.client
            .table("organization_profiles")
            .select("profile_data")
            .eq("org_id", org_id)
            .maybe_single()
            .execute()
        )

        # maybe_single() returns None (not an empty response) on no rows
        if not res or not res.data:
            return None

        return res.data

    def get_profile(self, org_id: str) -> Optional[dict]:
        row = self._get_profile_row(org_id)
        if row is None:
            return None

        profile_data = row.get("profile_data") or {}
        return profile_data.get("v3Answers") or {}

    # -------------------------
    # Documents / incidents
    # -------------------------
    def list_documents(self, org_id: str) -> List[dict]:
        res = (
            self.client
            .table("documents")
            .select("type, status")
            .eq("org_id", org_id)
            .execute()
        )
        return res.data or []

    def list_incidents(self, org_id: str) -> List[dict]:
        res = (
            self.client
            .table("security_incidents")
            .select("status")
            .eq("org_id", org_id)
            .execute()
        )
        return res.data or []

    # -------------------------
    # Snapshot
    # -------------------------
    def save_compliance_snapshot(self, org_id: str, summary: ComplianceSummary) -> None:
        now = datetime.now(timezone.utc).isoformat()
        dumped = summary.model_dump(by_alias=True, exclude_none=True, mode="json")

        # keep the rest of profile_data intact
        row = self._get_profile_row(org_id) or {}
        profile_data = row.get("profile_data") or {}
        profile_data["complianceScore"] = summary.score
        profile_data["complianceActions"] = dumped["actions"]

        (
            self.client
            .table("organization_profiles")
            .update({"profile_data": profile_data})
            .eq("org_id", org_id)
            .execute()
        )

        (
            self.client
            .table("org_compliance_scores")
            .upsert(
                {
                    "org_id": org_id,
                    "overall_score": summary.score,
                    "risk_level": summary.security_level,
                    "updated_at": now,
                },
                on_conflict="org_id",
            )
            .execute()
        )
