import logging

from mydpo.core.config import settings
from mydpo.repositories.audit_base import AuditRepository
from mydpo.repositories.base import OrganizationRepository
from mydpo.schemas.compliance import ComplianceProgress, ComplianceSummary
from mydpo.services.compliance_engine import ComplianceEngine
from mydpo.services.compliance_progress import summarize_progress

logger = logging.getLogger(__name__)


class ComplianceError(Exception):
    pass


class OrganizationNotFound(ComplianceError):
    def __init__(self, org_id: str):
        super().__init__(f"Organization {org_id} has no profile")
        self.org_id = org_id


class ComplianceService:
    """
    Fetches an organization's inputs, runs the engine, and (on refresh)
    caches the result and records it in the audit trail.
    The engine itself stays pure; all I/O happens here.
    """

    def __init__(
        self,
        org_repo: OrganizationRepository,
        audit_repo: AuditRepository,
        dpo_name: str = settings.dpo_name,
    ):
        self.org_repo = org_repo
        self.audit_repo = audit_repo
        self.dpo_name = dpo_name

    def evaluate(self, org_id: str) -> ComplianceSummary:
        profile = self.org_repo.get_profile(org_id)
        if profile is None:
            raise OrganizationNotFound(org_id)

        documents = self.org_repo.list_documents(org_id)
        incidents = self.org_repo.list_incidents(org_id)

        return ComplianceEngine.evaluate(
            profile=profile,
            documents=documents,
            incidents=incidents,
            dpo_name=self.dpo_name,
        )

    def progress(self, org_id: str) -> ComplianceProgress:
        return summarize_progress(self.evaluate(org_id))

    def refresh(self, org_id: str, actor: str = "SYSTEM") -> ComplianceSummary:
        summary = self.evaluate(org_id)
        progress = summarize_progress(summary)

        self.org_repo.save_compliance_snapshot(org_id, summary)
        self.audit_repo.append_event(
            org_id=org_id,
            event_type="COMPLIANCE_RECALCULATED",
            actor=actor,
            payload={
                "score": summary.score,
                "security_level": summary.security_level,
                "needs_reporting": summary.needs_reporting,
                "pending_count": progress.pending_count,
            },
        )

        logger.info(
            "Compliance snapshot saved",
            extra={"props": {
                "org_id": org_id,
                "score": summary.score,
                "security_level": summary.security_level,
            }},
        )
        return summary
