# mydpo/dependencies.py
import logging

from fastapi import FastAPI, HTTPException, Request

from mydpo.core.config import settings
from mydpo.repositories.memory_repo import (
    MemoryAuditRepository,
    MemoryOrganizationRepository,
)
from mydpo.services.compliance_service import ComplianceService

logger = logging.getLogger(__name__)


def init_repositories(app: FastAPI) -> None:
    """
    Initialize infrastructure dependencies.
    Must be idempotent.
    """
    if getattr(app.state, "org_repo", None) is not None:
        return

    if not settings.supabase_enabled:
        app.state.org_repo = MemoryOrganizationRepository()
        app.state.audit_repo = MemoryAuditRepository()
        logger.warning("Supabase not configured, using in-memory repositories")
        return

    from mydpo.repositories.supabase_audit_repo import SupabaseAuditRepository
    from mydpo.repositories.supabase_repo import SupabaseOrganizationRepository

    try:
        app.state.org_repo = SupabaseOrganizationRepository()
        app.state.audit_repo = SupabaseAuditRepository()
        logger.info("Repositories initialized")
    except Exception:
        logger.exception("Repository initialization failed")
        app.state.org_repo = None
        app.state.audit_repo = None


def get_compliance_service(request: Request) -> ComplianceService:
    state = request.app.state
    org_repo = getattr(state, "org_repo", None)
    audit_repo = getattr(state, "audit_repo", None)

    if org_repo is None or audit_repo is None:
        raise HTTPException(status_code=503, detail="Repositories not initialized")

    return ComplianceService(org_repo, audit_repo, dpo_name=settings.dpo_name)
