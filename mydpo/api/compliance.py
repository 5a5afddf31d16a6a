# mydpo/api/compliance.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Path

from mydpo.core.config import settings
from mydpo.dependencies import get_compliance_service
from mydpo.schemas.compliance import (
    ComplianceProgress,
    ComplianceSummary,
    EvaluateComplianceRequest,
)
from mydpo.services.compliance_engine import derive_compliance_actions
from mydpo.services.compliance_service import ComplianceService, OrganizationNotFound

logger = logging.getLogger(__name__)
router = APIRouter(tags=["compliance"])


# =====================================================
# Stateless evaluation
# =====================================================

@router.post(
    "/evaluate",
    response_model=ComplianceSummary,
    response_model_exclude_none=True,
)
def evaluate(req: EvaluateComplianceRequest):
    """
    Derive actions for a caller-supplied snapshot. Nothing is read or stored.
    """
    return derive_compliance_actions(
        req.profile,
        req.documents,
        req.incidents,
        dpo_name=settings.dpo_name,
    )


# =====================================================
# Per organization
# =====================================================

@router.get(
    "/{org_id}",
    response_model=ComplianceSummary,
    response_model_exclude_none=True,
)
def get_compliance(
    org_id: str = Path(...),
    service: ComplianceService = Depends(get_compliance_service),
):
    try:
        return service.evaluate(org_id)
    except OrganizationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Compliance evaluation failed", extra={"props": {"org_id": org_id}})
        raise


@router.get(
    "/{org_id}/progress",
    response_model=ComplianceProgress,
)
def get_progress(
    org_id: str = Path(...),
    service: ComplianceService = Depends(get_compliance_service),
):
    try:
        return service.progress(org_id)
    except OrganizationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Compliance progress failed", extra={"props": {"org_id": org_id}})
        raise


@router.post(
    "/{org_id}/refresh",
    response_model=ComplianceSummary,
    response_model_exclude_none=True,
)
def refresh(
    org_id: str = Path(...),
    service: ComplianceService = Depends(get_compliance_service),
):
    try:
        return service.refresh(org_id)
    except OrganizationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Compliance refresh failed", extra={"props": {"org_id": org_id}})
        raise
