# mydpo/schemas/compliance.py
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


ActionStatus = Literal[
    "auto_resolved", "pending_dpo", "pending_user", "not_applicable", "completed"
]
ActionOwner = Literal["system", "dpo", "user"]
ActionPriority = Literal["critical", "high", "medium", "low"]
ActionCategory = Literal["done", "user_action", "dpo_pending", "reporting"]
SecurityLevel = Literal["basic", "medium", "high"]

ACTION_CATEGORIES: List[str] = ["done", "user_action", "dpo_pending", "reporting"]
PRIORITY_ORDER: List[str] = ["critical", "high", "medium", "low"]


class CamelModel(BaseModel):
    """JSON uses camelCase names (legalBasis, securityLevelHe, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ComplianceAction(CamelModel):
    id: str
    title: str
    description: str
    legal_basis: str

    status: ActionStatus
    owner: ActionOwner
    priority: ActionPriority  # UI sort only, not scored
    category: ActionCategory

    estimated_minutes: Optional[int] = None
    document_type: Optional[str] = None
    action_path: Optional[str] = None
    resolved_note: Optional[str] = None


class ComplianceSummary(CamelModel):
    actions: List[ComplianceAction] = []
    score: int = 0

    security_level: SecurityLevel
    security_level_he: str

    total_records: int = 0
    db_count: int = 0

    needs_reporting: bool = False
    reporting_reasons: List[str] = []

    needs_ciso: bool = False
    ciso_reason: Optional[str] = None


class ComplianceProgress(CamelModel):
    """
    Read-only digest of a summary for email digests and welcome screens.
    """
    score: int
    done_count: int
    pending_count: int
    by_category: Dict[str, int]
    top_action: Optional[str] = None


class EvaluateComplianceRequest(CamelModel):
    # raw v3Answers blob, coerced by the engine
    profile: Optional[Dict[str, Any]] = None
    documents: List[Dict[str, Any]] = []
    incidents: List[Dict[str, Any]] = []
