# mydpo/domain/compliance/context.py
from __future__ import annotations

from typing import FrozenSet, List, Optional, TypedDict

from mydpo.domain.compliance.metrics import Classification, ComplianceMetrics
from mydpo.schemas.compliance import ComplianceAction
from mydpo.schemas.profile import DocumentRecord, IncidentRecord, Profile


class ComplianceContext(TypedDict):
    """
    State passed through the engine nodes for one derivation.
    Inputs are read-only; each node fills in its own output keys.
    """
    profile: Profile
    documents: List[DocumentRecord]
    incidents: List[IncidentRecord]
    dpo_name: str

    metrics: Optional[ComplianceMetrics]
    classification: Optional[Classification]
    actions: List[ComplianceAction]
    score: int

    # internal only
    _doc_types: FrozenSet[Optional[str]]
    _active_doc_types: FrozenSet[Optional[str]]
