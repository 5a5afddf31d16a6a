# mydpo/services/compliance_scoring.py
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from mydpo.domain.compliance.tables import weight_for
from mydpo.schemas.compliance import ComplianceAction

FULL_CREDIT_STATUSES = ("auto_resolved", "completed")


def score_weights(
    actions: Iterable[ComplianceAction],
    doc_types: Iterable[Optional[str]],
) -> Tuple[float, int]:
    """
    Returns (earned_weight, total_weight).

    A pending_dpo action whose document type already exists in the
    document list earns half its weight (drafted, awaiting DPO sign-off).
    """
    known_types = set(doc_types)
    earned = 0.0
    total = 0

    for action in actions:
        if action.status == "not_applicable":
            continue

        w = weight_for(action.id)
        total += w

        if action.status in FULL_CREDIT_STATUSES:
            earned += w
        elif action.status == "pending_dpo" and (action.document_type or "") in known_types:
            earned += w * 0.5

    return earned, total


def _round_half_up(value: float) -> int:
    # JS Math.round semantics; builtin round() is banker's rounding
    return int(value + 0.5)


def compute_score(
    actions: Iterable[ComplianceAction],
    doc_types: Iterable[Optional[str]],
) -> int:
    earned, total = score_weights(actions, doc_types)
    if total <= 0:
        return 0
    return _round_half_up(earned / total * 100)
