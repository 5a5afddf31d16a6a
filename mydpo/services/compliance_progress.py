# mydpo/services/compliance_progress.py
from __future__ import annotations

from mydpo.schemas.compliance import (
    ACTION_CATEGORIES,
    PRIORITY_ORDER,
    ComplianceProgress,
    ComplianceSummary,
)

DONE_STATUSES = ("auto_resolved", "completed")


def summarize_progress(summary: ComplianceSummary) -> ComplianceProgress:
    """
    Digest used by the monthly email and the welcome screen.
    """
    applicable = [a for a in summary.actions if a.status != "not_applicable"]
    done = [a for a in applicable if a.status in DONE_STATUSES]
    pending = [a for a in applicable if a.status not in DONE_STATUSES]

    by_category = {c: 0 for c in ACTION_CATEGORIES}
    for a in summary.actions:
        by_category[a.category] = by_category.get(a.category, 0) + 1

    # sorted() is stable, so equal priorities keep rule order
    ranked = sorted(pending, key=lambda a: PRIORITY_ORDER.index(a.priority))
    top_action = ranked[0].title if ranked else None

    return ComplianceProgress(
        score=summary.score,
        done_count=len(done),
        pending_count=len(pending),
        by_category=by_category,
        top_action=top_action,
    )
