from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from mydpo.domain.compliance.context import ComplianceContext
from mydpo.domain.compliance.metrics import classify, extract_metrics
from mydpo.domain.compliance.tables import DEFAULT_DPO_NAME
from mydpo.schemas.compliance import ComplianceSummary
from mydpo.schemas.profile import (
    DocumentRecord,
    IncidentRecord,
    Profile,
    coerce_records,
)
from mydpo.services.compliance_rules import RULES
from mydpo.services.compliance_scoring import compute_score

logger = logging.getLogger(__name__)

__all__ = [
    "ComplianceEngine",
    "derive_compliance_actions",
    "extract_metrics",
    "classify",
]


# ============================================================
# Node Interface
# ============================================================

class Node:
    name: str

    @staticmethod
    def run(ctx: ComplianceContext) -> ComplianceContext:
        raise NotImplementedError


# ============================================================
# Node 1: Extract Metrics
# ============================================================

class ExtractMetricsNode(Node):
    name = "extract_metrics"

    @staticmethod
    def run(ctx: ComplianceContext) -> ComplianceContext:
        documents = ctx["documents"]

        ctx["metrics"] = extract_metrics(ctx["profile"])
        ctx["_doc_types"] = frozenset(d.type for d in documents)
        ctx["_active_doc_types"] = frozenset(d.type for d in documents if d.is_active)
        return ctx


# ============================================================
# Node 2: Classify (security level / reporting / CISO)
# ============================================================

class ClassifyNode(Node):
    name = "classify"

    @staticmethod
    def run(ctx: ComplianceContext) -> ComplianceContext:
        ctx["classification"] = classify(ctx["metrics"])
        return ctx


# ============================================================
# Node 3: Derive Actions (rule table)
# ============================================================

class DeriveActionsNode(Node):
    name = "derive_actions"

    @staticmethod
    def run(ctx: ComplianceContext) -> ComplianceContext:
        actions = []
        for rule in RULES:
            action = rule(ctx)
            if action is not None:
                actions.append(action)

        ctx["actions"] = actions
        return ctx


# ============================================================
# Node 4: Score
# ============================================================

class ScoreNode(Node):
    name = "score"

    @staticmethod
    def run(ctx: ComplianceContext) -> ComplianceContext:
        ctx["score"] = compute_score(ctx["actions"], ctx["_doc_types"])
        return ctx


# ============================================================
# Compliance Engine
# ============================================================

class ComplianceEngine:
    """
    Pure, synchronous derivation of compliance actions.
    No I/O and no shared state; safe to call concurrently.
    """

    NODES = [
        ExtractMetricsNode,
        ClassifyNode,
        DeriveActionsNode,
        ScoreNode,
    ]

    @classmethod
    def evaluate(
        cls,
        *,
        profile: Any,
        documents: Optional[Iterable[Any]] = None,
        incidents: Optional[Iterable[Any]] = None,
        dpo_name: str = DEFAULT_DPO_NAME,
    ) -> ComplianceSummary:
        ctx: ComplianceContext = {
            "profile": Profile.from_raw(profile),
            "documents": coerce_records(_as_list(documents), DocumentRecord),
            "incidents": coerce_records(_as_list(incidents), IncidentRecord),
            "dpo_name": dpo_name,
            "metrics": None,
            "classification": None,
            "actions": [],
            "score": 0,
            "_doc_types": frozenset(),
            "_active_doc_types": frozenset(),
        }

        for node in cls.NODES:
            ctx = node.run(ctx)

        metrics = ctx["metrics"]
        classification = ctx["classification"]

        logger.debug(
            "Compliance derived",
            extra={"props": {
                "db_count": metrics.db_count,
                "security_level": classification.security_level,
                "actions": len(ctx["actions"]),
                "score": ctx["score"],
            }},
        )

        return ComplianceSummary(
            actions=ctx["actions"],
            score=ctx["score"],
            security_level=classification.security_level,
            security_level_he=classification.security_level_he,
            total_records=metrics.total_records,
            db_count=metrics.db_count,
            needs_reporting=classification.needs_reporting,
            reporting_reasons=list(classification.reporting_reasons),
            needs_ciso=classification.needs_ciso,
            ciso_reason=classification.ciso_reason,
        )


def derive_compliance_actions(
    profile: Any,
    documents: Optional[Iterable[Any]] = None,
    incidents: Optional[Iterable[Any]] = None,
    *,
    dpo_name: str = DEFAULT_DPO_NAME,
) -> ComplianceSummary:
    return ComplianceEngine.evaluate(
        profile=profile,
        documents=documents,
        incidents=incidents,
        dpo_name=dpo_name,
    )


def _as_list(rows: Optional[Iterable[Any]]) -> list:
    if rows is None or isinstance(rows, (str, bytes, dict)):
        return []
    try:
        return list(rows)
    except TypeError:
        return []
