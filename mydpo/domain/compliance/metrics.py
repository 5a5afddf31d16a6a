# mydpo/domain/compliance/metrics.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from mydpo.domain.compliance import tables
from mydpo.schemas.profile import Profile


@dataclass(frozen=True)
class ComplianceMetrics:
    """
    Normalized scalars derived from one intake profile.
    Every downstream rule reads these instead of the raw profile.
    """
    total_records: int = 0
    max_access: int = 0
    db_count: int = 0
    predefined_db_count: int = 0
    processor_count: int = 0
    has_medical: bool = False
    has_cameras: bool = False
    has_cvs: bool = False
    has_web_leads: bool = False
    is_health_or_finance: bool = False

    @property
    def has_sensitive_data(self) -> bool:
        return self.has_medical or self.is_health_or_finance


@dataclass(frozen=True)
class Classification:
    security_level: str
    security_level_he: str
    needs_reporting: bool
    reporting_reasons: Tuple[str, ...] = field(default_factory=tuple)
    needs_ciso: bool = False
    ciso_reason: Optional[str] = None


def extract_metrics(profile: Profile) -> ComplianceMetrics:
    details = list(profile.db_details.values())

    total_records = sum(tables.records_for_size(d.size) for d in details)
    max_access = max((tables.users_for_access(d.access) for d in details), default=0)

    dbs = profile.databases
    return ComplianceMetrics(
        total_records=total_records,
        max_access=max_access,
        db_count=len(dbs) + len(profile.custom_databases),
        predefined_db_count=len(dbs),
        processor_count=len(profile.all_processors),
        has_medical=tables.MEDICAL_DB in dbs,
        has_cameras=tables.CAMERAS_DB in dbs,
        has_cvs=tables.CVS_DB in dbs,
        has_web_leads=tables.WEBSITE_LEADS_DB in dbs,
        is_health_or_finance=profile.industry in tables.SENSITIVE_INDUSTRIES,
    )


def classify(metrics: ComplianceMetrics) -> Classification:
    """
    Security tier, reporting obligation and CISO advice.
    Depends on the metrics bundle only.
    """
    is_high = (
        metrics.total_records >= tables.HIGH_VOLUME_RECORDS
        or metrics.has_medical
        or metrics.is_health_or_finance
        or metrics.max_access >= tables.HIGH_ACCESS_USERS
    )
    is_medium = (
        metrics.total_records >= tables.MEDIUM_VOLUME_RECORDS
        or metrics.predefined_db_count >= tables.MEDIUM_DB_COUNT
    )

    if is_high:
        level = "high"
    elif is_medium:
        level = "medium"
    else:
        level = "basic"

    # order matters: the UI joins these into one sentence
    reasons = []
    if is_high:
        reasons.append(tables.REASON_HIGH_SECURITY)
    if metrics.total_records >= tables.HIGH_VOLUME_RECORDS:
        reasons.append(tables.REASON_HIGH_VOLUME)
    if metrics.has_medical and metrics.total_records >= tables.MEDIUM_VOLUME_RECORDS:
        reasons.append(tables.REASON_MEDICAL_VOLUME)

    needs_ciso = metrics.has_sensitive_data and metrics.max_access >= tables.CISO_ACCESS_USERS

    return Classification(
        security_level=level,
        security_level_he=tables.SECURITY_LEVEL_LABELS_HE[level],
        needs_reporting=bool(reasons),
        reporting_reasons=tuple(reasons),
        needs_ciso=needs_ciso,
        ciso_reason=tables.CISO_REASON if needs_ciso else None,
    )
