# mydpo/domain/compliance/tables.py
"""
Fixed lookup tables shared by the compliance engine.

The bracket keys are the exact values stored by the onboarding wizard,
so they must not be renamed.
"""
from __future__ import annotations

from typing import Dict, Optional


# ============================================================
# Intake brackets
# ============================================================

# size bracket -> record-count midpoint
SIZE_BRACKET_RECORDS: Dict[str, int] = {
    "under100": 50,
    "100-1k": 500,
    "1k-10k": 5000,
    "10k-100k": 50000,
    "100k+": 150000,
}
DEFAULT_BRACKET_RECORDS = 50

# access bracket -> number of people with access
ACCESS_BRACKET_USERS: Dict[str, int] = {
    "1-2": 2,
    "3-10": 10,
    "11-50": 50,
    "50-100": 100,
    "100+": 150,
}
# unknown access must not mask a higher tier on another database
DEFAULT_BRACKET_USERS = 0


def records_for_size(size: Optional[str]) -> int:
    if size is None:
        return DEFAULT_BRACKET_RECORDS
    return SIZE_BRACKET_RECORDS.get(size, DEFAULT_BRACKET_RECORDS)


def users_for_access(access: Optional[str]) -> int:
    if access is None:
        return DEFAULT_BRACKET_USERS
    return ACCESS_BRACKET_USERS.get(access, DEFAULT_BRACKET_USERS)


# ============================================================
# Vocabularies
# ============================================================

MEDICAL_DB = "medical"
CAMERAS_DB = "cameras"
CVS_DB = "cvs"
WEBSITE_LEADS_DB = "website_leads"

SENSITIVE_INDUSTRIES = ("health", "finance")

# CV retention answers that already satisfy the deletion duty
CV_RETENTION_OK = ("quarterly", "policy")

RESOLVED_INCIDENT_STATUSES = ("resolved", "closed")

PROCESSOR_LABELS: Dict[str, str] = {
    "crm_saas": "CRM / מערכת ניהול",
    "payroll": "שכר / HR",
    "marketing": "שיווק / דיוור",
    "cloud_hosting": "אחסון ענן",
    "call_center": "מוקד שירות",
    "accounting": 'הנה"ח / רו"ח',
}


def processor_label(code: str) -> str:
    return PROCESSOR_LABELS.get(code, code)


# ============================================================
# Thresholds
# ============================================================

HIGH_VOLUME_RECORDS = 100_000
MEDIUM_VOLUME_RECORDS = 10_000
MEDIUM_DB_COUNT = 5
HIGH_ACCESS_USERS = 100
CISO_ACCESS_USERS = 50
TRAINING_ACCESS_USERS = 10

SECURITY_LEVEL_LABELS_HE: Dict[str, str] = {
    "high": "גבוהה",
    "medium": "בינונית",
    "basic": "בסיסית",
}

REASON_HIGH_SECURITY = "רמת אבטחה גבוהה"
REASON_HIGH_VOLUME = "מעל 100,000 נושאי מידע"
REASON_MEDICAL_VOLUME = "מידע רפואי עם מעל 10,000 רשומות"

CISO_REASON = (
    "ארגון המעבד מידע רגיש עם מעל 50 בעלי גישה "
    "עשוי לחייב מינוי CISO בנוסף ל-DPO"
)

DEFAULT_DPO_NAME = "עו״ד דנה כהן"


# ============================================================
# Score weights
# ============================================================

ACTION_WEIGHTS: Dict[str, int] = {
    "dpo-appointed": 10,
    "dpo-letter-sign": 8,
    "privacy-policy": 10,
    "security-procedures": 10,
    "db-registration": 8,
    "ropa": 8,
    "consent-form": 6,
    "consent-implementation": 5,
    "processor-agreements": 7,
    "access-control": 5,
    "camera-officer": 3,
    "cv-deletion": 4,
    "ciso-check": 3,
    "employee-training": 3,
    "reporting-obligation": 8,
    "open-incidents": 10,
}
DEFAULT_ACTION_WEIGHT = 3


def weight_for(action_id: str) -> int:
    return ACTION_WEIGHTS.get(action_id, DEFAULT_ACTION_WEIGHT)
