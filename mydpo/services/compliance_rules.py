# mydpo/services/compliance_rules.py
"""
Ordered rule table for compliance actions.

Each rule is a plain function `(ctx) -> ComplianceAction | None` that
reads the shared engine context and never looks at another rule's
output. The order of RULES is the order actions are shown in the UI.
"""
from __future__ import annotations

from typing import Callable, List, Optional
from urllib.parse import quote

from mydpo.domain.compliance import tables
from mydpo.domain.compliance.context import ComplianceContext
from mydpo.schemas.compliance import ComplianceAction

Rule = Callable[[ComplianceContext], Optional[ComplianceAction]]

DOCUMENTS_PATH = "/dashboard?tab=documents"
INCIDENTS_PATH = "/dashboard?tab=incidents"


# ============================================================
# Helpers
# ============================================================

def category_for(action_id: str, status: str) -> str:
    if action_id == "reporting-obligation":
        return "reporting"
    if status in ("auto_resolved", "completed"):
        return "done"
    if status == "pending_dpo":
        return "dpo_pending"
    return "user_action"


def _action(**kwargs) -> ComplianceAction:
    kwargs.setdefault("category", category_for(kwargs["id"], kwargs["status"]))
    return ComplianceAction(**kwargs)


def _chat_path(prompt: str) -> str:
    # same escaping as the browser's encodeURIComponent
    return "/chat?prompt=" + quote(prompt, safe="!~*'()")


def _has_doc(ctx: ComplianceContext, *doc_types: str) -> bool:
    return any(t in ctx["_doc_types"] for t in doc_types)


def _has_active_doc(ctx: ComplianceContext, *doc_types: str) -> bool:
    return any(t in ctx["_active_doc_types"] for t in doc_types)


# ============================================================
# Always-present rules (governance documents)
# ============================================================

def dpo_appointed(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    dpo_name = ctx["dpo_name"]
    return _action(
        id="dpo-appointed",
        title="מינוי ממונה הגנת פרטיות",
        description=f"{dpo_name} מונתה כממונה הגנת הפרטיות שלכם",
        legal_basis="תיקון 13, סעיף 17ב",
        status="auto_resolved",
        owner="system",
        priority="critical",
        resolved_note=f"בוצע אוטומטית — {dpo_name}",
        document_type="dpo_appointment",
    )


def dpo_letter_sign(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    approved = _has_active_doc(ctx, "dpo_appointment")
    drafted = _has_doc(ctx, "dpo_appointment")

    if approved:
        status = "completed"
    elif drafted:
        status = "pending_user"
    else:
        status = "pending_dpo"

    return _action(
        id="dpo-letter-sign",
        title="חתימה על כתב מינוי DPO",
        description="הורידו את כתב המינוי, חתמו ושמרו עותק. יש להעביר עותק חתום לממונה",
        legal_basis="תיקון 13, סעיף 17ב",
        status=status,
        owner="system" if approved else "user",
        priority="high",
        estimated_minutes=10,
        document_type="dpo_appointment",
        action_path=DOCUMENTS_PATH,
    )


def privacy_policy(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    approved = _has_active_doc(ctx, "privacy_policy")
    drafted = _has_doc(ctx, "privacy_policy")

    if approved:
        description = "פרסמו את מדיניות הפרטיות באתר הארגון עם קישור בפוטר"
    elif drafted:
        description = "ממתין לאישור הממונה"
    else:
        description = "ייוצר אוטומטית"

    # approved still needs the user to publish it on their site
    return _action(
        id="privacy-policy",
        title="מדיניות פרטיות",
        description=description,
        legal_basis="תיקון 13, חובת יידוע",
        status="pending_user" if approved else "pending_dpo",
        owner="user" if approved else "dpo",
        priority="high",
        estimated_minutes=15,
        document_type="privacy_policy",
        action_path=DOCUMENTS_PATH,
    )


def security_procedures(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    approved = _has_active_doc(ctx, "security_procedures", "security_policy")
    drafted = _has_doc(ctx, "security_procedures", "security_policy")

    if approved:
        description = "שלחו את נוהל האבטחה לכל העובדים ותעדו שקראו"
    elif drafted:
        description = "ממתין לאישור הממונה"
    else:
        description = "ייוצר אוטומטית"

    return _action(
        id="security-procedures",
        title="נוהל אבטחת מידע",
        description=description,
        legal_basis="תקנות אבטחת מידע 2017",
        status="pending_user" if approved else "pending_dpo",
        owner="user" if approved else "dpo",
        priority="high",
        estimated_minutes=15,
        document_type="security_procedures",
        action_path=DOCUMENTS_PATH,
    )


def db_registration(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    approved = _has_active_doc(ctx, "database_registration", "database_definition")
    db_count = ctx["metrics"].db_count

    if approved:
        description = f"{db_count} מאגרים רשומים ומתועדים"
    else:
        description = f"{db_count} מאגרים זוהו — ממתין לאישור הממונה"

    return _action(
        id="db-registration",
        title="רישום מאגרי מידע",
        description=description,
        legal_basis="חוק הגנת הפרטיות, סעיף 8",
        status="completed" if approved else "pending_dpo",
        owner="system" if approved else "dpo",
        priority="high",
        estimated_minutes=10,
        document_type="database_definition",
        action_path=DOCUMENTS_PATH,
    )


def ropa(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    approved = _has_active_doc(ctx, "ropa")
    metrics = ctx["metrics"]

    if approved:
        description = "מפת העיבוד מאושרת ומעודכנת"
    else:
        description = (
            f"נוצרה מ-{metrics.db_count} מאגרים ו-{metrics.processor_count} ספקים"
            " — ממתינה לאישור"
        )

    return _action(
        id="ropa",
        title="מפת עיבוד נתונים (ROPA)",
        description=description,
        legal_basis="תיקון 13, חובת תיעוד פעילויות עיבוד",
        status="completed" if approved else "pending_dpo",
        owner="system" if approved else "dpo",
        priority="medium",
        estimated_minutes=10,
        document_type="ropa",
        action_path=DOCUMENTS_PATH,
    )


def consent_form(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    approved = _has_active_doc(ctx, "consent_form")
    drafted = _has_doc(ctx, "consent_form")

    if approved:
        description = "טופס ההסכמה מאושר ומוכן לשימוש"
    elif drafted:
        description = "ממתין לאישור הממונה"
    else:
        description = "ייוצר אוטומטית"

    return _action(
        id="consent-form",
        title="טופס הסכמה לאיסוף מידע",
        description=description,
        legal_basis="תיקון 13, חובת הסכמה מדעת",
        status="completed" if approved else "pending_dpo",
        owner="system" if approved else "dpo",
        priority="medium",
        document_type="consent_form",
        action_path=DOCUMENTS_PATH,
    )


# ============================================================
# Conditional rules (profile driven)
# ============================================================

def consent_implementation(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    if not (ctx["profile"].has_consent == "no" and ctx["metrics"].has_web_leads):
        return None

    return _action(
        id="consent-implementation",
        title="הטמעת מנגנון הסכמה באתר",
        description="חובה להוסיף מנגנון הסכמה מדעת בטפסי האתר לפני איסוף מידע אישי",
        legal_basis="תיקון 13, סעיף יידוע מורחב",
        status="pending_user",
        owner="user",
        priority="high",
        estimated_minutes=60,
        action_path=_chat_path("איך מטמיעים מנגנון הסכמה (consent) באתר?"),
    )


def processor_agreements(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    processors = ctx["profile"].all_processors
    if not processors:
        return None

    labels = ", ".join(tables.processor_label(p) for p in processors)
    return _action(
        id="processor-agreements",
        title=f"הסכמי עיבוד מידע — {len(processors)} ספקים",
        description=f"נדרש הסכם עיבוד מידע בכתב עם: {labels}",
        legal_basis="תיקון 13, חובת הסדרה חוזית",
        status="pending_user",
        owner="user",
        priority="medium",
        estimated_minutes=30,
        action_path=_chat_path("אני צריך הסכם עיבוד מידע לספקים שלי"),
    )


def access_control(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    # "all" = every employee sees every database
    if ctx["profile"].access_control != "all":
        return None

    return _action(
        id="access-control",
        title="הגבלת גישה למאגרי מידע",
        description="כל העובדים רואים את כל המידע — נדרשת בקרת גישה לפי תפקיד",
        legal_basis="תקנות אבטחת מידע 2017, סעיף 5",
        status="pending_user",
        owner="user",
        priority="high",
        estimated_minutes=120,
        action_path=_chat_path("איך מגדירים בקרת גישה למאגרי מידע?"),
    )


def camera_officer(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    if not ctx["metrics"].has_cameras or ctx["profile"].camera_owner_name:
        return None

    return _action(
        id="camera-officer",
        title="מינוי אחראי מצלמות",
        description="נדרש למנות אחראי מצלמות בכתב ולתעד את ההחלטה",
        legal_basis="חוק הגנת הפרטיות, סעיף 7",
        status="pending_user",
        owner="user",
        priority="medium",
        estimated_minutes=15,
        action_path=_chat_path("איך ממנים אחראי מצלמות?"),
    )


def cv_deletion(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    if not ctx["metrics"].has_cvs:
        return None

    retention = ctx["profile"].detail_for(tables.CVS_DB).retention
    if retention in tables.CV_RETENTION_OK:
        return None

    return _action(
        id="cv-deletion",
        title='מדיניות מחיקת קו"ח',
        description='חובה למחוק קו"ח כל 3 חודשים (עד שנתיים לצורך מקצועי)',
        legal_basis="חוק הגנת הפרטיות, תקנות שמירת מידע",
        status="pending_user",
        owner="user",
        priority="high",
        estimated_minutes=30,
        action_path=_chat_path("איך מיישמים מדיניות מחיקת קורות חיים?"),
    )


def ciso_check(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    classification = ctx["classification"]
    if not classification.needs_ciso:
        return None

    owner = ctx["profile"].security_owner
    appointed = bool(owner) and owner != "none"

    return _action(
        id="ciso-check",
        title="בדיקת צורך בממונה אבטחת מידע (CISO)",
        description=classification.ciso_reason,
        legal_basis="תיקון 13, סעיף 17ג",
        status="completed" if appointed else "pending_user",
        owner="user",
        priority="medium",
        action_path=_chat_path("האם הארגון שלי חייב למנות CISO?"),
    )


def employee_training(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    if ctx["metrics"].max_access <= tables.TRAINING_ACCESS_USERS:
        return None

    return _action(
        id="employee-training",
        title="הדרכת עובדים בנושא פרטיות",
        description="עובדים עם גישה למידע אישי חייבים לעבור הדרכה בנושא הגנת פרטיות",
        legal_basis="תקנות אבטחת מידע 2017, סעיף 10",
        status="pending_user",
        owner="user",
        priority="low",
        estimated_minutes=60,
        action_path=_chat_path("אני צריך חומרי הדרכה לעובדים בנושא פרטיות"),
    )


def reporting_obligation(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    classification = ctx["classification"]
    if not classification.needs_reporting:
        return None

    return _action(
        id="reporting-obligation",
        title="רישום מאגרים ברשות להגנת הפרטיות",
        description=f"חובת דיווח: {', '.join(classification.reporting_reasons)}",
        legal_basis="חוק הגנת הפרטיות, סעיף 8",
        status="pending_user",
        owner="user",
        priority="critical",
        action_path=_chat_path("איך מדווחים לרשות להגנת הפרטיות על מאגרי מידע?"),
    )


def open_incidents(ctx: ComplianceContext) -> Optional[ComplianceAction]:
    open_count = sum(
        1 for i in ctx["incidents"]
        if i.status not in tables.RESOLVED_INCIDENT_STATUSES
    )
    if open_count == 0:
        return None

    return _action(
        id="open-incidents",
        title=f"{open_count} אירועי אבטחה פתוחים",
        description="יש לטפל באירועי אבטחה פתוחים בהקדם. דיווח לרשות תוך 72 שעות אם רלוונטי",
        legal_basis="תיקון 13, חובת דיווח אירוע אבטחה",
        status="pending_user",
        owner="user",
        priority="critical",
        action_path=INCIDENTS_PATH,
    )


RULES: List[Rule] = [
    dpo_appointed,
    dpo_letter_sign,
    privacy_policy,
    security_procedures,
    db_registration,
    ropa,
    consent_form,
    consent_implementation,
    processor_agreements,
    access_control,
    camera_officer,
    cv_deletion,
    ciso_check,
    employee_training,
    reporting_obligation,
    open_incidents,
]

# every id the table can emit, in rule order
RULE_IDS: List[str] = [
    "dpo-appointed",
    "dpo-letter-sign",
    "privacy-policy",
    "security-procedures",
    "db-registration",
    "ropa",
    "consent-form",
    "consent-implementation",
    "processor-agreements",
    "access-control",
    "camera-officer",
    "cv-deletion",
    "ciso-check",
    "employee-training",
    "reporting-obligation",
    "open-incidents",
]
