import pytest

from mydpo.domain.compliance.tables import ACTION_WEIGHTS
from mydpo.schemas.profile import Profile, coerce_records, DocumentRecord, IncidentRecord
from mydpo.services import compliance_rules as rules
from mydpo.services.compliance_engine import ClassifyNode, ExtractMetricsNode


# -------------------------------------------------
# Helper: context as the engine builds it before DeriveActionsNode
# -------------------------------------------------

def make_ctx(profile=None, documents=None, incidents=None):
    ctx = {
        "profile": Profile.from_raw(profile or {}),
        "documents": coerce_records(documents or [], DocumentRecord),
        "incidents": coerce_records(incidents or [], IncidentRecord),
        "dpo_name": "Test DPO",
        "metrics": None,
        "classification": None,
        "actions": [],
        "score": 0,
        "_doc_types": frozenset(),
        "_active_doc_types": frozenset(),
    }
    ctx = ExtractMetricsNode.run(ctx)
    return ClassifyNode.run(ctx)


# =================================================
# Rule table integrity
# =================================================

def test_rule_ids_match_weight_table():
    assert len(rules.RULES) == len(rules.RULE_IDS)
    assert set(rules.RULE_IDS) == set(ACTION_WEIGHTS)


def test_every_emitted_id_is_weighted():
    ctx = make_ctx(
        profile={
            "databases": ["medical", "cameras", "cvs", "website_leads"],
            "processors": ["payroll"],
            "hasConsent": "no",
            "accessControl": "all",
            "dbDetails": {"medical": {"size": "100k+", "access": "100+"}},
        },
        incidents=[{"status": "reported"}],
    )
    emitted = [r(ctx) for r in rules.RULES]

    assert all(a is not None for a in emitted)
    assert [a.id for a in emitted] == rules.RULE_IDS
    for a in emitted:
        assert a.id in ACTION_WEIGHTS


@pytest.mark.parametrize(
    "action_id,status,expected",
    [
        ("ropa", "completed", "done"),
        ("dpo-appointed", "auto_resolved", "done"),
        ("ropa", "pending_dpo", "dpo_pending"),
        ("access-control", "pending_user", "user_action"),
        ("reporting-obligation", "pending_user", "reporting"),
    ],
)
def test_category_for(action_id, status, expected):
    assert rules.category_for(action_id, status) == expected


# =================================================
# Document-backed rules
# =================================================

def test_dpo_letter_status_progression():
    assert rules.dpo_letter_sign(make_ctx()).status == "pending_dpo"

    drafted = rules.dpo_letter_sign(make_ctx(documents=[
        {"type": "dpo_appointment", "status": "pending_signature"},
    ]))
    assert drafted.status == "pending_user"
    assert drafted.category == "user_action"

    signed = rules.dpo_letter_sign(make_ctx(documents=[
        {"type": "dpo_appointment", "status": "active"},
    ]))
    assert signed.status == "completed"
    assert signed.owner == "system"


def test_privacy_policy_draft_stays_with_dpo():
    action = rules.privacy_policy(make_ctx(documents=[
        {"type": "privacy_policy", "status": "pending_review"},
    ]))
    assert action.status == "pending_dpo"
    assert action.owner == "dpo"
    assert action.description == "ממתין לאישור הממונה"


def test_approved_privacy_policy_must_be_published_by_user():
    action = rules.privacy_policy(make_ctx(documents=[
        {"type": "privacy_policy", "status": "active"},
    ]))
    assert action.status == "pending_user"
    assert action.owner == "user"


def test_security_procedures_accepts_legacy_type():
    action = rules.security_procedures(make_ctx(documents=[
        {"type": "security_policy", "status": "active"},
    ]))
    assert action.status == "pending_user"


def test_db_registration_counts_all_databases():
    ctx = make_ctx(
        profile={"databases": ["customers"], "customDatabases": ["club"]},
        documents=[{"type": "database_registration", "status": "active"}],
    )
    action = rules.db_registration(ctx)

    assert action.status == "completed"
    assert action.description.startswith("2 ")


def test_consent_form_without_draft_is_pending_dpo():
    assert rules.consent_form(make_ctx()).status == "pending_dpo"


# =================================================
# Conditional rules
# =================================================

def test_consent_implementation_needs_web_leads():
    assert rules.consent_implementation(make_ctx({"hasConsent": "no"})) is None

    action = rules.consent_implementation(make_ctx({
        "hasConsent": "no", "databases": ["website_leads"],
    }))
    assert action.priority == "high"
    assert action.action_path.startswith("/chat?prompt=%D7")


def test_processor_agreements_lists_labels():
    assert rules.processor_agreements(make_ctx()) is None

    action = rules.processor_agreements(make_ctx({
        "processors": ["cloud_hosting"], "customProcessors": ["Mailer Inc"],
    }))
    assert "2" in action.title
    assert action.description.endswith("אחסון ענן, Mailer Inc")


def test_access_control_only_when_everyone_sees_everything():
    assert rules.access_control(make_ctx({"accessControl": "role_based"})) is None
    assert rules.access_control(make_ctx({"accessControl": "all"})).status == "pending_user"


def test_camera_officer_skipped_when_owner_named():
    assert rules.camera_officer(make_ctx({"databases": ["cameras"]})) is not None
    assert rules.camera_officer(make_ctx({
        "databases": ["cameras"], "cameraOwnerName": "Yossi",
    })) is None


def test_cv_deletion_missing_detail_counts_as_no_policy():
    assert rules.cv_deletion(make_ctx({"databases": ["cvs"]})) is not None
    assert rules.cv_deletion(make_ctx({
        "databases": ["cvs"], "dbDetails": {"cvs": {"retention": "policy"}},
    })) is None


def test_ciso_check_requires_sensitive_data_and_wide_access():
    finance_small = {"industry": "finance", "dbDetails": {"x": {"access": "11-50"}}}
    finance_tiny = {"industry": "finance", "dbDetails": {"x": {"access": "3-10"}}}

    assert rules.ciso_check(make_ctx(finance_small)) is not None
    assert rules.ciso_check(make_ctx(finance_tiny)) is None


def test_employee_training_threshold():
    assert rules.employee_training(make_ctx({"dbDetails": {"x": {"access": "3-10"}}})) is None
    assert rules.employee_training(make_ctx({"dbDetails": {"x": {"access": "11-50"}}})).priority == "low"


def test_open_incidents_ignores_resolved_and_closed():
    assert rules.open_incidents(make_ctx(incidents=[
        {"status": "resolved"}, {"status": "closed"},
    ])) is None

    action = rules.open_incidents(make_ctx(incidents=[
        {"status": "reported"}, {"status": None}, {"status": "closed"},
    ]))
    assert action.title.startswith("2 ")
    assert action.category == "user_action"


def test_dpo_appointed_uses_configured_name():
    action = rules.dpo_appointed(make_ctx())
    assert "Test DPO" in action.description
    assert action.status == "auto_resolved"
