import pytest
from fastapi.testclient import TestClient

from mydpo.bootstrap import create_app
from mydpo.repositories.memory_repo import (
    MemoryAuditRepository,
    MemoryOrganizationRepository,
)


# -------------------------------------------------
# Shared intake profiles (v3Answers blobs)
# -------------------------------------------------

@pytest.fixture
def high_volume_profile():
    return {
        "databases": ["customers"],
        "dbDetails": {"customers": {"size": "100k+", "access": "1-2"}},
    }


@pytest.fixture
def medical_profile():
    return {
        "databases": ["medical"],
        "industry": "other",
        "securityOwner": "none",
        "dbDetails": {"medical": {"size": "under100", "access": "100+"}},
    }


@pytest.fixture
def org_db(high_volume_profile):
    return {
        "profiles": {
            "org-1": high_volume_profile,
            "org-empty": {},
        },
        "documents": {
            "org-1": [
                {"type": "dpo_appointment", "status": "active"},
                {"type": "ropa", "status": "pending_review"},
            ],
        },
        "incidents": {
            "org-1": [{"status": "reported"}, {"status": "closed"}],
        },
    }


@pytest.fixture
def org_repo(org_db):
    return MemoryOrganizationRepository(org_db)


@pytest.fixture
def audit_repo():
    return MemoryAuditRepository()


@pytest.fixture
def client(org_repo, audit_repo):
    app = create_app()
    app.state.org_repo = org_repo
    app.state.audit_repo = audit_repo
    return TestClient(app)
