from abc import ABC, abstractmethod
from typing import List, Optional

from mydpo.schemas.compliance import ComplianceSummary


class OrganizationRepository(ABC):
    """
    Data access for everything the compliance engine reads about one
    organization, plus the place its result is cached.
    Repositories return raw dicts; the engine does the normalization.
    """

    # -------------------------
    # Engine inputs
    # -------------------------
    @abstractmethod
    def get_profile(self, org_id: str) -> Optional[dict]:
        """
        Return the intake answers (v3Answers blob) for the organization.
        None if the organization has no profile row at all; an empty
        dict if the row exists but onboarding has not been answered.
        """
        pass

    @abstractmethod
    def list_documents(self, org_id: str) -> List[dict]:
        """Generated documents (type, status) for the organization."""
        pass

    @abstractmethod
    def list_incidents(self, org_id: str) -> List[dict]:
        """Security incidents (status) for the organization."""
        pass

    # -------------------------
    # Snapshot
    # -------------------------
    @abstractmethod
    def save_compliance_snapshot(self, org_id: str, summary: ComplianceSummary) -> None:
        """
        Persist the latest score and action list so digests and the DPO
        console can read them without re-deriving.
        """
        pass
