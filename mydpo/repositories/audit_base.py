from abc import ABC, abstractmethod
from typing import List, Optional


class AuditRepository(ABC):

    @abstractmethod
    def append_event(
        self,
        org_id: Optional[str],
        event_type: str,
        actor: str,
        payload: dict,
    ) -> None:
        ...

    @abstractmethod
    def list_events(self, org_id: str) -> List[dict]:
        ...
