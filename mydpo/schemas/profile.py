# mydpo/schemas/profile.py
"""
Intake data consumed by the compliance engine.

The onboarding wizard stores its answers as an opaque JSON blob
(`profile_data.v3Answers`) and the shape has changed across wizard
revisions. Every field here is optional and the validators coerce
anything unexpected to an empty value instead of failing.
"""
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, str)]


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _str_keys(value: Mapping) -> Dict[str, Any]:
    # pydantic rejects non-string keys outright
    return {k: v for k, v in value.items() if isinstance(k, str)}


class DatabaseDetail(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    size: Optional[str] = None
    access: Optional[str] = None
    retention: Optional[str] = None
    selected_fields: List[str] = Field(default=[], alias="fields")

    @field_validator("size", "access", "retention", mode="before")
    @classmethod
    def _scalar(cls, v: Any) -> Optional[str]:
        return _str_or_none(v)

    @field_validator("selected_fields", mode="before")
    @classmethod
    def _fields(cls, v: Any) -> List[str]:
        return _str_list(v)


class Profile(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    databases: List[str] = []
    custom_databases: List[str] = []
    processors: List[str] = []
    custom_processors: List[str] = []
    db_details: Dict[str, DatabaseDetail] = {}

    has_consent: Optional[str] = None
    access_control: Optional[str] = None
    industry: Optional[str] = None
    security_owner: Optional[str] = None
    camera_owner_name: Optional[str] = None

    biz_name: Optional[str] = None
    company_id: Optional[str] = None

    @field_validator(
        "databases", "custom_databases", "processors", "custom_processors",
        mode="before",
    )
    @classmethod
    def _lists(cls, v: Any) -> List[str]:
        return _str_list(v)

    @field_validator(
        "has_consent", "access_control", "industry", "security_owner",
        "camera_owner_name", "biz_name", "company_id",
        mode="before",
    )
    @classmethod
    def _scalars(cls, v: Any) -> Optional[str]:
        return _str_or_none(v)

    @field_validator("db_details", mode="before")
    @classmethod
    def _details(cls, v: Any) -> Dict[str, Any]:
        if not isinstance(v, Mapping):
            return {}
        details: Dict[str, Any] = {}
        for k, d in v.items():
            if isinstance(d, DatabaseDetail):
                details[str(k)] = d
            elif isinstance(d, Mapping):
                details[str(k)] = _str_keys(d)
            else:
                # still counted toward totals at the default bracket
                details[str(k)] = {}
        return details

    @property
    def all_processors(self) -> List[str]:
        return [*self.processors, *self.custom_processors]

    def detail_for(self, db_kind: str) -> DatabaseDetail:
        return self.db_details.get(db_kind) or DatabaseDetail()

    @classmethod
    def from_raw(cls, raw: Any) -> "Profile":
        if isinstance(raw, Profile):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        return cls.model_validate(_str_keys(raw))


class DocumentRecord(BaseModel):
    """Row from the `documents` table; only type and status are read."""
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    status: Optional[str] = None

    @field_validator("type", "status", mode="before")
    @classmethod
    def _scalar(cls, v: Any) -> Optional[str]:
        return _str_or_none(v)

    @property
    def is_active(self) -> bool:
        return self.status == "active"


class IncidentRecord(BaseModel):
    """Row from the `security_incidents` table; only status is read."""
    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _scalar(cls, v: Any) -> Optional[str]:
        return _str_or_none(v)


def coerce_records(rows: Any, model: type) -> list:
    """Normalize caller rows (dicts or models) into `model` instances."""
    if not isinstance(rows, (list, tuple)):
        return []
    out = []
    for r in rows:
        if isinstance(r, model):
            out.append(r)
        elif isinstance(r, Mapping):
            out.append(model.model_validate(_str_keys(r)))
    return out
