# tech_matcher/models.py
from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, FrozenSet, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from tech_matcher.errors import InvalidInputError
from tech_matcher.utils import as_bool, as_float, as_int, as_tag_list, normalize_tag


class _TaggedEnum(str, Enum):
    """String enum that parses loosely: case-insensitive, with legacy aliases."""

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {}

    @classmethod
    def parse(cls, value: Any, default: Any) -> Any:
        if isinstance(value, cls):
            return value
        tag = normalize_tag(value)
        tag = cls._aliases().get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            return default


class AvailabilityStatus(_TaggedEnum):
    AVAILABLE = "available"
    BUSY = "busy"
    EMERGENCY = "emergency"  # emergency call-outs only
    OFFLINE = "offline"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {"unavailable": "offline"}


class TechnicianLevel(_TaggedEnum):
    # declaration order is seniority order
    TRAINEE = "trainee"
    JUNIOR = "junior"
    TECHNICIAN = "technician"
    SENIOR = "senior"
    LEAD = "lead"
    SUPERVISOR = "supervisor"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {"mid": "technician"}

    @property
    def seniority(self) -> int:
        return list(TechnicianLevel).index(self)

    def at_least(self, other: "TechnicianLevel") -> bool:
        return self.seniority >= other.seniority


class JobComplexity(_TaggedEnum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    EXPERT = "expert"

    @property
    def demands_experience(self) -> bool:
        return self in (JobComplexity.COMPLEX, JobComplexity.EXPERT)


class Skill(_TaggedEnum):
    AC_INSTALLATION = "ac_installation"
    AC_REPAIR = "ac_repair"
    REFRIGERATION = "refrigeration"
    ELECTRICAL = "electrical"
    PREVENTIVE_MAINTENANCE = "preventive_maintenance"
    EMERGENCY_SERVICE = "emergency_service"
    COMMERCIAL_SYSTEMS = "commercial_systems"
    RESIDENTIAL_SYSTEMS = "residential_systems"
    DUCTWORK = "ductwork"
    HVAC_CONTROLS = "hvac_controls"
    DIAGNOSTICS = "diagnostics"
    WELDING = "welding"


class UserRole(_TaggedEnum):
    TECHNICIAN = "technician"
    CUSTOMER = "customer"
    SUPPLIER = "supplier"
    ADMIN = "admin"


def _text(v: Any) -> str:
    if isinstance(v, str):
        return v.strip()
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return ""


# ----------------------------
# User records (role-tagged)
# ----------------------------

class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class _UserBase(_Record):
    id: str = Field(default="", validation_alias=AliasChoices("id", "uid"))
    display_name: str = ""
    email: str = ""
    is_active: bool = True
    is_approved: bool = True

    @field_validator("id", "display_name", "email", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _text(v)

    @field_validator("is_active", "is_approved", mode="before")
    @classmethod
    def _coerce_flag(cls, v: Any) -> bool:
        return as_bool(v)


class TechnicianProfile(_UserBase):
    """
    Read-only technician record as the engine sees it.

    Every field degrades to a conservative value when storage hands us
    something missing or malformed, so scoring always has a comparable input.
    """
    id: str = Field(default="", validation_alias=AliasChoices("id", "uid", "technicianId", "technician_id"))
    role: Literal["technician"] = "technician"

    skills: FrozenSet[str] = frozenset()
    service_areas: FrozenSet[str] = frozenset()
    primary_specialization: Optional[str] = None

    availability_status: AvailabilityStatus = AvailabilityStatus.BUSY
    level: TechnicianLevel = TechnicianLevel.TECHNICIAN
    years_of_experience: int = 0

    current_job_ids: Tuple[str, ...] = ()
    max_jobs_per_day: Optional[int] = None  # None -> configured default

    total_jobs_completed: int = 0
    total_jobs_assigned: int = 0
    average_rating: float = 0.0
    first_time_fix_rate: float = 0.0
    average_job_duration: float = 0.0

    has_vehicle: bool = False
    has_tool_kit: bool = False
    is_emergency_technician: bool = False
    is_team_lead: bool = False
    team_id: Optional[str] = None

    @field_validator("skills", "service_areas", mode="before")
    @classmethod
    def _coerce_tags(cls, v: Any) -> FrozenSet[str]:
        return frozenset(as_tag_list(v))

    @field_validator("primary_specialization", mode="before")
    @classmethod
    def _coerce_specialization(cls, v: Any) -> Optional[str]:
        return normalize_tag(v) or None

    @field_validator("team_id", mode="before")
    @classmethod
    def _coerce_team(cls, v: Any) -> Optional[str]:
        return _text(v) or None

    @field_validator("availability_status", mode="before")
    @classmethod
    def _coerce_availability(cls, v: Any) -> AvailabilityStatus:
        return AvailabilityStatus.parse(v, default=AvailabilityStatus.BUSY)

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, v: Any) -> TechnicianLevel:
        return TechnicianLevel.parse(v, default=TechnicianLevel.TECHNICIAN)

    @field_validator("current_job_ids", mode="before")
    @classmethod
    def _coerce_job_ids(cls, v: Any) -> Tuple[str, ...]:
        if not isinstance(v, (list, tuple)):
            return ()
        out: List[str] = []
        for x in v:
            jid = _text(x)
            if jid and jid not in out:
                out.append(jid)
        return tuple(out)

    @field_validator("max_jobs_per_day", mode="before")
    @classmethod
    def _coerce_capacity(cls, v: Any) -> Optional[int]:
        if v is None:
            return None
        return as_int(v, default=None)

    @field_validator("years_of_experience", "total_jobs_completed", "total_jobs_assigned", mode="before")
    @classmethod
    def _coerce_count(cls, v: Any) -> int:
        return as_int(v)

    @field_validator("average_rating", mode="before")
    @classmethod
    def _coerce_rating(cls, v: Any) -> float:
        return as_float(v, high=5.0)

    @field_validator("first_time_fix_rate", mode="before")
    @classmethod
    def _coerce_fix_rate(cls, v: Any) -> float:
        return as_float(v, high=100.0)

    @field_validator("average_job_duration", mode="before")
    @classmethod
    def _coerce_duration(cls, v: Any) -> float:
        return as_float(v)

    @field_validator("has_vehicle", "has_tool_kit", "is_emergency_technician", "is_team_lead", mode="before")
    @classmethod
    def _coerce_capability(cls, v: Any) -> bool:
        return as_bool(v)

    @property
    def workload(self) -> int:
        return len(self.current_job_ids)

    @classmethod
    def from_record(cls, record: Any) -> "TechnicianProfile":
        """
        Accepts a TechnicianProfile, a flat dict, or the storage shape where
        technician fields sit under "metadata" and the id is "uid".
        """
        if isinstance(record, TechnicianProfile):
            return record
        if not isinstance(record, Mapping):
            raise InvalidInputError(f"Technician record must be a mapping (got {type(record).__name__})")
        data = _flatten_metadata(record)
        data["role"] = "technician"
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidInputError(f"Unusable technician record: {e}") from e


class CustomerProfile(_UserBase):
    role: Literal["customer"] = "customer"
    phone: str = ""

    @field_validator("phone", mode="before")
    @classmethod
    def _coerce_phone(cls, v: Any) -> str:
        return _text(v)


class SupplierProfile(_UserBase):
    role: Literal["supplier"] = "supplier"
    business_name: str = ""

    @field_validator("business_name", mode="before")
    @classmethod
    def _coerce_business(cls, v: Any) -> str:
        return _text(v)


class AdminProfile(_UserBase):
    role: Literal["admin"] = "admin"


UserRecord = Annotated[
    Union[TechnicianProfile, CustomerProfile, SupplierProfile, AdminProfile],
    Field(discriminator="role"),
]

_user_record_adapter: TypeAdapter = TypeAdapter(UserRecord)


def _flatten_metadata(record: Mapping[str, Any]) -> Dict[str, Any]:
    # null values count as absent so a later alias (uid after id) still applies
    data = {k: v for k, v in record.items() if k != "metadata" and v is not None}
    metadata = record.get("metadata")
    if isinstance(metadata, Mapping):
        merged = {k: v for k, v in metadata.items() if v is not None}
        merged.update(data)
        return merged
    return data


def parse_user_record(record: Any):
    """
    Parse one stored user document into its role-specific model.
    Raises ValidationError for unknown roles; InvalidInputError for non-mappings.
    """
    if not isinstance(record, Mapping):
        raise InvalidInputError(f"User record must be a mapping (got {type(record).__name__})")
    data = _flatten_metadata(record)
    role = UserRole.parse(data.get("role"), default=None)
    if role is not None:
        data["role"] = role.value
    return _user_record_adapter.validate_python(data)


# ----------------------------
# Matching inputs / outputs
# ----------------------------

class JobRequirements(_Record):
    required_skills: Tuple[str, ...] = ()
    service_area: str = ""
    complexity: JobComplexity = JobComplexity.MODERATE

    @field_validator("required_skills", mode="before")
    @classmethod
    def _coerce_skills(cls, v: Any) -> Tuple[str, ...]:
        return tuple(as_tag_list(v))

    @field_validator("service_area", mode="before")
    @classmethod
    def _coerce_area(cls, v: Any) -> str:
        return normalize_tag(v)

    @field_validator("complexity", mode="before")
    @classmethod
    def _coerce_complexity(cls, v: Any) -> JobComplexity:
        return JobComplexity.parse(v, default=JobComplexity.MODERATE)

    @classmethod
    def coerce(cls, value: Any) -> "JobRequirements":
        if isinstance(value, JobRequirements):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise InvalidInputError(f"Job requirements must be a mapping (got {type(value).__name__})")


class MatchResult(BaseModel):
    technician_id: str
    score: float
    rank: int


class Recommendation(MatchResult):
    display_name: str = ""
    level: TechnicianLevel = TechnicianLevel.TECHNICIAN
    availability: AvailabilityStatus = AvailabilityStatus.BUSY
    current_workload: int = 0
    capacity: int = 0
    has_required_skills: bool = False
    matching_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    factors: Dict[str, float] = Field(default_factory=dict)
