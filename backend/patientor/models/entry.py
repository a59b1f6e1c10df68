import enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BeforeValidator, Field

from patientor.models.base import CamelModel, IsoDate


class HealthCheckRating(int, enum.Enum):
    HEALTHY = 0
    LOW_RISK = 1
    HIGH_RISK = 2
    CRITICAL_RISK = 3


def _require_int(value: Any) -> Any:
    # bool is an int subclass; "0" and 0.0 are not ratings either
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("Rating must be an integer between 0 and 3")
    return value


class BaseEntry(CamelModel):
    description: str
    date: IsoDate
    specialist: str
    diagnosis_codes: Optional[list[str]] = None


class SickLeave(CamelModel):
    start_date: IsoDate
    end_date: IsoDate


class Discharge(CamelModel):
    date: IsoDate
    criteria: str


# ---------------------------------------------------------------------------
# Entries as submitted (no id yet)
# ---------------------------------------------------------------------------

class NewHealthCheckEntry(BaseEntry):
    type: Literal["HealthCheck"]
    health_check_rating: Annotated[HealthCheckRating, BeforeValidator(_require_int)]


class NewOccupationalHealthcareEntry(BaseEntry):
    type: Literal["OccupationalHealthcare"]
    employer_name: str
    sick_leave: Optional[SickLeave] = None


class NewHospitalEntry(BaseEntry):
    type: Literal["Hospital"]
    discharge: Discharge


# ---------------------------------------------------------------------------
# Stored entries (server-assigned id)
# ---------------------------------------------------------------------------

class HealthCheckEntry(NewHealthCheckEntry):
    id: str


class OccupationalHealthcareEntry(NewOccupationalHealthcareEntry):
    id: str


class HospitalEntry(NewHospitalEntry):
    id: str


NewEntry = Annotated[
    Union[NewHealthCheckEntry, NewOccupationalHealthcareEntry, NewHospitalEntry],
    Field(discriminator="type"),
]

Entry = Annotated[
    Union[HealthCheckEntry, OccupationalHealthcareEntry, HospitalEntry],
    Field(discriminator="type"),
]

# Discriminant tag -> variant model. Validation picks from these before
# looking at any other field.
NEW_ENTRY_VARIANTS: dict[str, type[BaseEntry]] = {
    "HealthCheck": NewHealthCheckEntry,
    "OccupationalHealthcare": NewOccupationalHealthcareEntry,
    "Hospital": NewHospitalEntry,
}

ENTRY_VARIANTS: dict[str, type[BaseEntry]] = {
    "HealthCheck": HealthCheckEntry,
    "OccupationalHealthcare": OccupationalHealthcareEntry,
    "Hospital": HospitalEntry,
}


def with_id(entry: NewEntry, entry_id: str) -> Entry:
    """Promote a validated new entry to a stored entry carrying *entry_id*."""
    variant = ENTRY_VARIANTS[entry.type]
    return variant.model_validate({**entry.model_dump(by_alias=True), "id": entry_id})
