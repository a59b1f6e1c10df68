import enum

from pydantic import Field

from patientor.models.base import CamelModel, IsoDate
from patientor.models.entry import Entry, NewEntry


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class NewPatient(CamelModel):
    name: str = Field(..., min_length=1)
    date_of_birth: IsoDate
    ssn: str
    gender: Gender
    occupation: str
    # ids are assigned on registration, like entries appended later
    entries: list[NewEntry] = Field(default_factory=list)


class Patient(NewPatient):
    id: str
    entries: list[Entry] = Field(default_factory=list)


class PublicPatient(CamelModel):
    """A patient as shown in listings: everything except the national id."""

    id: str
    name: str
    date_of_birth: IsoDate
    gender: Gender
    occupation: str
    entries: list[Entry] = Field(default_factory=list)
