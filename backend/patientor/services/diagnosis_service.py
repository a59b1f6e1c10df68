"""Read-only access to the diagnosis reference table."""

from __future__ import annotations

from patientor.db.memory import InMemoryDB
from patientor.models.diagnosis import Diagnosis


def list_diagnoses(db: InMemoryDB) -> list[Diagnosis]:
    return list(db.diagnoses.values())


def find_diagnosis(db: InMemoryDB, code: str) -> Diagnosis | None:
    """Look up a diagnosis by code. Entry codes are not guaranteed to resolve."""
    return db.diagnoses.get(code)
