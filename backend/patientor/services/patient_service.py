"""
Patient service — listing, lookup, registration and entry append.

All public functions accept the ``InMemoryDB`` so the route layer decides
which store it is working against. Records handed back are deep copies;
the store is only ever changed through ``add_patient`` and ``add_entry``.
"""

from __future__ import annotations

import logging
import uuid

from patientor.db.memory import InMemoryDB
from patientor.models.entry import NewEntry, with_id
from patientor.models.patient import NewPatient, Patient, PublicPatient

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _new_id() -> str:
    return str(uuid.uuid4())


def _to_public(patient: Patient) -> PublicPatient:
    """Strip the national id from a patient record."""
    return PublicPatient.model_validate(patient.model_dump(by_alias=True, exclude={"ssn"}))


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def list_public_patients(db: InMemoryDB) -> list[PublicPatient]:
    """Return every patient, in registration order, without the ``ssn`` field."""
    return [_to_public(p) for p in db.patients.values()]


def get_patient(db: InMemoryDB, patient_id: str) -> Patient | None:
    """Return a single full patient record, or ``None``."""
    patient = db.patients.get(patient_id)
    if patient is None:
        return None
    return patient.model_copy(deep=True)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

def add_patient(db: InMemoryDB, new_patient: NewPatient) -> Patient:
    """Register a new patient under a freshly generated id.

    Entries submitted with the registration get fresh ids too.
    """
    entries = [with_id(entry, _new_id()) for entry in new_patient.entries]
    patient = Patient.model_validate({
        **new_patient.model_dump(by_alias=True, exclude={"entries"}),
        "id": _new_id(),
        "entries": [entry.model_dump(by_alias=True) for entry in entries],
    })
    db.patients[patient.id] = patient
    logger.info("Created patient %s", patient.id)
    return patient.model_copy(deep=True)


def add_entry(db: InMemoryDB, patient_id: str, entry: NewEntry) -> Patient | None:
    """Append *entry* to a patient's history.

    The entry gets a fresh id. Returns the updated record, or ``None`` when
    the patient does not exist, in which case nothing is changed.
    """
    patient = db.patients.get(patient_id)
    if patient is None:
        logger.warning("Entry append for unknown patient %s", patient_id)
        return None

    stored = with_id(entry, _new_id())
    patient.entries.append(stored)
    logger.info("Added %s entry %s to patient %s", stored.type, stored.id, patient_id)
    return patient.model_copy(deep=True)
