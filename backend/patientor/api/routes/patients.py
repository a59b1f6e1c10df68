"""
Patient API routes.

Endpoints:
    GET  /patients                 — List patients without national ids
    POST /patients                 — Register a new patient
    GET  /patients/{id}            — Get a full patient record
    POST /patients/{id}/entries    — Append a validated entry to a patient
    GET  /patients/{id}/summary    — Plain-text rendering of a patient record
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from patientor.db.memory import InMemoryDB, get_db
from patientor.models.patient import Patient, PublicPatient
from patientor.api.middleware.audit import log_audit
from patientor.services import patient_service
from patientor.services.entry_renderer import render_patient
from patientor.services.validation import to_new_entry, to_new_patient

router = APIRouter()


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Malformed JSON body",
        )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Patient not found",
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/patients",
    response_model=list[PublicPatient],
    response_model_exclude_none=True,
)
async def list_patients(db: InMemoryDB = Depends(get_db)):
    """List all patients. The ``ssn`` field is never included."""
    return patient_service.list_public_patients(db)


@router.post(
    "/patients",
    response_model=Patient,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def register_patient(request: Request, db: InMemoryDB = Depends(get_db)):
    """Register a new patient. Responds 400 with field issues on bad input."""
    new_patient = to_new_patient(await _read_json(request))
    patient = patient_service.add_patient(db, new_patient)

    log_audit(
        action="create",
        resource="patient",
        resource_id=patient.id,
        details="Patient registered",
        request=request,
    )

    return patient


@router.get(
    "/patients/{patient_id}",
    response_model=Patient,
    response_model_exclude_none=True,
)
async def get_patient(patient_id: str, request: Request, db: InMemoryDB = Depends(get_db)):
    """Get a full patient record, entries included."""
    patient = patient_service.get_patient(db, patient_id)
    if patient is None:
        raise _not_found()

    log_audit(
        action="read",
        resource="patient",
        resource_id=patient_id,
        details="Patient record accessed",
        request=request,
    )

    return patient


@router.post(
    "/patients/{patient_id}/entries",
    response_model=Patient,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def add_entry(patient_id: str, request: Request, db: InMemoryDB = Depends(get_db)):
    """Validate the body as an entry and append it to the patient.

    Validation runs first: a malformed entry is a 400 even for an unknown
    patient, and a rejected entry never touches the store.
    """
    entry = to_new_entry(await _read_json(request))

    patient = patient_service.add_entry(db, patient_id, entry)
    if patient is None:
        raise _not_found()

    log_audit(
        action="update",
        resource="patient",
        resource_id=patient_id,
        details=f"{entry.type} entry added",
        request=request,
    )

    return patient


@router.get("/patients/{patient_id}/summary", response_class=PlainTextResponse)
async def patient_summary(patient_id: str, request: Request, db: InMemoryDB = Depends(get_db)):
    """Render the patient record and its entries as plain text."""
    patient = patient_service.get_patient(db, patient_id)
    if patient is None:
        raise _not_found()

    log_audit(
        action="read",
        resource="patient",
        resource_id=patient_id,
        details="Patient summary rendered",
        request=request,
    )

    return render_patient(patient, db.diagnoses)
