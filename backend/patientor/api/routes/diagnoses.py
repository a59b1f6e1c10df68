"""
Diagnosis API routes.

Endpoints:
    GET /diagnoses — List the diagnosis reference table
"""

from fastapi import APIRouter, Depends

from patientor.db.memory import InMemoryDB, get_db
from patientor.models.diagnosis import Diagnosis
from patientor.services import diagnosis_service

router = APIRouter()


@router.get("/diagnoses", response_model=list[Diagnosis], response_model_exclude_none=True)
async def list_diagnoses(db: InMemoryDB = Depends(get_db)):
    return diagnosis_service.list_diagnoses(db)
