"""
In-process patient database.

One ``InMemoryDB`` lives on ``app.state`` for the lifetime of the application.
Route handlers receive it through the ``get_db`` dependency and hand it to the
service layer, which owns every read and mutation.
"""

import logging
from typing import Optional

from fastapi import Request

from patientor.data.diagnoses import DIAGNOSES
from patientor.data.patients import PATIENTS
from patientor.models.diagnosis import Diagnosis
from patientor.models.patient import Patient

logger = logging.getLogger(__name__)


class InMemoryDB:
    def __init__(
        self,
        patients: Optional[list[Patient]] = None,
        diagnoses: Optional[list[Diagnosis]] = None,
    ):
        # dicts keep insertion order, which is the listing order
        self.patients: dict[str, Patient] = {p.id: p for p in patients or []}
        self.diagnoses: dict[str, Diagnosis] = {d.code: d for d in diagnoses or []}

    @classmethod
    def seeded(cls) -> "InMemoryDB":
        """Build a database holding the demo patients and reference diagnoses."""
        db = cls(
            patients=[Patient.model_validate(p) for p in PATIENTS],
            diagnoses=[Diagnosis.model_validate(d) for d in DIAGNOSES],
        )
        logger.info(
            "Seeded database with %d patients and %d diagnoses",
            len(db.patients),
            len(db.diagnoses),
        )
        return db


def get_db(request: Request) -> InMemoryDB:
    return request.app.state.db
