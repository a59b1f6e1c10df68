"""
Plain-text rendering of patient records.

``render_entry_details`` switches on the entry tag. The final branch hands the
entry to ``assert_never``: once every variant of ``Entry`` has its own branch
the type checker narrows the value there to ``NoReturn``, so adding a variant
without a branch is a type error, and at runtime it raises.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn, Optional

from patientor.models.diagnosis import Diagnosis
from patientor.models.entry import Entry
from patientor.models.patient import Patient


class UnhandledEntryTypeError(Exception):
    pass


def assert_never(value: NoReturn) -> NoReturn:
    raise UnhandledEntryTypeError(
        f"Unhandled discriminated union member: {_describe(value)}"
    )


def _describe(value: Any) -> str:
    if hasattr(value, "model_dump"):
        return json.dumps(value.model_dump(mode="json", by_alias=True))
    return repr(value)


def render_entry_details(entry: Entry) -> str:
    if entry.type == "HealthCheck":
        return f"Health Check Rating: {int(entry.health_check_rating)}"
    elif entry.type == "OccupationalHealthcare":
        lines = [f"Employer: {entry.employer_name}"]
        if entry.sick_leave:
            lines.append(
                f"Sick Leave: {entry.sick_leave.start_date} - {entry.sick_leave.end_date}"
            )
        return "\n".join(lines)
    elif entry.type == "Hospital":
        return f"Discharge: {entry.discharge.date} - {entry.discharge.criteria}"
    else:
        return assert_never(entry)


def _diagnosis_line(code: str, diagnoses: dict[str, Diagnosis]) -> str:
    # codes are soft references; unknown ones are shown bare
    diagnosis: Optional[Diagnosis] = diagnoses.get(code)
    return f"  {code} {diagnosis.name}" if diagnosis else f"  {code}"


def render_entries(entries: list[Entry], diagnoses: dict[str, Diagnosis]) -> str:
    if not entries:
        return "No entries"

    blocks = []
    for entry in entries:
        lines = [entry.date, entry.description]
        if entry.diagnosis_codes:
            lines.append("Diagnosis codes:")
            lines.extend(_diagnosis_line(code, diagnoses) for code in entry.diagnosis_codes)
        lines.append(render_entry_details(entry))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def render_patient(patient: Patient, diagnoses: dict[str, Diagnosis]) -> str:
    header = [
        patient.name,
        f"SSN: {patient.ssn}",
        f"Occupation: {patient.occupation}",
        f"Gender: {patient.gender.value}",
        f"Date of Birth: {patient.date_of_birth}",
        "",
        "Entries",
    ]
    return "\n".join(header) + "\n" + render_entries(patient.entries, diagnoses)
