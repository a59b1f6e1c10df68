"""
Parsing of untyped request bodies into typed patient and entry models.

Entries are a tagged union. The ``type`` tag is read and checked first; only
the variant it names is then validated, so an unknown tag is reported as such
instead of as a pile of shape errors against whichever variant came closest.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from patientor.models.entry import NEW_ENTRY_VARIANTS, NewEntry
from patientor.models.patient import NewPatient

logger = logging.getLogger(__name__)


class EntryValidationError(Exception):
    """Input did not match its schema.

    ``issues`` is a list of ``{"path": [...], "message": str}`` dicts, one per
    offending field, with paths in wire (camelCase) names.
    """

    def __init__(self, issues: list[dict[str, Any]]):
        self.issues = issues
        super().__init__(f"{len(issues)} validation issue(s)")


def _issue(path: list, message: str) -> dict[str, Any]:
    return {"path": path, "message": message}


def _issues_from(exc: ValidationError) -> list[dict[str, Any]]:
    return [_issue(list(err["loc"]), err["msg"]) for err in exc.errors()]


def _reject(issues: list[dict[str, Any]], what: str) -> EntryValidationError:
    logger.info("Rejected %s: %d issue(s)", what, len(issues))
    return EntryValidationError(issues)


def _not_an_object(obj: Any) -> dict[str, Any]:
    return _issue([], f"Expected an object, received {type(obj).__name__}")


def _drop_id(fields: dict[str, Any]) -> dict[str, Any]:
    # ids are assigned by the server; anything sent by the client is dropped
    return {k: v for k, v in fields.items() if k != "id"}


def _parse_entry(obj: Any) -> tuple[Optional[NewEntry], list[dict[str, Any]]]:
    """Return ``(entry, [])`` or ``(None, issues)`` with paths relative to the entry."""
    if not isinstance(obj, dict):
        return None, [_not_an_object(obj)]
    fields = _drop_id(obj)

    if "type" not in fields:
        return None, [_issue(["type"], "Required")]

    tag = fields["type"]
    variant = NEW_ENTRY_VARIANTS.get(tag) if isinstance(tag, str) else None
    if variant is None:
        expected = " | ".join(f"'{name}'" for name in NEW_ENTRY_VARIANTS)
        return None, [_issue(["type"], f"Unhandled entry type {tag!r}. Expected {expected}")]

    try:
        return variant.model_validate(fields), []
    except ValidationError as exc:
        return None, _issues_from(exc)


def to_new_entry(obj: Any) -> NewEntry:
    """Validate *obj* as a new entry and return the typed variant."""
    entry, issues = _parse_entry(obj)
    if issues:
        raise _reject(issues, "entry")
    return entry


def to_new_patient(obj: Any) -> NewPatient:
    """Validate *obj* as a patient registration.

    Submitted entries go through the same tag-first parsing as appended ones;
    their issues are reported under ``["entries", <index>, ...]``.
    """
    if not isinstance(obj, dict):
        raise _reject([_not_an_object(obj)], "patient")
    fields = _drop_id(obj)
    raw_entries = fields.pop("entries", [])

    issues: list[dict[str, Any]] = []
    patient = None
    try:
        patient = NewPatient.model_validate(fields)
    except ValidationError as exc:
        issues.extend(_issues_from(exc))

    entries = []
    if not isinstance(raw_entries, list):
        issues.append(_issue(["entries"], "Expected a list of entries"))
    else:
        for index, raw in enumerate(raw_entries):
            entry, entry_issues = _parse_entry(raw)
            issues.extend(
                _issue(["entries", index, *i["path"]], i["message"]) for i in entry_issues
            )
            if entry is not None:
                entries.append(entry)

    if issues:
        raise _reject(issues, "patient")
    return patient.model_copy(update={"entries": entries})
