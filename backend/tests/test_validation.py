"""
Entry and patient input validation tests.

Covers the tag-first dispatch of ``to_new_entry`` and the field-level
issue format shared by entries and patients.
"""

import pytest

from patientor.models import (
    Gender,
    HealthCheckRating,
    NewHealthCheckEntry,
    NewHospitalEntry,
    NewOccupationalHealthcareEntry,
)
from patientor.services.validation import (
    EntryValidationError,
    to_new_entry,
    to_new_patient,
)


def _paths(exc_info) -> list[list]:
    return [issue["path"] for issue in exc_info.value.issues]


class TestValidVariants:
    """Well-formed input for each variant is accepted as that variant"""

    def test_health_check(self, health_check_payload):
        entry = to_new_entry(health_check_payload)

        assert isinstance(entry, NewHealthCheckEntry)
        assert entry.type == "HealthCheck"
        assert entry.health_check_rating is HealthCheckRating.HEALTHY
        assert entry.description == "check"
        assert entry.diagnosis_codes is None

    def test_occupational_healthcare(self, occupational_payload):
        entry = to_new_entry(occupational_payload)

        assert isinstance(entry, NewOccupationalHealthcareEntry)
        assert entry.employer_name == "ACME"
        assert entry.sick_leave.start_date == "2024-02-10"
        assert entry.sick_leave.end_date == "2024-02-20"
        assert entry.diagnosis_codes == ["M51.2"]

    def test_occupational_healthcare_without_sick_leave(self, occupational_payload):
        del occupational_payload["sickLeave"]
        entry = to_new_entry(occupational_payload)

        assert entry.sick_leave is None

    def test_hospital(self, hospital_payload):
        entry = to_new_entry(hospital_payload)

        assert isinstance(entry, NewHospitalEntry)
        assert entry.discharge.date == "2024-03-15"
        assert entry.discharge.criteria == "Thumb has healed."

    def test_client_supplied_id_is_dropped(self, hospital_payload):
        hospital_payload["id"] = "client-chosen"
        entry = to_new_entry(hospital_payload)

        assert not hasattr(entry, "id")

    def test_serialises_with_wire_names(self, occupational_payload):
        entry = to_new_entry(occupational_payload)
        dumped = entry.model_dump(by_alias=True, exclude_none=True)

        assert dumped == occupational_payload


class TestDiscriminant:
    """The type tag is checked before any shape validation"""

    def test_missing_tag(self, health_check_payload):
        del health_check_payload["type"]
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(health_check_payload)

        assert exc_info.value.issues == [{"path": ["type"], "message": "Required"}]

    @pytest.mark.parametrize("tag", ["Checkup", "healthcheck", "", 3, None, ["Hospital"]])
    def test_unknown_tag_is_unhandled_variant(self, hospital_payload, tag):
        hospital_payload["type"] = tag
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(hospital_payload)

        issues = exc_info.value.issues
        assert len(issues) == 1
        assert issues[0]["path"] == ["type"]
        assert "Unhandled entry type" in issues[0]["message"]
        assert "'Hospital'" in issues[0]["message"]

    def test_tag_selects_shape(self, hospital_payload):
        # a hospital-shaped body tagged HealthCheck is judged as a HealthCheck
        hospital_payload["type"] = "HealthCheck"
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(hospital_payload)

        paths = _paths(exc_info)
        assert ["healthCheckRating"] in paths
        assert ["discharge"] in paths

    @pytest.mark.parametrize("value", ["text", 42, None, ["a"]])
    def test_non_object_input(self, value):
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(value)

        assert _paths(exc_info) == [[]]


class TestRequiredFields:
    """Missing variant fields are reported by name"""

    def test_hospital_without_discharge(self, hospital_payload):
        del hospital_payload["discharge"]
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(hospital_payload)

        assert ["discharge"] in _paths(exc_info)

    def test_hospital_discharge_without_criteria(self, hospital_payload):
        del hospital_payload["discharge"]["criteria"]
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(hospital_payload)

        assert _paths(exc_info) == [["discharge", "criteria"]]

    def test_occupational_without_employer(self, occupational_payload):
        del occupational_payload["employerName"]
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(occupational_payload)

        assert ["employerName"] in _paths(exc_info)

    def test_health_check_without_rating(self, health_check_payload):
        del health_check_payload["healthCheckRating"]
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(health_check_payload)

        assert ["healthCheckRating"] in _paths(exc_info)

    @pytest.mark.parametrize("field", ["description", "date", "specialist"])
    def test_common_fields_required(self, health_check_payload, field):
        del health_check_payload[field]
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(health_check_payload)

        assert [field] in _paths(exc_info)

    def test_every_issue_has_a_message(self):
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry({"type": "Hospital"})

        assert len(exc_info.value.issues) == 4
        assert all(issue["message"] for issue in exc_info.value.issues)


class TestFieldFormats:
    """Types and formats are enforced per variant"""

    @pytest.mark.parametrize("value", ["01-01-2024", "2024/01/01", "2024-02-30", "2024-1-1", "yesterday", 20240101])
    def test_date_must_be_iso_calendar_date(self, health_check_payload, value):
        health_check_payload["date"] = value
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(health_check_payload)

        assert _paths(exc_info) == [["date"]]

    def test_sick_leave_dates_checked(self, occupational_payload):
        occupational_payload["sickLeave"]["endDate"] = "soon"
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(occupational_payload)

        assert _paths(exc_info) == [["sickLeave", "endDate"]]

    @pytest.mark.parametrize("value", [4, -1, "0", 1.0, True, None])
    def test_rating_must_be_integer_in_range(self, health_check_payload, value):
        health_check_payload["healthCheckRating"] = value
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(health_check_payload)

        assert _paths(exc_info) == [["healthCheckRating"]]

    @pytest.mark.parametrize("rating", [0, 1, 2, 3])
    def test_all_ratings_accepted(self, health_check_payload, rating):
        health_check_payload["healthCheckRating"] = rating
        assert to_new_entry(health_check_payload).health_check_rating == rating

    def test_numbers_are_not_strings(self, health_check_payload):
        health_check_payload["specialist"] = 7
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(health_check_payload)

        assert _paths(exc_info) == [["specialist"]]

    def test_diagnosis_codes_must_be_strings(self, hospital_payload):
        hospital_payload["diagnosisCodes"] = ["S62.5", 12]
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(hospital_payload)

        assert _paths(exc_info) == [["diagnosisCodes", 1]]


class TestNoMixedVariants:
    """Fields belonging to another variant are rejected"""

    def test_health_check_with_discharge(self, health_check_payload):
        health_check_payload["discharge"] = {"date": "2024-01-02", "criteria": "ok"}
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(health_check_payload)

        assert _paths(exc_info) == [["discharge"]]

    def test_hospital_with_employer(self, hospital_payload):
        hospital_payload["employerName"] = "ACME"
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(hospital_payload)

        assert _paths(exc_info) == [["employerName"]]


class TestNewPatient:
    """Patient registration input"""

    def _payload(self, **overrides):
        payload = {
            "name": "Jane Doe",
            "dateOfBirth": "1990-05-17",
            "ssn": "170590-123A",
            "gender": "female",
            "occupation": "Engineer",
        }
        payload.update(overrides)
        return payload

    def test_valid_patient_defaults_to_no_entries(self):
        patient = to_new_patient(self._payload())

        assert patient.gender is Gender.FEMALE
        assert patient.date_of_birth == "1990-05-17"
        assert patient.entries == []

    def test_unknown_gender(self):
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_patient(self._payload(gender="robot"))

        assert _paths(exc_info) == [["gender"]]

    def test_bad_birth_date(self):
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_patient(self._payload(dateOfBirth="17.5.1990"))

        assert _paths(exc_info) == [["dateOfBirth"]]

    def test_missing_fields(self):
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_patient({"name": "Jane Doe"})

        assert sorted(p[0] for p in _paths(exc_info)) == ["dateOfBirth", "gender", "occupation", "ssn"]

    def test_initial_entries_are_validated(self):
        entries = [{"type": "Hospital", "description": "x", "date": "2020-01-01", "specialist": "y"}]
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_patient(self._payload(entries=entries))

        # wire paths, without the variant name pydantic uses internally
        assert _paths(exc_info) == [["entries", 0, "discharge"]]

    def test_initial_entries_use_tag_first_parsing(self, hospital_payload):
        entries = [hospital_payload, {**hospital_payload, "type": "Checkup"}]
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_patient(self._payload(entries=entries))

        issues = exc_info.value.issues
        assert [issue["path"] for issue in issues] == [["entries", 1, "type"]]
        assert "Unhandled entry type" in issues[0]["message"]

    def test_initial_entries_drop_client_ids(self, hospital_payload):
        patient = to_new_patient(self._payload(entries=[{**hospital_payload, "id": "client-chosen"}]))

        assert len(patient.entries) == 1
        assert isinstance(patient.entries[0], NewHospitalEntry)
        assert not hasattr(patient.entries[0], "id")

    def test_entries_must_be_a_list(self):
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_patient(self._payload(entries={"type": "Hospital"}))

        assert _paths(exc_info) == [["entries"]]

    def test_patient_and_entry_issues_reported_together(self):
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_patient(self._payload(gender="robot", entries=["not an entry"]))

        assert _paths(exc_info) == [["gender"], ["entries", 0]]


class TestWireNames:
    """Only camelCase field names are accepted on input"""

    def test_snake_case_entry_field_rejected(self, health_check_payload):
        health_check_payload["health_check_rating"] = health_check_payload.pop("healthCheckRating")
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(health_check_payload)

        paths = _paths(exc_info)
        assert ["healthCheckRating"] in paths
        assert ["health_check_rating"] in paths

    def test_snake_case_nested_field_rejected(self, occupational_payload):
        occupational_payload["sickLeave"] = {"start_date": "2024-02-10", "endDate": "2024-02-20"}
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_entry(occupational_payload)

        assert ["sickLeave", "start_date"] in _paths(exc_info)

    def test_snake_case_patient_field_rejected(self):
        payload = {
            "name": "Jane Doe",
            "date_of_birth": "1990-05-17",
            "ssn": "170590-123A",
            "gender": "female",
            "occupation": "Engineer",
        }
        with pytest.raises(EntryValidationError) as exc_info:
            to_new_patient(payload)

        assert sorted(_paths(exc_info)) == [["dateOfBirth"], ["date_of_birth"]]
