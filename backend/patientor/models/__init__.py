from patientor.models.diagnosis import Diagnosis
from patientor.models.entry import (
    Discharge,
    Entry,
    HealthCheckEntry,
    HealthCheckRating,
    HospitalEntry,
    NewEntry,
    NewHealthCheckEntry,
    NewHospitalEntry,
    NewOccupationalHealthcareEntry,
    OccupationalHealthcareEntry,
    SickLeave,
)
from patientor.models.patient import Gender, NewPatient, Patient, PublicPatient

__all__ = [
    "Diagnosis",
    "Discharge",
    "Entry",
    "Gender",
    "HealthCheckEntry",
    "HealthCheckRating",
    "HospitalEntry",
    "NewEntry",
    "NewHealthCheckEntry",
    "NewHospitalEntry",
    "NewOccupationalHealthcareEntry",
    "NewPatient",
    "OccupationalHealthcareEntry",
    "Patient",
    "PublicPatient",
    "SickLeave",
]
