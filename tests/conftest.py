"""Pytest configuration and shared fixtures."""
import json
import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from app.domain.forms import FieldDefinition, FormDefinition, ResponseRecord
from app.domain.schools import School


FORM_DOC = {
    "formId": "FORM-001",
    "formTitle": "School Infrastructure Survey",
    "fields": [
        {"fieldId": "field_1", "fieldLabel": "Number of Classrooms", "fieldType": "number"},
        {"fieldId": "field_2", "fieldLabel": "Drinking Water Source", "fieldType": "radio",
         "options": ["Tap", "Borewell", "Tanker"]},
        {"fieldId": "field_3", "fieldLabel": "Facilities Available", "fieldType": "checkbox",
         "options": ["Library", "Computer Lab", "Playground"]},
        {"fieldId": "field_4", "fieldLabel": "Last Inspection Date", "fieldType": "date"},
        {"fieldId": "field_5", "fieldLabel": "Headmaster Remarks", "fieldType": "textarea"},
        {"fieldId": "field_6", "fieldLabel": "Building Photo", "fieldType": "file"},
        {"fieldId": "field_7", "fieldLabel": "Total Enrolment", "fieldType": "phone"},
    ],
    "createdBy": "admin",
}

RESPONSE_DOCS = [
    {
        "responseId": "RESP-0001", "formId": "FORM-001", "udiseCode": "27250100101",
        "schoolName": "ZP School Hadapsar", "districtName": "Pune", "talukaName": "Haveli",
        "responses": {
            "field_1": "12", "field_2": "Tap", "field_3": ["Library", "Playground"],
            "field_4": "2024-06-12", "field_5": "Roof needs repair",
            "field_6": {"url": "https://files.example.org/hadapsar.jpg", "fileName": "hadapsar.jpg"},
            "field_7": "420",
        },
        "submittedAt": "2024-07-01T09:30:00Z", "submittedBy": "27250100101",
    },
    {
        "responseId": "RESP-0002", "formId": "FORM-001", "udiseCode": "27250100102",
        "schoolName": "ZP School Wagholi", "districtName": "Pune", "talukaName": "Haveli",
        "responses": {
            "field_1": 8, "field_2": "Borewell", "field_3": ["Library"],
            "field_4": "2024-05-20", "field_7": 310,
        },
        "submittedAt": "2024-07-03T11:00:00Z", "submittedBy": "27250100102",
    },
    {
        "responseId": "RESP-0003", "formId": "FORM-001", "udiseCode": "27200300301",
        "schoolName": "ZP School Sinnar", "districtName": "Nashik", "talukaName": "Sinnar",
        "responses": {
            "field_1": "6", "field_2": "Tap", "field_3": ["Playground", "Computer Lab"],
            "field_4": "", "field_7": "not recorded",
        },
        "submittedAt": "2024-08-15T08:45:00Z", "submittedBy": "27200300301",
    },
]

SCHOOL_DOCS = [
    {"udiseCode": "27250100101", "schoolName": "ZP School Hadapsar", "districtName": "Pune", "talukaName": "Haveli"},
    {"udiseCode": "27250100102", "schoolName": "ZP School Wagholi", "districtName": "Pune", "talukaName": "Haveli"},
    {"udiseCode": "27250200201", "schoolName": "ZP School Baramati", "districtName": "Pune", "talukaName": "Baramati"},
    {"udiseCode": "27200300301", "schoolName": "ZP School Sinnar", "districtName": "Nashik", "talukaName": "Sinnar"},
    {"udiseCode": "27200300302", "schoolName": "ZP School Igatpuri", "districtName": "Nashik", "talukaName": "Igatpuri"},
]


def make_field(field_type: str, label: str = "Score", field_id: str = "f1", options=None) -> FieldDefinition:
    """Build a field definition for tests."""
    return FieldDefinition(field_id=field_id, field_label=label, field_type=field_type, options=options or [])


def make_response(value=None, district=None, taluka=None, school=None, field_id: str = "f1", **extra) -> ResponseRecord:
    """Build a response carrying ``value`` for ``field_id`` (omitted when value is None)."""
    responses = {} if value is None else {field_id: value}
    return ResponseRecord(
        district_name=district,
        taluka_name=taluka,
        school_name=school,
        responses=responses,
        **extra,
    )


@pytest.fixture
def sample_form() -> FormDefinition:
    return FormDefinition.model_validate(FORM_DOC)


@pytest.fixture
def sample_responses() -> list:
    return [ResponseRecord.model_validate(doc) for doc in RESPONSE_DOCS]


@pytest.fixture
def sample_schools() -> list:
    return [School.model_validate(doc) for doc in SCHOOL_DOCS]


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Temporary JSON data store holding the sample form, responses and schools."""
    from app.core.config import settings

    (tmp_path / "forms.json").write_text(json.dumps([FORM_DOC]), encoding="utf-8")
    (tmp_path / "responses.json").write_text(json.dumps(RESPONSE_DOCS), encoding="utf-8")
    (tmp_path / "schools.json").write_text(json.dumps(SCHOOL_DOCS), encoding="utf-8")
    monkeypatch.setattr(settings, "data_dir", str(tmp_path))
    return tmp_path


@pytest.fixture
def test_client(data_dir):
    """FastAPI test client backed by the temporary data store."""
    from main import app
    return TestClient(app)
