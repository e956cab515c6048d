"""Domain models for forms and submitted responses.

Forms and responses arrive as JSON documents with camelCase keys; the models
expose snake_case attributes and accept either spelling.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class FieldDefinition(CamelModel):
    """A single question on a form.

    ``field_type`` is kept as an open string: unknown types are still
    classified (see ``app.services.classifier``).
    """
    field_id: str
    field_label: str
    field_type: str
    options: List[str] = Field(default_factory=list)
    required: bool = False
    help_text: Optional[str] = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "fieldId": "field_1",
                "fieldLabel": "Number of classrooms",
                "fieldType": "number",
                "options": [],
                "required": True
            }
        }


class FormDefinition(CamelModel):
    """A form and its ordered fields."""
    form_id: str
    form_title: str
    form_description: Optional[str] = None
    fields: List[FieldDefinition] = Field(default_factory=list)
    is_active: bool = True
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ResponseRecord(CamelModel):
    """One school's submission for a form.

    ``responses`` maps field id to the raw submitted value: a scalar, a list
    of strings (multi-select) or a file object carrying ``url``/``fileName``.
    """
    response_id: Optional[str] = None
    form_id: Optional[str] = None
    udise_code: Optional[str] = None
    school_name: Optional[str] = None
    district_name: Optional[str] = None
    taluka_name: Optional[str] = None
    responses: Dict[str, Any] = Field(default_factory=dict)
    submitted_at: Optional[datetime] = None
    submitted_by: Optional[str] = None
    status: str = "submitted"


# ----------------
# RESPONSE VALUES
# ----------------

@dataclass(frozen=True)
class Scalar:
    """A single string, number or boolean answer."""
    value: Union[str, int, float, bool]


@dataclass(frozen=True)
class MultiSelect:
    """Answer to a multi-select (checkbox) question."""
    items: List[Any]


@dataclass(frozen=True)
class FileRef:
    """Reference to an uploaded file."""
    url: Optional[str]
    file_name: Optional[str]
    extra: Dict[str, Any] = field(default_factory=dict)


ResponseValue = Union[Scalar, MultiSelect, FileRef]


def parse_value(raw: Any) -> Optional[ResponseValue]:
    """Wrap a raw submitted value in its response variant.

    Returns None for values that are absent, null or the empty string, and for
    objects that are not file uploads (no ``url``); callers drop those without
    error.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, (list, tuple)):
        return MultiSelect(items=list(raw))
    if isinstance(raw, dict):
        if "url" not in raw:
            return None
        extra = {k: v for k, v in raw.items() if k not in ("url", "fileName")}
        return FileRef(url=raw.get("url"), file_name=raw.get("fileName"), extra=extra)
    return Scalar(value=raw)
