"""Data loading from the JSON document store.

Forms, responses and schools live as JSON arrays in ``settings.data_dir``
(``forms.json``, ``responses.json``, ``schools.json``). Files are read on every
call so that edits to a form are picked up by the next report run.
"""
import json
from pathlib import Path
from typing import List, Optional

from app.core.config import settings
from app.core.errors import FormNotFoundError
from app.core.logging import get_logger
from app.domain.forms import FormDefinition, ResponseRecord
from app.domain.schools import School

logger = get_logger(__name__)

FORMS_FILE = "forms.json"
RESPONSES_FILE = "responses.json"
SCHOOLS_FILE = "schools.json"


def _read_documents(filename: str) -> list:
    """Return the JSON array stored in ``filename``, or [] if the file is missing."""
    path: Path = settings.data_path / filename
    if not path.exists():
        logger.warning(f"Data file not found, treating as empty: {path}")
        return []
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def load_forms() -> List[FormDefinition]:
    return [FormDefinition.model_validate(doc) for doc in _read_documents(FORMS_FILE)]


def get_form(form_id: str) -> FormDefinition:
    """Return the form with ``form_id``.

    Raises:
        FormNotFoundError: If no such form exists
    """
    for form in load_forms():
        if form.form_id == form_id:
            return form
    raise FormNotFoundError(form_id)


def load_responses(form_id: Optional[str] = None) -> List[ResponseRecord]:
    """Return all responses, or only those submitted for ``form_id``."""
    responses = [ResponseRecord.model_validate(doc) for doc in _read_documents(RESPONSES_FILE)]
    if form_id is None:
        return responses
    return [r for r in responses if r.form_id == form_id]


def load_schools() -> List[School]:
    return [School.model_validate(doc) for doc in _read_documents(SCHOOLS_FILE)]
