"""Domain errors raised by the data store and the report orchestrator.

The aggregation engine itself never raises for missing or malformed values;
these errors cover requests that cannot be served at all.
"""


class AppError(Exception):
    """Base class for intended, meaningful failures."""


class FormNotFoundError(AppError):
    """Raised when a report is requested for a form id that does not exist."""

    def __init__(self, form_id: str):
        super().__init__(f"Form not found: {form_id}")
        self.form_id = form_id


class InvalidComparisonError(AppError):
    """Raised when a comparison request has no dimension to compare on."""
