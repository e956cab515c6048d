"""FastAPI routes for report generation and coverage analytics.

- Form analysis (chart suggestions per field)
- Report generation with filters and geographic grouping
- Entity comparison (district vs district, school vs school, ...)
- District/taluka coverage and dashboard counters
"""
from typing import List

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.errors import FormNotFoundError, InvalidComparisonError
from app.core.logging import get_logger, LogTimer
from app.domain.reports import (
    AnalyzeFormRequest,
    CompareRequest,
    ComparisonPayload,
    FieldAnalysis,
    ReportPayload,
    ReportRequest,
)
from app.domain.schools import DashboardStats, DistrictCoverage, TalukaCoverage
from app.infrastructure.data_loader import get_form, load_forms, load_responses, load_schools
from app.services.classifier import analyze_form
from app.services.coverage import dashboard_stats, district_coverage, taluka_coverage
from app.services.reports import build_comparison, build_report

logger = get_logger(__name__)
router = APIRouter()


def _json_response(payload: BaseModel) -> JSONResponse:
    """Serialize a payload with camelCase keys, dropping unset statistics.

    Group statistics are a union of models; dumping the concrete instances
    keeps each group in its own shape.
    """
    return JSONResponse(content=payload.model_dump(mode="json", by_alias=True, exclude_none=True))


def _form_or_404(form_id: str):
    try:
        return get_form(form_id)
    except FormNotFoundError:
        logger.warning(f"Report requested for unknown form {form_id}", extra={"form_id": form_id})
        raise HTTPException(status_code=404, detail="Form not found")


# -----------------
# REPORT ENDPOINTS
# -----------------

@router.post("/admin/reports/analyze-form", response_model=List[FieldAnalysis])
async def analyze_form_fields(req: AnalyzeFormRequest):
    """Classify each field of a form and suggest charts for it."""
    with LogTimer(logger, "analyze_form", form_id=req.form_id):
        form = _form_or_404(req.form_id)
        return analyze_form(form)


@router.post("/admin/reports/generate", response_model=ReportPayload)
async def generate_report(req: ReportRequest):
    """Generate the full analytical report for a form.

    Example:
        POST /admin/reports/generate
        {"formId": "FORM-001", "groupBy": "district", "filters": {"districts": ["Pune"]}}
    """
    with LogTimer(logger, "generate_report", form_id=req.form_id, group_by=req.group_by.value):
        form = _form_or_404(req.form_id)
        responses = load_responses(form.form_id)
        report = build_report(
            form,
            responses,
            filters=req.filters,
            group_by=req.group_by,
            include_charts=req.include_charts,
        )
        return _json_response(report)


@router.post("/admin/reports/compare", response_model=ComparisonPayload)
async def compare_entities(req: CompareRequest):
    """Compare two or more districts, talukas or schools on every chartable field."""
    with LogTimer(logger, "compare_entities", form_id=req.form_id, compare_by=req.compare_by.value):
        form = _form_or_404(req.form_id)
        responses = load_responses(form.form_id)
        try:
            comparison = build_comparison(form, responses, req.compare_by, req.entities)
        except InvalidComparisonError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return _json_response(comparison)


# -----------------
# ANALYTICS ENDPOINTS
# -----------------

@router.get("/admin/dashboard/stats", response_model=DashboardStats)
async def get_dashboard_stats():
    """Totals of schools, forms and responses."""
    return dashboard_stats(load_schools(), load_forms(), load_responses())


@router.get("/admin/analytics/district-wise", response_model=List[DistrictCoverage])
async def get_district_coverage():
    """Schools, responses and completion rate per district."""
    with LogTimer(logger, "district_coverage"):
        return district_coverage(load_schools(), load_responses())


@router.get("/admin/analytics/taluka-wise", response_model=List[TalukaCoverage])
async def get_taluka_coverage():
    """Schools, responses and completion rate per taluka."""
    with LogTimer(logger, "taluka_coverage"):
        return taluka_coverage(load_schools(), load_responses())
