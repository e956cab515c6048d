"""Report orchestration: runs the aggregation engine over a form's responses.

Builds the two payloads served by the report routes:

- a full report, one visualization per chartable field plus an executive
  summary of key findings;
- an entity comparison, each field restricted to the requested districts,
  talukas or schools.
"""
import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from app.core.config import settings
from app.core.errors import InvalidComparisonError
from app.core.logging import get_logger
from app.domain.forms import FormDefinition, ResponseRecord
from app.domain.reports import (
    ComparisonField,
    ComparisonPayload,
    GroupBy,
    ReportFilters,
    ReportPayload,
    ReportSummary,
    Visualization,
)
from app.services.aggregation import aggregate, group_key
from app.services.classifier import classify, default_chart
from app.services.comparison import filter_to_entities, generate_comparison_insights
from app.services.insights import collect_key_findings, generate_insights

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def new_report_id() -> str:
    return f"{settings.report_id_prefix}-{int(time.time() * 1000)}"


# ----------------
# FILTERING
# ----------------

def filter_responses(responses: Sequence[ResponseRecord], filters: ReportFilters) -> List[ResponseRecord]:
    """Apply report filters to responses.

    Args:
        responses: Responses to filter
        filters: Date range (inclusive, applied only when both ends are set)
            and district/taluka/school membership lists

    Returns:
        Responses matching every active filter, in their original order
    """
    out = list(responses)

    date_range = filters.date_range
    if date_range and date_range.start and date_range.end:
        start, end = _as_utc(date_range.start), _as_utc(date_range.end)
        out = [r for r in out if r.submitted_at and start <= _as_utc(r.submitted_at) <= end]
    if filters.districts:
        out = [r for r in out if r.district_name in filters.districts]
    if filters.talukas:
        out = [r for r in out if r.taluka_name in filters.talukas]
    if filters.schools:
        out = [r for r in out if r.school_name in filters.schools]

    return out


# ----------------
# REPORTS
# ----------------

def build_report(
    form: FormDefinition,
    responses: Sequence[ResponseRecord],
    filters: Optional[ReportFilters] = None,
    group_by: GroupBy = GroupBy.NONE,
    include_charts: bool = True,
) -> ReportPayload:
    """Generate the full report for a form.

    A visualization is included for every aggregatable field that has data;
    the summary collects all of their key findings in field order. A form
    without usable responses yields a report with no visualizations.
    """
    filters = filters or ReportFilters()
    selected = filter_responses(responses, filters)
    log = get_logger(__name__, {"form_id": form.form_id})

    visualizations: List[Visualization] = []
    if include_charts:
        for field in form.fields:
            analysis = classify(field)
            if not analysis.is_aggregatable:
                log.debug(f"Skipping non-aggregatable field {field.field_id} ({field.field_type})")
                continue

            aggregated = aggregate(selected, field, group_by)
            if not aggregated.data:
                log.debug(f"Skipping field {field.field_id}: no usable values")
                continue

            visualizations.append(Visualization(
                field_id=field.field_id,
                field_label=field.field_label,
                chart_type=default_chart(analysis),
                data=aggregated.data,
                insights=generate_insights(aggregated),
            ))

    report = ReportPayload(
        report_id=new_report_id(),
        generated_at=datetime.now(timezone.utc),
        form_title=form.form_title,
        response_count=len(selected),
        applied_filters=filters,
        visualizations=visualizations,
        summary=ReportSummary(
            overview=f"Analysis of {len(selected)} responses for {form.form_title}.",
            key_findings=collect_key_findings([v.insights for v in visualizations]),
        ),
    )
    log.info(
        f"Report {report.report_id} built with {len(visualizations)} visualizations",
        extra={"report_id": report.report_id, "response_count": len(selected), "group_by": GroupBy(group_by).value},
    )
    return report


def build_comparison(
    form: FormDefinition,
    responses: Sequence[ResponseRecord],
    compare_by: GroupBy,
    entities: Sequence[str],
) -> ComparisonPayload:
    """Compare the given entities field by field.

    Each field is aggregated along ``compare_by`` and then restricted to the
    requested entity labels, so unrelated groups never enter the comparison.

    Raises:
        InvalidComparisonError: If ``compare_by`` is ``none``
    """
    compare_by = GroupBy(compare_by)
    if compare_by == GroupBy.NONE:
        raise InvalidComparisonError("compareBy must be one of district, taluka or school")

    wanted = set(entities)
    selected = [r for r in responses if group_key(r, compare_by) in wanted]

    fields: List[ComparisonField] = []
    for field in form.fields:
        analysis = classify(field)
        if not analysis.is_aggregatable:
            continue

        aggregated = filter_to_entities(aggregate(selected, field, compare_by), entities)
        if not aggregated.data:
            continue

        fields.append(ComparisonField(
            field_id=field.field_id,
            field_label=field.field_label,
            chart_type=default_chart(analysis),
            data=aggregated.data,
            insights=generate_comparison_insights(aggregated),
        ))

    logger.info(
        f"Comparison of {len(entities)} entities built with {len(fields)} fields",
        extra={"form_id": form.form_id, "compare_by": compare_by.value},
    )
    return ComparisonPayload(
        title=f"Comparison: {' vs '.join(entities)}",
        generated_at=datetime.now(timezone.utc),
        fields=fields,
    )
