"""Response aggregator: groups submitted values by geography and summarizes them.

Aggregation is permissive. Missing, null and empty values are dropped, as are
numeric answers that do not parse, so a report always renders whatever data
is usable instead of failing.
"""
import math
from typing import Callable, Dict, List, Optional, Sequence

from app.domain.forms import FieldDefinition, FileRef, MultiSelect, ResponseRecord, ResponseValue, Scalar, parse_value
from app.domain.reports import (
    AggregatedField,
    BreakdownItem,
    CategoricalGroupStats,
    DataType,
    DateGroupStats,
    GroupBy,
    GroupStatsVariant,
    NumericGroupStats,
)
from app.services.classifier import classify
from app.services.statistics import format_pct, describe

OVERALL_LABEL = "Overall"
UNKNOWN_LABEL = "Unknown"


# ----------------
# GROUPING
# ----------------

def group_key(response: ResponseRecord, group_by: GroupBy) -> str:
    """Label of the group a response belongs to."""
    if group_by == GroupBy.NONE:
        return OVERALL_LABEL
    location = {
        GroupBy.DISTRICT: response.district_name,
        GroupBy.TALUKA: response.taluka_name,
        GroupBy.SCHOOL: response.school_name,
    }[group_by]
    if location is None or not str(location).strip():
        return UNKNOWN_LABEL
    return location


def bucket_values(
    responses: Sequence[ResponseRecord],
    field_id: str,
    group_by: GroupBy,
) -> Dict[str, List[ResponseValue]]:
    """Collect each response's value for ``field_id`` under its group label.

    Groups keep first-seen order, values keep arrival order.
    """
    groups: Dict[str, List[ResponseValue]] = {}
    for response in responses:
        value = parse_value(response.responses.get(field_id))
        if value is None:
            continue
        groups.setdefault(group_key(response, group_by), []).append(value)
    return groups


# ----------------
# VALUE COERCION
# ----------------

def to_number(value: ResponseValue) -> Optional[float]:
    """Numeric reading of a value, or None when it is not a finite number.

    Blank (whitespace-only) answers are not read as zero.
    """
    if not isinstance(value, Scalar):
        return None
    raw = value.value
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, (int, float)):
        number = float(raw)
    else:
        text = str(raw).strip()
        # float() also accepts digit separators such as "1_000"
        if "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def category_keys(value: ResponseValue) -> List[str]:
    """Bucket keys a value contributes to a categorical breakdown."""
    if isinstance(value, MultiSelect):
        return [str(item).strip() for item in value.items]
    if isinstance(value, FileRef):
        return [str(value.file_name or value.url or "").strip()]
    raw = value.value
    if isinstance(raw, bool):
        return ["true" if raw else "false"]
    return [str(raw).strip()]


# ----------------
# PER-TYPE STATISTICS
# ----------------

def numeric_stats(label: str, values: List[ResponseValue]) -> NumericGroupStats:
    numbers = [n for n in (to_number(v) for v in values) if n is not None]
    if not numbers:
        return NumericGroupStats(label=label, value=0)
    stats = describe(numbers)
    return NumericGroupStats(label=label, value=stats["avg"], **stats)


def categorical_stats(label: str, values: List[ResponseValue]) -> CategoricalGroupStats:
    """Option counts for one group.

    The breakdown follows first-seen option order. ``mostCommon`` is the
    option with the highest count; on a tie the option seen first wins.
    """
    counts: Dict[str, int] = {}
    for value in values:
        for key in category_keys(value):
            counts[key] = counts.get(key, 0) + 1

    total = sum(counts.values())
    breakdown = [
        BreakdownItem(name=name, value=count, percentage=format_pct(count / total * 100))
        for name, count in counts.items()
    ]
    most_common = max(counts, key=counts.get) if counts else ""
    return CategoricalGroupStats(label=label, value=total, breakdown=breakdown, most_common=most_common)


def date_stats(label: str, values: List[ResponseValue]) -> DateGroupStats:
    # submission counts only; no calendar binning
    return DateGroupStats(label=label, value=len(values), count=len(values))


_GROUP_STATS: Dict[DataType, Callable[[str, List[ResponseValue]], GroupStatsVariant]] = {
    DataType.NUMERIC: numeric_stats,
    DataType.CATEGORICAL: categorical_stats,
    DataType.BOOLEAN: categorical_stats,
    DataType.DATE: date_stats,
}


def aggregate(
    responses: Sequence[ResponseRecord],
    field: FieldDefinition,
    group_by: GroupBy = GroupBy.NONE,
) -> AggregatedField:
    """Aggregate one field's responses per group.

    Args:
        responses: Submitted responses for the form
        field: Field to aggregate
        group_by: Geographic dimension to group by

    Returns:
        AggregatedField whose ``data`` holds one entry per group in first-seen
        order; empty for non-aggregatable fields or when no value survives.
    """
    analysis = classify(field)
    result = AggregatedField(
        field_id=field.field_id,
        field_label=field.field_label,
        data_type=analysis.detected_data_type,
    )
    if not analysis.is_aggregatable:
        return result

    compute = _GROUP_STATS[analysis.detected_data_type]
    groups = bucket_values(responses, field.field_id, GroupBy(group_by))
    result.data = [compute(label, values) for label, values in groups.items()]
    return result
