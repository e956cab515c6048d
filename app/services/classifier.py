"""Field classifier: maps form field definitions to data categories and charts."""
from typing import Dict, List, Tuple

from app.domain.forms import FieldDefinition, FormDefinition
from app.domain.reports import ChartKind, DataType, FieldAnalysis


# fieldType -> (data type, suggested charts, aggregatable); first chart is the default
_TYPE_RULES: Dict[DataType, Tuple[frozenset, List[ChartKind], bool]] = {
    DataType.NUMERIC: (
        frozenset({"number", "range", "rating"}),
        [ChartKind.BAR, ChartKind.LINE, ChartKind.AREA, ChartKind.GAUGE, ChartKind.HEATMAP],
        True,
    ),
    DataType.CATEGORICAL: (
        frozenset({"select", "radio", "checkbox", "dropdown"}),
        [ChartKind.PIE, ChartKind.DONUT, ChartKind.BAR],
        True,
    ),
    DataType.DATE: (
        frozenset({"date", "time", "datetime"}),
        [ChartKind.TIMELINE, ChartKind.LINE, ChartKind.AREA],
        True,
    ),
    DataType.BOOLEAN: (
        frozenset({"boolean", "toggle", "switch"}),
        [ChartKind.PIE, ChartKind.GAUGE],
        True,
    ),
    DataType.TEXT: (
        frozenset({"text", "textarea", "email", "tel", "url"}),
        [],
        False,
    ),
}

NUMERIC_LABEL_KEYWORDS = ("score", "count", "amount", "total")


def classify(field: FieldDefinition) -> FieldAnalysis:
    """Classify a form field.

    Known field types map through ``_TYPE_RULES``. Unknown types are treated
    as numeric when the label mentions a quantity keyword (score, count,
    amount, total) and as non-aggregatable text otherwise.
    """
    analysis = FieldAnalysis(
        field_id=field.field_id,
        field_label=field.field_label,
        original_type=field.field_type,
    )

    for data_type, (field_types, charts, aggregatable) in _TYPE_RULES.items():
        if field.field_type in field_types:
            analysis.detected_data_type = data_type
            analysis.suggested_charts = list(charts)
            analysis.is_aggregatable = aggregatable
            return analysis

    label = (field.field_label or "").lower()
    if any(keyword in label for keyword in NUMERIC_LABEL_KEYWORDS):
        analysis.detected_data_type = DataType.NUMERIC
        analysis.suggested_charts = [ChartKind.BAR, ChartKind.LINE]
        analysis.is_aggregatable = True

    return analysis


def default_chart(analysis: FieldAnalysis) -> ChartKind:
    """Chart to use when a consumer needs exactly one."""
    return analysis.suggested_charts[0] if analysis.suggested_charts else ChartKind.BAR


def analyze_form(form: FormDefinition) -> List[FieldAnalysis]:
    """Classify every field of a form, in form order."""
    return [classify(field) for field in form.fields]
