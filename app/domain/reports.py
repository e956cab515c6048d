"""Domain models for field analysis, aggregated statistics and report payloads."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import Field

from app.domain.forms import CamelModel


class DataType(str, Enum):
    """Semantic category of a form field."""
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    BOOLEAN = "boolean"
    DATE = "date"
    TEXT = "text"


class ChartKind(str, Enum):
    """Chart kinds the rendering layer knows how to draw."""
    BAR = "bar"
    LINE = "line"
    AREA = "area"
    GAUGE = "gauge"
    HEATMAP = "heatmap"
    PIE = "pie"
    DONUT = "donut"
    TIMELINE = "timeline"


class GroupBy(str, Enum):
    """Geographic dimension responses are grouped by."""
    NONE = "none"
    DISTRICT = "district"
    TALUKA = "taluka"
    SCHOOL = "school"


class FieldAnalysis(CamelModel):
    """Classification of one form field. Computed per request, never stored."""
    field_id: str
    field_label: str
    original_type: str
    detected_data_type: DataType = DataType.TEXT
    suggested_charts: List[ChartKind] = Field(default_factory=list)
    is_aggregatable: bool = False


# ----------------
# GROUP STATISTICS
# ----------------

class GroupStats(CamelModel):
    """Statistics for one group; ``value`` is the primary number to chart."""
    label: str
    value: float = 0


class NumericGroupStats(GroupStats):
    """Descriptive statistics of a numeric field within a group.

    All statistics are None when no value in the group parsed as a number.
    """
    count: Optional[int] = None
    sum: Optional[float] = None
    avg: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    median: Optional[float] = None
    std_dev: Optional[float] = None


class BreakdownItem(CamelModel):
    """Count and share of one option within a group."""
    name: str
    value: int
    percentage: str


class CategoricalGroupStats(GroupStats):
    """Option distribution of a categorical or boolean field within a group."""
    value: int = 0
    breakdown: List[BreakdownItem] = Field(default_factory=list)
    most_common: str = ""


class DateGroupStats(GroupStats):
    """Submission count of a date field within a group."""
    value: int = 0
    count: int = 0


GroupStatsVariant = Union[NumericGroupStats, CategoricalGroupStats, DateGroupStats]


class AggregatedField(CamelModel):
    """Per-group statistics of one field."""
    field_id: str
    field_label: str
    data_type: DataType
    data: List[GroupStatsVariant] = Field(default_factory=list)


class Insights(CamelModel):
    """Human-readable summary derived from an aggregated field."""
    summary: str = ""
    key_findings: List[str] = Field(default_factory=list)
    statistics: Dict[str, Any] = Field(default_factory=dict)


# ----------------
# REQUESTS
# ----------------

class DateRange(CamelModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class ReportFilters(CamelModel):
    """Filters applied to responses before aggregation.

    An empty list means "no restriction" for that dimension.
    """
    date_range: Optional[DateRange] = None
    districts: List[str] = Field(default_factory=list)
    talukas: List[str] = Field(default_factory=list)
    schools: List[str] = Field(default_factory=list)


class AnalyzeFormRequest(CamelModel):
    form_id: str


class ReportRequest(CamelModel):
    """Body of a report generation request."""
    form_id: str
    filters: ReportFilters = Field(default_factory=ReportFilters)
    group_by: GroupBy = GroupBy.NONE
    include_charts: bool = True

    class Config:
        json_schema_extra = {
            "example": {
                "formId": "FORM-001",
                "filters": {"districts": ["Pune"]},
                "groupBy": "taluka",
                "includeCharts": True
            }
        }


class CompareRequest(CamelModel):
    """Body of an entity comparison request."""
    form_id: str
    compare_by: GroupBy
    entities: List[str] = Field(min_length=2)

    class Config:
        json_schema_extra = {
            "example": {
                "formId": "FORM-001",
                "compareBy": "district",
                "entities": ["Pune", "Nashik"]
            }
        }


# ----------------
# PAYLOADS
# ----------------

class Visualization(CamelModel):
    """One chartable field of a report."""
    field_id: str
    field_label: str
    chart_type: ChartKind
    data: List[GroupStatsVariant]
    insights: Insights


class ReportSummary(CamelModel):
    overview: str
    key_findings: List[str] = Field(default_factory=list)


class ReportPayload(CamelModel):
    """Full analytical report for a form."""
    report_id: str
    generated_at: datetime
    form_title: str
    response_count: int
    applied_filters: ReportFilters
    visualizations: List[Visualization] = Field(default_factory=list)
    summary: ReportSummary


class ComparisonField(CamelModel):
    """One field compared across the requested entities."""
    field_id: str
    field_label: str
    chart_type: ChartKind
    data: List[GroupStatsVariant]
    insights: List[str] = Field(default_factory=list)


class ComparisonPayload(CamelModel):
    title: str
    generated_at: datetime
    fields: List[ComparisonField] = Field(default_factory=list)
