"""Insight generator: plain-language summaries of aggregated fields."""
from typing import Callable, Dict, List

from app.domain.reports import AggregatedField, CategoricalGroupStats, DataType, Insights
from app.services.statistics import format_fixed, format_pct, mean, round_half_up, sample_std

NO_DATA_SUMMARY = "No data available for analysis."

# cross-group std above this share of the mean counts as significant variation
VARIATION_THRESHOLD = 0.2


def _numeric_insights(aggregated: AggregatedField) -> Insights:
    """Overall mean, highest and lowest groups, and spread across groups.

    Highest/lowest ties go to the group listed first.
    """
    data = aggregated.data
    values = [group.value for group in data]
    overall_avg = float(round_half_up(mean(values), 2))
    highest = max(data, key=lambda group: group.value)
    lowest = min(data, key=lambda group: group.value)

    findings = [
        f"Highest value recorded in {highest.label} ({format_fixed(highest.value)}).",
        f"Lowest value recorded in {lowest.label} ({format_fixed(lowest.value)}).",
    ]
    if len(data) > 2:
        if sample_std(values) > overall_avg * VARIATION_THRESHOLD:
            findings.append("Significant variation observed across groups.")
        else:
            findings.append("Values are relatively consistent across groups.")

    return Insights(
        summary=f"The average {aggregated.field_label.lower()} is {format_fixed(overall_avg)}.",
        key_findings=findings,
        statistics={"mean": overall_avg, "max": highest.value, "min": lowest.value},
    )


def _categorical_insights(aggregated: AggregatedField) -> Insights:
    """Most and second most common options across all groups combined."""
    overall_counts: Dict[str, int] = {}
    for group in aggregated.data:
        if not isinstance(group, CategoricalGroupStats):
            continue
        for item in group.breakdown:
            overall_counts[item.name] = overall_counts.get(item.name, 0) + item.value

    # stable sort: equal counts keep first-seen order
    ranked = sorted(overall_counts.items(), key=lambda kv: kv[1], reverse=True)
    total = sum(overall_counts.values())
    insights = Insights()
    if not ranked or total == 0:
        return insights

    top_name, top_count = ranked[0]
    insights.summary = f'The most common response is "{top_name}" ({format_pct(top_count / total * 100)}%).'
    insights.key_findings.append(f'"{top_name}" dominates with {top_count} selections.')
    if len(ranked) > 1:
        second_name, second_count = ranked[1]
        insights.key_findings.append(
            f'"{second_name}" is the second most popular choice ({format_pct(second_count / total * 100)}%).'
        )
    return insights


def _no_insights(aggregated: AggregatedField) -> Insights:
    # boolean and date fields have no summary sentences yet
    return Insights()


_INSIGHTS: Dict[DataType, Callable[[AggregatedField], Insights]] = {
    DataType.NUMERIC: _numeric_insights,
    DataType.CATEGORICAL: _categorical_insights,
    DataType.BOOLEAN: _no_insights,
    DataType.DATE: _no_insights,
    DataType.TEXT: _no_insights,
}


def generate_insights(aggregated: AggregatedField) -> Insights:
    """Summarize an aggregated field.

    Returns a "no data" summary when the field has no groups.
    """
    if not aggregated.data:
        return Insights(summary=NO_DATA_SUMMARY)
    return _INSIGHTS[aggregated.data_type](aggregated)


def collect_key_findings(insights: List[Insights]) -> List[str]:
    """Concatenate key findings in the given order."""
    return [finding for item in insights for finding in item.key_findings]
