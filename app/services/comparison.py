"""Comparison engine: relative-difference sentences between named entities."""
from typing import Iterable, List

from app.domain.reports import AggregatedField, DataType
from app.services.statistics import format_fixed, format_pct


def filter_to_entities(aggregated: AggregatedField, entities: Iterable[str]) -> AggregatedField:
    """Copy of ``aggregated`` keeping only groups whose label is a requested entity."""
    wanted = set(entities)
    return aggregated.model_copy(
        update={"data": [group for group in aggregated.data if group.label in wanted]}
    )


def _format_pct_diff(diff: float, base: float) -> str:
    if base == 0:
        return "N/A"
    return f"{format_pct(diff / base * 100)}%"


def generate_comparison_insights(aggregated: AggregatedField) -> List[str]:
    """Compare the two leading groups of an aggregated field.

    Groups are ranked by ``value`` (descending, stable, so ties keep their
    original order). Needs at least two groups; otherwise returns an empty
    list. The percentage difference reads "N/A" when the runner-up is zero.
    """
    if len(aggregated.data) < 2:
        return []

    ranked = sorted(aggregated.data, key=lambda group: group.value, reverse=True)
    winner, runner_up = ranked[0], ranked[1]

    if aggregated.data_type == DataType.NUMERIC:
        diff = winner.value - runner_up.value
        return [
            f"{winner.label} is higher than {runner_up.label} by {format_fixed(diff)} "
            f"({_format_pct_diff(diff, runner_up.value)})."
        ]
    if aggregated.data_type == DataType.CATEGORICAL:
        return [
            f"{winner.label} has more responses ({winner.value}) than {runner_up.label} ({runner_up.value})."
        ]
    return []
