"""Unit tests for the comparison engine."""
from app.domain.reports import AggregatedField, CategoricalGroupStats, DataType, GroupBy, NumericGroupStats
from app.services.aggregation import aggregate
from app.services.comparison import filter_to_entities, generate_comparison_insights
from conftest import make_field, make_response


def aggregated(data_type, *groups) -> AggregatedField:
    model = NumericGroupStats if data_type == DataType.NUMERIC else CategoricalGroupStats
    return AggregatedField(
        field_id="f1",
        field_label="Score",
        data_type=data_type,
        data=[model(label=label, value=value) for label, value in groups],
    )


class TestComparisonInsights:

    def test_fewer_than_two_groups(self):
        assert generate_comparison_insights(aggregated(DataType.NUMERIC)) == []
        assert generate_comparison_insights(aggregated(DataType.NUMERIC, ("A", 4))) == []

    def test_numeric_difference(self):
        insights = generate_comparison_insights(aggregated(DataType.NUMERIC, ("B", 5), ("A", 15)))

        assert insights == ["A is higher than B by 10.00 (200.0%)."]

    def test_runner_up_zero_has_no_percentage(self):
        insights = generate_comparison_insights(aggregated(DataType.NUMERIC, ("A", 5), ("B", 0)))

        assert insights == ["A is higher than B by 5.00 (N/A)."]

    def test_difference_rounds_ties_up(self):
        insights = generate_comparison_insights(aggregated(DataType.NUMERIC, ("A", 0.25), ("B", 0.125)))

        assert insights == ["A is higher than B by 0.13 (100.0%)."]

    def test_ties_keep_original_order(self):
        insights = generate_comparison_insights(aggregated(DataType.NUMERIC, ("A", 5), ("B", 5)))

        assert insights == ["A is higher than B by 0.00 (0.0%)."]

    def test_categorical_counts(self):
        insights = generate_comparison_insights(aggregated(DataType.CATEGORICAL, ("A", 3), ("B", 5)))

        assert insights == ["B has more responses (5) than A (3)."]

    def test_boolean_has_no_sentence(self):
        assert generate_comparison_insights(aggregated(DataType.BOOLEAN, ("A", 3), ("B", 5))) == []

    def test_only_two_leaders_are_compared(self):
        insights = generate_comparison_insights(
            aggregated(DataType.NUMERIC, ("A", 1), ("B", 8), ("C", 4))
        )

        assert insights == ["B is higher than C by 4.00 (100.0%)."]


class TestEntityFilter:

    def test_keeps_requested_labels_only(self):
        original = aggregated(DataType.NUMERIC, ("A", 1), ("B", 2), ("C", 3))
        filtered = filter_to_entities(original, ["A", "C"])

        assert [g.label for g in filtered.data] == ["A", "C"]
        assert [g.label for g in original.data] == ["A", "B", "C"]

    def test_district_comparison_from_responses(self):
        responses = [
            make_response("12", district="Pune"),
            make_response("8", district="Pune"),
            make_response("6", district="Nashik"),
            make_response("50", district="Satara"),
        ]
        result = filter_to_entities(
            aggregate(responses, make_field("number", label="Classrooms"), GroupBy.DISTRICT),
            ["Pune", "Nashik"],
        )

        assert [g.label for g in result.data] == ["Pune", "Nashik"]
        assert generate_comparison_insights(result) == ["Pune is higher than Nashik by 4.00 (66.7%)."]
