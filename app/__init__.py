"""School data collection portal: report and analytics service.

The ``services`` package holds the aggregation engine (classifier, aggregator,
insight and comparison generators) and the report orchestrator that feeds it.
"""
