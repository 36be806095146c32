"""
Query engine: selectivity-ordered filtering, urgency scoring and
quota-bounded collection of perspective records.
"""

from focuslens.filtering.assembler import TIER_ORDERS, assemble_result, ordered_tasks
from focuslens.filtering.engine import (
    QueryMetrics,
    build_quota,
    get_query_metrics,
    reset_query_metrics,
    run_query,
)
from focuslens.filtering.pipeline import filter_projects, first_failing_rule, passes_filters
from focuslens.filtering.quota import QuotaCollector, ResultQuota
from focuslens.filtering.rules import RULE_TABLE, FilterRule, enabled_rules
from focuslens.filtering.scoring import classify_score, days_until, score_task

__all__ = [
    # Rule table
    "RULE_TABLE",
    "FilterRule",
    "enabled_rules",
    # Predicate pipeline
    "filter_projects",
    "first_failing_rule",
    "passes_filters",
    # Scoring
    "classify_score",
    "days_until",
    "score_task",
    # Quota
    "QuotaCollector",
    "ResultQuota",
    # Assembly
    "TIER_ORDERS",
    "assemble_result",
    "ordered_tasks",
    # Engine
    "QueryMetrics",
    "build_quota",
    "get_query_metrics",
    "reset_query_metrics",
    "run_query",
]
