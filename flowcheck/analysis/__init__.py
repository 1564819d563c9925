"""Validation, complexity scoring and analysis of workflow graphs."""

from flowcheck.analysis.validator import (
    calculate_score,
    validate_flow_data,
    validate_workflow,
)
from flowcheck.analysis.complexity import (
    ComplexityStrategy,
    category_weighted_complexity,
    complexity_label,
    complexity_score,
    estimate_max_depth,
    is_high_complexity,
    layout_depth_complexity,
)
from flowcheck.analysis.workflow_analysis import (
    PerformanceMetrics,
    WorkflowAnalysis,
    analysis_to_dict,
    analyze_workflow,
)
from flowcheck.analysis.insights import (
    Insight,
    InsightType,
    OptimizationSuggestion,
    deep_analysis,
    generate_optimizations,
    summarize_insights,
    summarize_optimizations,
)

__all__ = [
    # validator exports
    "calculate_score",
    "validate_flow_data",
    "validate_workflow",
    # complexity exports
    "ComplexityStrategy",
    "category_weighted_complexity",
    "complexity_label",
    "complexity_score",
    "estimate_max_depth",
    "is_high_complexity",
    "layout_depth_complexity",
    # workflow_analysis exports
    "PerformanceMetrics",
    "WorkflowAnalysis",
    "analysis_to_dict",
    "analyze_workflow",
    # insights exports
    "Insight",
    "InsightType",
    "OptimizationSuggestion",
    "deep_analysis",
    "generate_optimizations",
    "summarize_insights",
    "summarize_optimizations",
]
