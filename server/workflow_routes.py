"""API routes for workflow validation and analysis.

Request and response bodies use the editor's camelCase field names, like
ValidationResult does. Request models also accept snake_case names.
"""

import logging
import os

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from flowcheck.analysis.complexity import (
    ComplexityStrategy,
    category_weighted_complexity,
    complexity_label,
    complexity_score,
    is_high_complexity,
)
from flowcheck.analysis.insights import (
    deep_analysis,
    generate_optimizations,
    insight_to_dict,
    suggestion_to_dict,
    summarize_insights,
    summarize_optimizations,
)
from flowcheck.analysis.validator import validate_flow_data
from flowcheck.analysis.workflow_analysis import analysis_to_dict, analyze_workflow
from flowcheck.models.validation import ValidationResult
from flowcheck.models.workflow_graph import FlowData
from flowcheck.utils.flow_data import FlowDataError, parse_flow_data

logger = logging.getLogger(__name__)

DEFAULT_MAX_NODES = 5000

router = APIRouter()


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ComplexityResponse(ApiModel):
    """complexity score of a workflow under one strategy.

    `label` only applies to category_weighted scores and `high_complexity`
    only to layout_depth scores; the other one is None.
    """

    score: int
    strategy: ComplexityStrategy
    label: str | None = None
    high_complexity: bool | None = None


class InsightsRequest(ApiModel):
    """request body for a deep analysis of a stored workflow."""

    workflow_id: str
    flow_data: str
    include_performance: bool = True
    include_security: bool = True
    include_optimization: bool = True


class InsightsSummary(ApiModel):
    total_insights: int
    performance_issues: int
    security_issues: int
    optimization_opportunities: int


class InsightsResponse(ApiModel):
    workflow_id: str
    insights: list[dict]
    summary: InsightsSummary


class OptimizationsRequest(ApiModel):
    """request body for optimization suggestions on a stored workflow."""

    workflow_id: str
    flow_data: str
    current_complexity: float | None = None


class OptimizationsSummary(ApiModel):
    total_suggestions: int
    high_priority: int
    medium_priority: int
    low_priority: int


class OptimizationsResponse(ApiModel):
    workflow_id: str
    suggestions: list[dict]
    summary: OptimizationsSummary


def max_nodes() -> int:
    """node limit for analyzed graphs, from FLOWCHECK_MAX_NODES."""
    return int(os.getenv("FLOWCHECK_MAX_NODES", str(DEFAULT_MAX_NODES)))


def _check_size(flow: FlowData) -> None:
    limit = max_nodes()
    if len(flow.nodes) > limit:
        logger.warning("rejected workflow with %d nodes (limit %d)", len(flow.nodes), limit)
        raise HTTPException(
            status_code=413,
            detail=f"Workflow has {len(flow.nodes)} nodes, limit is {limit}",
        )


def _parse_stored(workflow_id: str, flow_data: str) -> FlowData:
    try:
        flow = parse_flow_data(flow_data)
    except FlowDataError as exc:
        logger.warning("cannot analyze workflow %s: %s", workflow_id, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    _check_size(flow)
    return flow


@router.post("/workflows/validate")
def validate(flow: FlowData, report_dangling: bool = False) -> ValidationResult:
    """validate a workflow graph and score its health."""
    _check_size(flow)
    return validate_flow_data(flow, report_dangling_edges=report_dangling)


@router.post("/workflows/complexity")
def complexity(
    flow: FlowData,
    strategy: ComplexityStrategy = ComplexityStrategy.layout_depth,
) -> ComplexityResponse:
    """score how elaborate a workflow graph is."""
    _check_size(flow)
    score = complexity_score(flow.nodes, flow.edges, strategy)
    if strategy is ComplexityStrategy.category_weighted:
        return ComplexityResponse(score=score, strategy=strategy, label=complexity_label(score))
    return ComplexityResponse(
        score=score,
        strategy=strategy,
        high_complexity=is_high_complexity(score),
    )


@router.post("/workflows/analyze")
def analyze(flow: FlowData) -> dict:
    """full heuristic analysis: complexity, bottlenecks, estimates and validation."""
    _check_size(flow)
    return analysis_to_dict(analyze_workflow(flow.nodes, flow.edges))


@router.post("/workflows/insights")
def insights(request: InsightsRequest) -> InsightsResponse:
    """deep analysis of a stored flowData blob."""
    flow = _parse_stored(request.workflow_id, request.flow_data)
    found = deep_analysis(
        flow,
        include_performance=request.include_performance,
        include_security=request.include_security,
        include_optimization=request.include_optimization,
    )
    return InsightsResponse(
        workflow_id=request.workflow_id,
        insights=[insight_to_dict(i) for i in found],
        summary=InsightsSummary(**summarize_insights(found)),
    )


@router.post("/workflows/optimizations")
def optimizations(request: OptimizationsRequest) -> OptimizationsResponse:
    """optimization suggestions for a stored flowData blob.

    When the caller does not send the stored complexity, it is recomputed
    with the category-weighted strategy.
    """
    flow = _parse_stored(request.workflow_id, request.flow_data)
    current = request.current_complexity
    if current is None:
        current = category_weighted_complexity(flow.nodes, flow.edges)
    suggestions = generate_optimizations(flow, current)
    return OptimizationsResponse(
        workflow_id=request.workflow_id,
        suggestions=[suggestion_to_dict(s) for s in suggestions],
        summary=OptimizationsSummary(**summarize_optimizations(suggestions)),
    )
