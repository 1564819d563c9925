#!/usr/bin/env python3
"""CLI script to validate and score a workflow file.

Usage:
    flowcheck <flow_data.json>

    # or with JSON output
    flowcheck <flow_data.json> --json

    # score with the category-weighted strategy and fail on invalid workflows
    flowcheck <flow_data.json> --strategy category_weighted --strict
"""

import argparse
import json
import sys
from pathlib import Path

from flowcheck.analysis.complexity import (
    ComplexityStrategy,
    complexity_label,
    complexity_score,
)
from flowcheck.analysis.validator import validate_flow_data
from flowcheck.models.validation import ValidationFinding, ValidationResult
from flowcheck.utils.flow_data import FlowDataError, load_flow_file

EXIT_CANNOT_ANALYZE = 1
EXIT_INVALID = 2

_MARKERS = {"error": "✗", "warning": "!", "info": "i"}


def _format_finding(finding: ValidationFinding) -> str:
    marker = _MARKERS[finding.kind.value]
    ref = ""
    if finding.node_id:
        ref = f" (node {finding.node_id})"
    elif finding.edge_id:
        ref = f" (edge {finding.edge_id})"
    return f"  {marker} [{finding.severity.value}] {finding.message}{ref}"


def format_report(
    result: ValidationResult,
    complexity: int,
    strategy: ComplexityStrategy,
    node_count: int,
    edge_count: int,
) -> str:
    """Format a validation result for human-readable output."""
    lines = []
    lines.append("=" * 60)
    lines.append("WORKFLOW VALIDATION")
    lines.append("=" * 60)
    lines.append("")

    lines.append(f"Nodes:        {node_count}")
    lines.append(f"Edges:        {edge_count}")
    lines.append(f"Score:        {result.score}/100")
    complexity_line = f"Complexity:   {complexity} ({strategy.value})"
    if strategy is ComplexityStrategy.category_weighted:
        complexity_line += f", {complexity_label(complexity)}"
    lines.append(complexity_line)
    lines.append("")

    for title, findings in (
        ("ERRORS", result.errors),
        ("WARNINGS", result.warnings),
        ("INFO", result.info),
    ):
        if not findings:
            continue
        lines.append("-" * 40)
        lines.append(title)
        lines.append("-" * 40)
        for finding in findings:
            lines.append(_format_finding(finding))
        lines.append("")

    lines.append("-" * 40)
    if result.is_valid:
        lines.append("✓ Workflow is valid")
    else:
        lines.append(f"✗ Workflow is invalid ({len(result.errors)} errors)")
    lines.append("-" * 40)
    lines.append("")

    return "\n".join(lines)


def result_to_dict(
    result: ValidationResult, complexity: int, strategy: ComplexityStrategy
) -> dict:
    """Convert a result and its complexity score to a JSON-serializable dict."""
    d = result.model_dump(mode="json", by_alias=True)
    d["complexity"] = {"score": complexity, "strategy": strategy.value}
    return d


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate a workflow flowData file and report its score."
    )
    parser.add_argument(
        "flow_file",
        type=Path,
        help="path to the flowData JSON file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="output the result as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in ComplexityStrategy],
        default=ComplexityStrategy.layout_depth.value,
        help="complexity scoring strategy (default: layout_depth)",
    )
    parser.add_argument(
        "--report-dangling",
        action="store_true",
        help="report edges that reference unknown nodes",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=f"exit with status {EXIT_INVALID} when the workflow has errors",
    )

    args = parser.parse_args(argv)
    strategy = ComplexityStrategy(args.strategy)

    if not args.flow_file.is_file():
        print(f"Error: flow file not found: {args.flow_file}", file=sys.stderr)
        return EXIT_CANNOT_ANALYZE

    try:
        flow = load_flow_file(args.flow_file)
    except OSError as exc:
        print(f"Error: cannot read flow file: {exc}", file=sys.stderr)
        return EXIT_CANNOT_ANALYZE
    except FlowDataError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CANNOT_ANALYZE

    result = validate_flow_data(flow, report_dangling_edges=args.report_dangling)
    complexity = complexity_score(flow.nodes, flow.edges, strategy)

    if args.json:
        print(json.dumps(result_to_dict(result, complexity, strategy), indent=2))
    else:
        print(format_report(
            result,
            complexity,
            strategy,
            node_count=len(flow.nodes),
            edge_count=len(flow.edges),
        ))

    if args.strict and not result.is_valid:
        return EXIT_INVALID
    return 0


if __name__ == "__main__":
    sys.exit(main())
