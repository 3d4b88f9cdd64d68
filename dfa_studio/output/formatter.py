"""Output formatting for validation and simulation results."""

import json
from typing import Literal

from ..simulation.sequencer import SimulationPhase, SimulationResult
from ..validators.base import Severity, ValidationIssue, ValidationResult


def format_validation_result(
    result: ValidationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_validation_json(result)
    return _format_validation_text(result)


def format_simulation_result(
    result: SimulationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a simulation result for output.

    Args:
        result: The finished walk.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_simulation_json(result)
    return _format_simulation_text(result)


def _format_validation_text(result: ValidationResult) -> str:
    """Format result as human-readable text."""
    lines: list[str] = []

    errors = result.errors
    warnings = result.warnings

    lines.append("ERRORS:")
    if errors:
        for issue in errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")

    lines.append("WARNINGS:")
    if warnings:
        for issue in warnings:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")
    if result.is_valid:
        if warnings:
            lines.append(f"Validation passed with {len(warnings)} warning(s)")
        else:
            lines.append("Validation passed")
    else:
        lines.append(
            f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    """Format a single issue as text."""
    location = ""
    if issue.state is not None:
        location = f"[{issue.state}"
        if issue.symbol is not None:
            location += f" on '{issue.symbol}'"
        location += "] "

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.message}"


def _format_validation_json(result: ValidationResult) -> str:
    """Format result as JSON."""
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "state": issue.state,
                "symbol": issue.symbol,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
    return json.dumps(data, indent=2)


def _format_simulation_text(result: SimulationResult) -> str:
    lines = [f"Word: {result.word!r}"]
    if result.path:
        lines.append(f"Path: {' -> '.join(result.path)}")
    lines.append(f"Consumed: {result.consumed} symbol(s)")

    lines.append("")
    if result.phase == SimulationPhase.ABORTED:
        lines.append(f"✘ Aborted: {result.reason}")
    elif result.accepted:
        lines.append(f"✔ Accepted in state '{result.final_state.name}'")
    else:
        final = result.final_state.name if result.final_state is not None else "?"
        lines.append(f"✘ Rejected in state '{final}'")

    return "\n".join(lines)


def _format_simulation_json(result: SimulationResult) -> str:
    data = {
        "word": result.word,
        "accepted": result.accepted,
        "phase": result.phase.value,
        "reason": result.reason,
        "consumed": result.consumed,
        "path": result.path,
    }
    return json.dumps(data, indent=2)
