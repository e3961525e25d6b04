"""Human/JSON output helpers.

The CLI renders ServiceResult for humans (one line per record) or machines
(--json). Per-record failures are printed on the success path because a
partially failed batch is still a completed operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bulkctl.services.result import ServiceResult


def format_error(error: dict[str, Any]) -> str:
    """One-line rendering of a result error."""
    fields = f" [{', '.join(error['fields'])}]" if error.get("fields") else ""
    return f"{error['status_code']}{fields}: {error['message']}"


def format_item(item: dict[str, Any]) -> str:
    """One-line rendering of a result row, plus indented error lines."""
    record_id = item["record_id"] if item["record_id"] is not None else "-"
    status = "ok" if item["success"] else "FAILED"
    lines = [f"  #{item['index']} {record_id} {status}"]
    lines.extend(f"      {format_error(e)}" for e in item["errors"])
    return "\n".join(lines)


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: Return JSON instead of human-readable text.
        quiet: Summary line only, no per-record lines.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if not result.ok:
        error_msg = result.error.message if result.error else "Unknown error"
        code = f" ({result.error.code})" if result.error else ""
        return f"ERROR: {result.op}{code}: {error_msg}"

    data = result.data
    summary = f"OK: {result.op}"
    if "count" in data:
        summary += f" ({data['succeeded']}/{data['count']} succeeded)"
    if quiet:
        return summary
    if "results" not in data:
        return "\n".join([summary, *(f"  {key}: {value}" for key, value in data.items())])
    return "\n".join([summary, *(format_item(item) for item in data["results"])])
