"""Typed payload contracts for the service/CLI boundary.

Payloads are validated before they leave the service layer so shape
regressions fail fast in tests.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class ResultErrorItem(BaseModel):
    """One error attached to a result row."""

    fields: list[str]
    message: str
    status_code: str
    category: str


class ResultItem(BaseModel):
    """One canonical result row."""

    index: int
    record_id: str | None
    success: bool
    errors: list[ResultErrorItem]


class NormalizeResultData(BaseModel):
    """Payload contract for ``BulkWriteService.normalize``."""

    count: int
    succeeded: int
    failed: int
    results: list[ResultItem]


class BulkWriteResultData(NormalizeResultData):
    """Payload contract for ``BulkWriteService.write``."""

    model_config = ConfigDict(extra="forbid")

    operation: str
