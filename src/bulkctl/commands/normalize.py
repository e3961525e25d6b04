"""Command: normalize raw outcomes produced elsewhere."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from bulkctl.commands._base import BulkCommand
from bulkctl.commands._context import load_json_array

if TYPE_CHECKING:
    from bulkctl.commands._context import AppContext


@click.command(
    cls=BulkCommand,
    examples="""\
  bulkctl normalize outcomes.json
  bulkctl --json normalize -""",
)
@click.argument("source", type=click.File("r"))
@click.pass_obj
def normalize(app: AppContext, source: IO[str]) -> None:
    """Normalize a JSON array of raw outcome objects without writing anything.

    Each object may use "success"/"isSuccess", "id", and "errors" with
    "fields", "message", and "statusCode"/"status_code".
    """
    from bulkctl.services.bulk import BulkWriteService

    outcomes = load_json_array(source)
    app.emit(BulkWriteService(None).normalize(outcomes))
