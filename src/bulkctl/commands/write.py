"""Command group: bulk writes against the record store."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from bulkctl.commands._base import BulkGroup
from bulkctl.commands._context import load_json_array
from bulkctl.domain.types import OperationKind

if TYPE_CHECKING:
    from bulkctl.commands._context import AppContext


@click.group(
    cls=BulkGroup,
    examples="""\
  bulkctl write update records.json
  bulkctl write upsert contacts.json
  bulkctl --json write delete ids.json
  cat records.json | bulkctl write update -""",
)
def write() -> None:
    """Submit a JSON array of records as one bulk write.

    Partial failure is normal: every record gets its own result and the
    command exits 0 unless the store rejects the whole batch.
    """


def _run(app: AppContext, operation: OperationKind, source: IO[str]) -> None:
    from bulkctl.services.bulk import BulkWriteService

    records = load_json_array(source)
    app.emit(BulkWriteService(app.store).write(operation, records))


@write.command(examples="  bulkctl write update records.json")
@click.argument("source", type=click.File("r"))
@click.pass_obj
def update(app: AppContext, source: IO[str]) -> None:
    """Insert records without an id; update records that have one."""
    _run(app, OperationKind.UPDATE, source)


@write.command(examples="  bulkctl write upsert contacts.json")
@click.argument("source", type=click.File("r"))
@click.pass_obj
def upsert(app: AppContext, source: IO[str]) -> None:
    """Insert or update records matched on the external-id field."""
    _run(app, OperationKind.UPSERT, source)


@write.command(examples="  bulkctl write delete ids.json")
@click.argument("source", type=click.File("r"))
@click.pass_obj
def delete(app: AppContext, source: IO[str]) -> None:
    """Delete records given as ids or objects with an "id"."""
    _run(app, OperationKind.DELETE, source)
