"""Command: create the record store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bulkctl.commands._base import BulkCommand
from bulkctl.services.result import ServiceResult

if TYPE_CHECKING:
    from bulkctl.commands._context import AppContext


@click.command(
    "init",
    cls=BulkCommand,
    examples="""\
  bulkctl init
  bulkctl --json init""",
)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the record store database (idempotent)."""
    store = app.store
    app.emit(
        ServiceResult(
            ok=True,
            op="init",
            data={"path": str(app.settings.db_path), "records": store.count()},
        )
    )
