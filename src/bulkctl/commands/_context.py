"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The record store is opened lazily so ``--help`` and
``--version`` never touch the database.
"""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING, Any

import click

from bulkctl.config.logging import configure_logging
from bulkctl.output.formatters import format_result

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from bulkctl.config.settings import BulkSettings
    from bulkctl.infrastructure.store import RecordStore
    from bulkctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: BulkSettings) -> None:
        self.settings = settings
        self._engine: Engine | None = None
        self._store: RecordStore | None = None
        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def store(self) -> RecordStore:
        """The record store (database created on first access)."""
        if self._store is None:
            from bulkctl.infrastructure.database.engine import init_database
            from bulkctl.infrastructure.store import RecordStore

            self._engine = init_database(self.settings.db_path, echo=self.settings.store.echo)
            self._store = RecordStore(
                self._engine,
                external_id_field=self.settings.write.external_id_field,
            )
        return self._store

    def close(self) -> None:
        """Dispose the engine if one was opened."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Rejected batch: writes to stderr, exits with ``result.exit_code``.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(result.exit_code)


def load_json_array(stream: IO[str], *, param_hint: str = "FILE") -> list[Any]:
    """Parse *stream* as a JSON array, raising click.BadParameter otherwise."""
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc}"
        raise click.BadParameter(msg, param_hint=param_hint) from exc
    if not isinstance(payload, list):
        msg = "Expected a JSON array"
        raise click.BadParameter(msg, param_hint=param_hint)
    return payload
