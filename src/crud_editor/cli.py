# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command line interface (crud-editor command).

Commands:
    statements: Print the statements built for a table definition
    read: Run a bulk read against a database and print the rows
    version: Show version info
"""

from __future__ import annotations

import asyncio
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from .config import settings_from_env
from .definition import load_definition
from .dialects import Dialect
from .form import MapBackedDataForm
from .logger import LogLevel, console_logger
from .pagination import PaginationStrategy, keyset_paging, offset_paging
from .sqldb import SqlDb

console = Console()


def _parse_filters(values: tuple[str, ...]) -> MapBackedDataForm:
    form = MapBackedDataForm()
    for item in values:
        if "=" not in item:
            raise click.BadParameter(f"expected key=value, got '{item}'", param_hint="--filter")
        key, value = item.split("=", 1)
        form.set(key, value)
    return form


def _rows_table(title: str, rows: list[dict[str, Any]]) -> Table:
    table = Table(title=title)
    columns = list(rows[0].keys()) if rows else []
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*("" if row[c] is None else str(row[c]) for c in columns))
    return table


@click.group()
def main() -> None:
    """Build and run CRUD statements from table definitions."""


@main.command()
def version() -> None:
    """Show version info."""
    from . import __version__

    click.echo(f"crud-editor {__version__}")


@main.command()
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--dialect",
    type=click.Choice([d.dialect_id for d in Dialect]),
    default=None,
    help="Override the dialect of the definition.",
)
def statements(definition: str, dialect: str | None) -> None:
    """Print the statements built for DEFINITION."""
    table_def = load_definition(definition)
    config = table_def.to_config(Dialect.from_name(dialect) if dialect else None)
    editor = config.build()

    table = Table(title=f"{editor.table_name} ({editor.dialect})")
    table.add_column("Statement", style="cyan")
    table.add_column("SQL")
    for kind, sql in editor.statements.items():
        table.add_row(kind, sql)
    console.print(table)


@main.command()
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.option("--db", "db_url", default=None, help="Connection string (default: CRUD_EDITOR_DB).")
@click.option("--filter", "filters", multiple=True, help="Filter value as key=value.")
@click.option("--page", type=int, default=None, help="Page number (offset pagination).")
@click.option("--after", default=None, help="Keyset value to start after (keyset pagination).")
@click.option("--size", type=int, default=None, help="Page size.")
def read(
    definition: str,
    db_url: str | None,
    filters: tuple[str, ...],
    page: int | None,
    after: str | None,
    size: int | None,
) -> None:
    """Run the bulk read of DEFINITION and print the rows."""
    settings = settings_from_env()
    db = SqlDb(db_url or settings.db_url)
    config = load_definition(definition).to_config(db.dialect).debug(settings.debug)
    if settings.log_level is not LogLevel.NONE and not settings.debug:
        config.set_logger(console_logger(settings.log_level))
    editor = config.build()

    form = _parse_filters(filters)
    page_size = size or settings.page_size
    pageable = None
    if editor.pagination is PaginationStrategy.OFFSET:
        pageable = offset_paging(page or 0, page_size)
    elif editor.pagination is PaginationStrategy.KEYSET:
        pageable = keyset_paging(after if after is not None else 0, page_size)

    async def run() -> list[dict[str, Any]]:
        try:
            async with db.connection():
                return await editor.read(form, db, pageable)
        finally:
            await db.shutdown()

    try:
        rows = asyncio.run(run())
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e
    console.print(_rows_table(editor.table_name, rows))
