"""
normalize1nf CLI - Main entry point

Generates an export configuration in which array and JSON columns are
replaced by normalized custom views.

Usage:
    normalize1nf normalize <structure> -f <out>   Generate the configuration
    normalize1nf inspect <structure>              List columns to normalize
    normalize1nf version                          Show version information
"""

import sys
from pathlib import Path
from typing import Optional

import typer

from normalize1nf.utils.formatters import (
    format_error,
    format_info,
    format_success,
    format_table,
    format_view_table,
    format_warning,
)

app = typer.Typer(
    name="normalize1nf",
    help="Normalize array and JSON columns of an export configuration into views",
    add_completion=False,
)


def _get_version() -> str:
    """Get package version."""
    from normalize1nf import __version__
    return __version__


def _echo_success(message: str):
    typer.echo(format_success(message))


def _echo_error(message: str):
    typer.echo(format_error(message))


def _echo_warning(message: str):
    typer.echo(format_warning(message))


def _echo_info(message: str):
    typer.echo(format_info(message))


def _load_structure_or_exit(structure_file: Path):
    from normalize1nf.exceptions import StructureLoadError
    from normalize1nf.structure import load_structure

    try:
        return load_structure(structure_file)
    except StructureLoadError as e:
        _echo_error(str(e))
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    typer.echo(f"normalize1nf version: {_get_version()}")
    typer.echo(f"Python version: {sys.version.split()[0]}")


@app.command()
def normalize(
    structure_file: Path = typer.Argument(
        ..., help="YAML description of the database structure"
    ),
    file: Path = typer.Option(
        ..., "--file", "-f",
        help="Path to the import configuration file to write"
    ),
    merge_file: Optional[Path] = typer.Option(
        None, "--merge-file", "-mf",
        help="Path a configuration file to merge with the output"
    ),
    no_sql_quotes: bool = typer.Option(
        False, "--no-sql-quotes", "-nqc",
        help="Don't quote SQL identifiers in normalization view queries"
    ),
    array_name: Optional[str] = typer.Option(
        None, "--pattern-array-name",
        help='Pattern for names of array views. Default: "${table}__${column}"'
    ),
    array_foreign_key_column: Optional[str] = typer.Option(
        None, "--pattern-array-foreign-key-column",
        help='Pattern for foreign key columns of array views. Default: "${table}_${column}"'
    ),
    array_description: Optional[str] = typer.Option(
        None, "--pattern-array-description", "-pad",
        help='Pattern for description of normalized array columns. '
             'Default: "Normalized array column ${table}.${column}"'
    ),
    array_index_column: Optional[str] = typer.Option(
        None, "--pattern-array-index-column",
        help='Pattern for the array index column. Default: "array_index"'
    ),
    array_item_column: Optional[str] = typer.Option(
        None, "--pattern-array-item-column",
        help='Pattern for the array item column. Default: "${column}_item"'
    ),
    array_table_alias: Optional[str] = typer.Option(
        None, "--array-table-alias",
        help='Alias of the unnest table expression. Default: "a"'
    ),
    json_name: Optional[str] = typer.Option(
        None, "--pattern-json-name",
        help='Pattern for names of JSON views. Default: "${table}__${column}"'
    ),
    json_foreign_key_column: Optional[str] = typer.Option(
        None, "--pattern-json-foreign-key-column",
        help='Pattern for foreign key columns of JSON views. Default: "${table}_${column}"'
    ),
    json_description: Optional[str] = typer.Option(
        None, "--pattern-json-description",
        help='Pattern for description of normalized JSON columns. '
             'Default: "Normalized JSON column ${table}.${column}"'
    ),
):
    """Generate a configuration with array and JSON columns normalized into views."""
    from normalize1nf.context import config
    from normalize1nf.exceptions import (
        ModuleConfigurationLoadError,
        ViewNameCollisionError,
    )
    from normalize1nf.naming import NormalizationOptions
    from normalize1nf.pipeline import run_normalization

    structure = _load_structure_or_exit(structure_file)

    options = NormalizationOptions.from_config(
        config,
        quote_identifiers=False if no_sql_quotes else None,
        array_overrides={
            "name": array_name,
            "foreign_key_column": array_foreign_key_column,
            "description": array_description,
            "index_column": array_index_column,
            "item_column": array_item_column,
            "table_alias": array_table_alias,
        },
        json_overrides={
            "name": json_name,
            "foreign_key_column": json_foreign_key_column,
            "description": json_description,
        },
    )

    try:
        result = run_normalization(
            structure,
            output_file=file,
            merge_file=merge_file,
            options=options,
            import_module={"module": "structure-file", "file": str(structure_file)},
        )
    except (ModuleConfigurationLoadError, ViewNameCollisionError) as e:
        _echo_error(str(e))
        raise typer.Exit(1)

    for warning in result.warnings:
        _echo_warning(warning)
    for schema, view_name, reason in result.merge_report.dropped:
        _echo_warning(f"Merge view {schema}.{view_name} dropped: {reason}")

    if result.views:
        typer.echo(format_view_table(result.views))
    else:
        _echo_info("No array or JSON columns to normalize")

    added = len(result.merge_report.added)
    _echo_success(
        f"Configuration written to {file} "
        f"({len(result.views)} normalized, {added} merged)"
    )


@app.command()
def inspect(
    structure_file: Path = typer.Argument(
        ..., help="YAML description of the database structure"
    ),
):
    """List the array and JSON columns that would be normalized."""
    from normalize1nf.sql import classify_column

    structure = _load_structure_or_exit(structure_file)

    rows = []
    for table in structure.iter_tables():
        for column in table.columns:
            kind = classify_column(column)
            if kind is None:
                continue
            rows.append([
                table.schema,
                table.name,
                column.name,
                kind.value,
                "yes" if table.primary_key else "no",
            ])

    if not rows:
        _echo_info("No array or JSON columns found")
        return

    typer.echo(format_table(["Schema", "Table", "Column", "Kind", "Primary key"], rows))
    skipped = sum(1 for row in rows if row[4] == "no")
    if skipped:
        _echo_warning(f"{skipped} column(s) belong to tables without primary key and will be kept")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
