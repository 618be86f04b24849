"""Command-line interface for gql-coords."""

import json
import sys

import click

from .core.errors import CoordinateError
from .core.extractor import extract_coordinates
from .core.parser import load_schema
from .core.usage import build_usage_report, collect_documents
from .logger import configure_logging

schema_option = click.option(
    "--schema",
    "-s",
    required=True,
    envvar="GQL_COORDS_SCHEMA",
    type=click.Path(exists=True),
    help="Path to GraphQL schema file or directory (or set GQL_COORDS_SCHEMA).",
)

json_option = click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Emit JSON instead of one coordinate per line.",
)


def _load_index(schema: str):
    try:
        return load_schema(schema)
    except (CoordinateError, OSError, UnicodeDecodeError) as e:
        raise click.ClickException(str(e)) from e


def _echo_failures(report):
    for path, message in report.failures.items():
        click.echo(f"Failed: {path}: {message}", err=True)


@click.group()
@click.version_option(package_name="gql-coords")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def main(verbose: bool):
    """Extract schema coordinates from GraphQL documents.

    Coordinates are `Type.field` or bare `Type` identifiers naming the
    schema elements a document references.
    """
    configure_logging(verbose)


@main.command()
@schema_option
@click.option(
    "--document",
    "-d",
    required=True,
    type=click.File("r"),
    help="GraphQL document to analyze ('-' reads from stdin).",
)
@json_option
def extract(schema: str, document, as_json: bool):
    """Print the coordinates referenced by a single document.

    Examples:

        gql-coords extract -s ./schema.graphql -d ./query.graphql

        cat query.graphql | gql-coords extract -s ./schema -d - --json
    """
    index = _load_index(schema)
    try:
        coordinates = sorted(extract_coordinates(index, document.read(), document.name))
    except CoordinateError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(coordinates, indent=2))
    else:
        for coordinate in coordinates:
            click.echo(coordinate)


@main.command()
@schema_option
@click.option(
    "--documents",
    "-d",
    required=True,
    type=click.Path(exists=True),
    help="GraphQL document file or directory of .graphql/.gql files.",
)
@click.option("--unknown", is_flag=True, help="List only coordinates missing from the schema.")
@click.option("--unused", is_flag=True, help="List only schema fields no document references.")
@json_option
def usage(schema: str, documents: str, unknown: bool, unused: bool, as_json: bool):
    """Count how many documents reference each coordinate.

    Examples:

        gql-coords usage -s ./schema -d ./queries

        gql-coords usage -s ./schema -d ./queries --unused
    """
    if unknown and unused:
        raise click.UsageError("--unknown and --unused are mutually exclusive.")

    index = _load_index(schema)
    report = build_usage_report(index, collect_documents(documents))

    if unknown or unused:
        listing = report.unknown(index) if unknown else report.unused(index)
        if as_json:
            click.echo(json.dumps(listing, indent=2))
        else:
            for coordinate in listing:
                click.echo(coordinate)
        _echo_failures(report)
        return

    if as_json:
        click.echo(json.dumps(report.as_dict(), indent=2))
        return

    for coordinate, count in sorted(report.counts.items()):
        click.echo(f"{coordinate}\t{count}")
    _echo_failures(report)


@main.command()
@schema_option
@click.argument("coordinates", nargs=-1, required=True)
def check(schema: str, coordinates: tuple[str, ...]):
    """Verify that coordinates exist in the schema.

    Exits with status 1 if any coordinate is unknown.

    Examples:

        gql-coords check -s ./schema.graphql Cat.name VetDetailsInput
    """
    index = _load_index(schema)
    missing = [c for c in coordinates if not index.knows(c)]
    for coordinate in coordinates:
        status = "missing" if coordinate in missing else "ok"
        click.echo(f"{coordinate}: {status}")
    if missing:
        sys.exit(1)


if __name__ == "__main__":
    main()
