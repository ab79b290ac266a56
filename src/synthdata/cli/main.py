"""Main CLI entry point for synthdata.

Runs the HTTP service and drives the same generation core from the command
line.
"""

from pathlib import Path
from typing import Any
import json
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from synthdata import __version__
from synthdata.engine.generation_engine import GenerationEngine
from synthdata.engine.validation_engine import ValidationEngine, ValidationResult
from synthdata.errors import SynthDataError
from synthdata.logging_config import configure_logging
from synthdata.output.serializers import render
from synthdata.params.base import EntityKind, Interval, OutputFormat
from synthdata.params.loader import load_schema
from synthdata.params.resolver import ParameterResolver
from synthdata.settings import get_settings
from synthdata.storage.request_log import RequestLog

console = Console()

KIND_DESCRIPTIONS = {
    EntityKind.USERS: "People with selectable name, email, age, address, phone and job",
    EntityKind.PRODUCTS: "Catalog items with price, category and size variants",
    EntityKind.COMPANIES: "Organisations with industry, head count and departments",
    EntityKind.TRANSACTIONS: "Purchases linking pooled users and products",
    EntityKind.DATASET: "Users, products and the transactions between them",
    EntityKind.TIMESERIES: "Evenly spaced random-walk measurements",
    EntityKind.CUSTOM: "Records shaped by a name/email/number/address schema",
}

KIND_CHOICES = [kind.value for kind in EntityKind]


@click.group()
@click.version_option(version=__version__, prog_name="synthdata")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """synthdata - Generate plausible synthetic records.

    Serves the generation HTTP API and produces the same records from the
    command line.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging("DEBUG" if verbose else "WARNING", json_output=False)


@cli.command()
@click.option("--host", help="Bind address (defaults to SYNTHDATA_HOST)")
@click.option("--port", type=int, help="Port (defaults to SYNTHDATA_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "synthdata.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


@cli.command()
@click.argument("kind", type=click.Choice(KIND_CHOICES))
@click.option("--count", "-n", help="Number of records (clamped to 1-10000)")
@click.option("--fields", help="Comma separated user fields")
@click.option("--format", "-f", "output_format", type=click.Choice([f.value for f in OutputFormat]), default="json", help="Output format")
@click.option("--seed", "-s", type=int, help="Random seed for reproducibility")
@click.option("--locale", "-l", help="Faker locale, e.g. de_DE")
@click.option("--age-range", help="Age range as min-max")
@click.option("--interval", type=click.Choice([i.value for i in Interval]), help="Time series interval")
@click.option("--start", help="Time series start (ISO-8601)")
@click.option("--schema-file", type=click.Path(exists=True), help="YAML/JSON schema for custom records")
@click.option("--output", "-o", type=click.Path(), help="Output file (stdout if not specified)")
@click.option("--validate", "run_validation", is_flag=True, help="Validate records before writing them")
@click.pass_context
def generate(
    ctx: click.Context,
    kind: str,
    count: str | None,
    fields: str | None,
    output_format: str,
    seed: int | None,
    locale: str | None,
    age_range: str | None,
    interval: str | None,
    start: str | None,
    schema_file: str | None,
    output: str | None,
    run_validation: bool,
) -> None:
    """Generate records of one kind.

    KIND is one of users, products, companies, transactions, dataset,
    timeseries or custom.
    """
    verbose = ctx.obj.get("verbose", False)

    params = {
        "count": count,
        "fields": fields,
        "format": output_format,
        "seed": seed,
        "locale": locale,
        "ageRange": age_range,
        "interval": interval,
        "start": start,
    }
    params = {key: value for key, value in params.items() if value is not None}

    try:
        body = load_schema(schema_file) if schema_file else None
        engine = GenerationEngine(
            resolver=ParameterResolver(default_locale=get_settings().default_locale),
        )
        dataset = engine.generate(kind, params, body)

        if run_validation:
            records = dataset.materialize()
            result = _validate_payload(
                ValidationEngine(),
                dataset.kind,
                {**dataset.envelope, dataset.records_key: records} if dataset.envelope else records,
                config=dataset.config,
            )
            if not result.valid:
                _print_validation_result(kind, result)
                sys.exit(1)
            dataset.records = iter(records)

        text = render(dataset)

        if output:
            Path(output).write_text(text, encoding="utf-8")
            console.print(f"[green]Wrote {dataset.count} {kind} records to {output}[/green]")
        else:
            click.echo(text)

    except (SynthDataError, OSError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.pass_context
def list_generators(ctx: click.Context) -> None:
    """List available record generators."""
    engine = GenerationEngine()

    table = Table(title="Available Generators")
    table.add_column("Kind", style="cyan")
    table.add_column("Endpoint")
    table.add_column("Description")

    for kind in engine.list_kinds():
        method = "POST" if kind == EntityKind.CUSTOM else "GET"
        table.add_row(kind.value, f"{method} /{kind.value}", KIND_DESCRIPTIONS.get(kind, ""))

    console.print(table)


@cli.command()
@click.option("--db", type=click.Path(), help="Request log database (defaults to SYNTHDATA_REQUEST_LOG_PATH)")
def stats(db: str | None) -> None:
    """Show request counts per endpoint."""
    path = Path(db or get_settings().request_log_path)
    if not path.exists():
        console.print(f"[yellow]No request log at {path}[/yellow]")
        return

    log = RequestLog(path)
    try:
        counts = log.counts()
    finally:
        log.close()

    if not counts:
        console.print("[yellow]No requests recorded[/yellow]")
        return

    table = Table(title="Requests per Endpoint")
    table.add_column("Endpoint", style="cyan")
    table.add_column("Requests", justify="right")

    for endpoint, total in counts.items():
        table.add_row(endpoint, str(total))

    console.print(table)
    console.print(f"Total: {sum(counts.values())}")


@cli.command()
@click.argument("kind", type=click.Choice(KIND_CHOICES))
@click.argument("path", type=click.Path(exists=True))
def validate(kind: str, path: str) -> None:
    """Validate a JSON file of generated records.

    KIND is the kind of the records and PATH the JSON file holding them: an
    array of records, or the bundle object for the dataset kind.
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading file: {e}[/red]")
        sys.exit(1)

    try:
        result = _validate_payload(ValidationEngine(), EntityKind(kind), payload)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    _print_validation_result(Path(path).name, result)
    if not result.valid:
        sys.exit(1)


def _validate_payload(
    engine: ValidationEngine,
    kind: EntityKind,
    payload: Any,
    config: Any = None,
) -> ValidationResult:
    if kind == EntityKind.DATASET:
        if not isinstance(payload, dict):
            raise ValueError("dataset payload must be an object with users, products and transactions")
        return engine.validate_dataset(payload)

    if not isinstance(payload, list):
        raise ValueError(f"{kind.value} payload must be a JSON array")
    return engine.validate_records(kind, payload, config=config)


def _print_validation_result(name: str, result: ValidationResult) -> None:
    """Print validation results."""
    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"
    console.print(Panel.fit(
        f"{name}: {status}\nRecords: {result.validated_count}",
        title="Validation",
    ))

    for issue in result.issues:
        color = {
            "error": "red",
            "warning": "yellow",
        }.get(issue.severity.value, "white")

        console.print(f"  [{color}]{issue.severity.value.upper()}[/{color}]: {issue.message}")
        if issue.path:
            console.print(f"    Path: {issue.path}")


if __name__ == "__main__":
    cli()
