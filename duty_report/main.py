from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

import typer
from pydantic import ValidationError

from duty_report.config import Settings, get_settings
from duty_report.domain.models import MATCH_ALL, FilterSpec, ServiceType
from duty_report.domain.seed import seed_records
from duty_report.import_task import (
    ImportCoordinator,
    ImportStatus,
    available_importers,
    resolve_importer,
)
from duty_report.orchestrator import build_report
from duty_report.reporter import print_imports, print_report
from duty_report.store import RecordStore
from duty_report.utils.logging import configure_logging

app = typer.Typer(help="Duty Report CLI: statistics over the operational service log.")


def _setup() -> Settings:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    return settings


def _filter_spec(
    search: str, service_type: str, date_from: Optional[str], date_to: Optional[str]
) -> FilterSpec:
    try:
        return FilterSpec(
            search=search, type_filter=service_type, date_from=date_from, date_to=date_to
        )
    except (ValidationError, ValueError) as exc:
        raise typer.BadParameter(
            f"Invalid filter: {exc}. Dates are YYYY-MM-DD or DD/MM/YYYY."
        ) from exc


SearchOption = typer.Option("", "--search", "-q", help="Text matched against personnel or type.")
TypeOption = typer.Option(MATCH_ALL, "--type", "-t", help="Exact service type, or ALL.")
FromOption = typer.Option(None, "--from", help="Earliest date (inclusive).")
ToOption = typer.Option(None, "--to", help="Latest date (inclusive).")
JsonOption = typer.Option(False, "--json", help="Print the report payload as JSON.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} log={settings.log_level} | "
        f"placeholder={settings.placeholder_personnel!r} "
        f"highlight={settings.highlight_category!r} student={settings.student_category!r} | "
        f"import timeout={settings.import_timeout_seconds:g}s "
        f"batch={settings.import_batch_size} retries={settings.import_retry_attempts}"
    )


@app.command()
def types() -> None:
    """
    List the known service types.
    """
    for service_type in ServiceType:
        typer.echo(service_type.value)


@app.command()
def report(
    search: str = SearchOption,
    service_type: str = TypeOption,
    date_from: Optional[str] = FromOption,
    date_to: Optional[str] = ToOption,
    as_json: bool = JsonOption,
    show_records: bool = typer.Option(True, "--records/--no-records", help="Include the table."),
) -> None:
    """
    Filter the seed service log and print statistics and breakdowns.
    """
    settings = _setup()
    spec = _filter_spec(search, service_type, date_from, date_to)
    payload = build_report(seed_records(), spec, settings=settings)
    if as_json:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_report(payload, show_records=show_records)


async def _run_imports(
    settings: Settings, importer: str, count: int, spec: FilterSpec
) -> tuple[List[Dict[str, Any]], Dict[str, Any]]:
    coordinator = ImportCoordinator(RecordStore.from_records(seed_records()), settings=settings)
    tasks = [coordinator.start_import(resolve_importer(importer, settings)) for _ in range(count)]
    for task in tasks:
        await task.wait()
    payload = build_report(coordinator.store, spec, settings=settings)
    return [t.as_dict() for t in tasks], payload


@app.command(name="import")
def import_(
    count: int = typer.Option(1, "--count", "-n", min=1, help="Concurrent imports to run."),
    importer: str = typer.Option("simulated", "--importer", "-i", help="Import provider name."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for simulated data."),
    delay: Optional[float] = typer.Option(None, "--delay", min=0, help="Simulated read delay (s)."),
    search: str = SearchOption,
    service_type: str = TypeOption,
    date_from: Optional[str] = FromOption,
    date_to: Optional[str] = ToOption,
    as_json: bool = JsonOption,
) -> None:
    """
    Import records into the seed log in the background, then report on the result.
    """
    settings = _setup()
    overrides: Dict[str, Any] = {}
    if seed is not None:
        overrides["import_seed"] = seed
    if delay is not None:
        overrides["import_delay_seconds"] = delay
    if overrides:
        settings = settings.model_copy(update=overrides)
    spec = _filter_spec(search, service_type, date_from, date_to)
    if importer not in available_importers(settings):
        raise typer.BadParameter(
            f"Unknown importer '{importer}'. Available: {', '.join(available_importers(settings))}",
            param_hint="--importer",
        )

    tasks, payload = asyncio.run(_run_imports(settings, importer, count, spec))

    if as_json:
        typer.echo(json.dumps({"imports": tasks, "report": payload}, indent=2, ensure_ascii=False))
    else:
        print_imports(tasks)
        print_report(payload)

    failed = [t for t in tasks if t["status"] != ImportStatus.SUCCEEDED.value]
    if failed:
        typer.echo(f"{len(failed)} import(s) did not succeed.", err=True)
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
