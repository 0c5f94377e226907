from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

EMPTY_MESSAGE = "Sem dados para o filtro atual"
EMPTY_STUDENT_MESSAGE = "Nenhum dado de aluno encontrado para este filtro"
EMPTY_RECORDS_MESSAGE = "Nenhum registro encontrado para os filtros selecionados."

# (title, report key, value column header, values are hours)
_CHART_SECTIONS = (
    ("Distribuição por Tipo de Serviço", "by_type", "Serviços", False),
    ("Horas por Tipo", "hours_by_type", "Horas Totais", True),
    ("Ocorrências por Dia", "by_weekday", "Ocorrências", False),
    ("Duração dos Serviços", "by_duration", "Serviços", False),
)


def _format_hours(value: float) -> str:
    return f"{value:.1f}"


def _format_duration(value: float) -> str:
    return f"{value:g}h"


def _bucket_table(
    title: str, buckets: List[Dict[str, Any]], value_header: str, hours: bool
) -> Table:
    table = Table(title=title, box=box.ROUNDED, title_justify="left")
    table.add_column("Categoria", style="cyan")
    table.add_column(value_header, justify="right", style="bold green")
    for bucket in buckets:
        value = bucket["value"]
        table.add_row(str(bucket["label"]), _format_hours(value) if hours else str(value))
    return table


def build_kpi_table(report: Dict[str, Any]) -> Table:
    """
    Headline counters: hours, records found, distinct personnel and the hours
    of the highlighted category.
    """
    stats = report["stats"]
    table = Table(title="Relatório Operacional", box=box.ROUNDED, show_header=True)
    table.add_column("Indicador", style="cyan", no_wrap=True)
    table.add_column("Valor", justify="right", style="bold magenta")
    table.add_column("Detalhe", style="dim")

    table.add_row(
        "Total de Horas (Filtro)",
        _format_hours(stats["total_hours"]),
        "Baseado na seleção atual",
    )
    table.add_row(
        "Registros Encontrados",
        str(stats["total_records"]),
        f"De um total de {report['total_available']}",
    )
    table.add_row(
        "Efetivo Aluno",
        str(stats["distinct_personnel_count"]),
        "Pessoal distinto filtrado",
    )
    table.add_row(
        f"Horas {stats['highlight_category']}",
        _format_hours(stats["category_hours"]),
        "Segurança filtrada",
    )
    return table


def build_records_table(report: Dict[str, Any]) -> Table:
    rows = report["records"]
    table = Table(
        title="Tabela de Dados Cruzados",
        box=box.ROUNDED,
        caption=f"{len(rows)} registros visíveis",
    )
    table.add_column("Data", style="bold")
    table.add_column("Tipo", style="cyan")
    table.add_column("Horário", style="dim")
    table.add_column("Responsável")
    table.add_column("Duração", justify="right", style="bold")
    for row in rows:
        table.add_row(
            row["date"],
            row["type"],
            f"{row['start_time']} - {row['end_time']}",
            row["personnel"] or "-",
            _format_duration(row["duration_hours"]),
        )
    return table


def build_week_table(report: Dict[str, Any]) -> Table:
    table = Table(title="Serviços por Semana", box=box.ROUNDED, title_justify="left")
    table.add_column("Semana", justify="right", style="cyan")
    table.add_column("Total Serviços", justify="right", style="bold green")
    table.add_column("Novos Serviços", justify="right", style="yellow")
    for week in report["by_week"]:
        table.add_row(str(week["week"]), str(week["total"]), str(week["new"]))
    return table


def print_report(
    report: Dict[str, Any], console: Optional[Console] = None, show_records: bool = True
) -> None:
    """
    Render a report payload (see `build_report`) as rich tables.

    Projections with no rows print an empty-state notice instead of a table.
    """
    console = console or Console()

    console.print(build_kpi_table(report))
    if report["filtered_count"] == 0:
        console.print(f"[yellow]{EMPTY_MESSAGE}[/yellow]")
    else:
        for title, key, header, hours in _CHART_SECTIONS:
            console.print(_bucket_table(title, report[key], header, hours))
        console.print(build_week_table(report))

    if report["hours_by_person"]:
        console.print(_bucket_table("Horas por Aluno", report["hours_by_person"], "Horas", True))
    else:
        console.print(f"[yellow]{EMPTY_STUDENT_MESSAGE}[/yellow]")

    if report.get("malformed_date_ids"):
        console.print(
            "[red]Datas inválidas tratadas como hoje:[/red] "
            + ", ".join(report["malformed_date_ids"])
        )

    if show_records:
        if report["records"]:
            console.print(build_records_table(report))
        else:
            console.print(f"[dim]{EMPTY_RECORDS_MESSAGE}[/dim]")


def print_imports(tasks: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """Render the outcome of each import task."""
    console = console or Console()
    table = Table(title="Importações", box=box.ROUNDED)
    table.add_column("Origem", style="cyan")
    table.add_column("Status")
    table.add_column("Registros", justify="right", style="magenta")
    table.add_column("Duração (s)", justify="right", style="green")
    table.add_column("Erro", style="red")
    styles = {"succeeded": "green", "failed": "red", "cancelled": "yellow", "pending": "dim"}
    for task in tasks:
        status = task["status"]
        table.add_row(
            task["provider"],
            f"[{styles.get(status, 'white')}]{status}[/]",
            str(task["records_added"]),
            f"{task['duration_seconds']:.2f}",
            task["error"] or "",
        )
    console.print(table)
