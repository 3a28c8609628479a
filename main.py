"""Kursplaner — Haupt-CLI.

Verwendung:
  python main.py config init                   Default-Konfiguration anlegen
  python main.py config show                   Konfiguration anzeigen
  python main.py config edit                   Konfiguration bearbeiten
  python main.py sample                        Demo-Katalog speichern
  python main.py sample --random 25            Zufalls-Katalog mit 25 Kursen
  python main.py import-text kurse.txt         Textliste → Katalog-JSON
  python main.py check <katalog.json>          Machbarkeits-Check
  python main.py conflicts <katalog.json> ID   Konflikte eines Kurses
  python main.py generate <katalog.json>       Stundenpläne erzeugen
  python main.py validate <stundenplan.json>   Exportierten Stundenplan prüfen
"""

import functools
import logging
import random
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich import box
from rich.table import Table

from models.errors import PlannerInputError

console = Console()

# Standard-Pfade
DEFAULT_CATALOG_JSON = Path("output/catalog.json")
DEFAULT_SCHEDULE_JSON = Path("output/schedule.json")


def _setup_logging(verbose: bool) -> None:
    """Leitet das logging-Modul über Rich auf die Konsole."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def _handle_errors(func):
    """Fängt Eingabefehler ab, zeigt sie rot an und beendet mit Status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (PlannerInputError, ValueError, FileNotFoundError) as e:
            console.print(f"[red bold]Fehler:[/red bold] {escape(str(e))}")
            sys.exit(1)
    return wrapper


def _config_manager(ctx: click.Context):
    from config.manager import ConfigManager
    return ConfigManager(ctx.obj.get("config_path"))


def _load_config(ctx: click.Context):
    """Konfiguration aus YAML oder Defaults, falls noch keine existiert."""
    return _config_manager(ctx).load_or_default()


def _load_catalog(path: Path):
    from models.catalog import CourseCatalog
    console.print(f"[bold]Lade Katalog:[/bold] {path}")
    return CourseCatalog.load_json(path)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen, anlegen oder bearbeiten."""


@cmd_config.command("show")
@click.pass_context
@_handle_errors
def config_show(ctx: click.Context):
    """Zeigt die aktuelle Konfiguration an."""
    mgr = _config_manager(ctx)
    if mgr.first_run_check():
        console.print("[dim]Keine Konfigurationsdatei – es gelten die Standardwerte.[/dim]")
    mgr.show(mgr.load_or_default())


@cmd_config.command("init")
@click.pass_context
@_handle_errors
def config_init(ctx: click.Context):
    """Legt eine Konfigurationsdatei mit Standardwerten an."""
    from config.defaults import default_planner_config

    mgr = _config_manager(ctx)
    if not mgr.first_run_check():
        console.print("[yellow]Eine Konfiguration existiert bereits.[/yellow]")
        if not click.confirm("Mit Standardwerten überschreiben?", default=False):
            return
    mgr.save(default_planner_config())


@cmd_config.command("edit")
@click.pass_context
@_handle_errors
def config_edit(ctx: click.Context):
    """Bearbeitet die Konfiguration interaktiv."""
    mgr = _config_manager(ctx)
    mgr.edit_interactive(mgr.load_or_default())


# ─── SAMPLE ───────────────────────────────────────────────────────────────────

@click.command("sample")
@click.option("--random", "random_count", type=int, default=None,
              help="Statt der Demo-Kurse N zufällige Kurse erzeugen.")
@click.option("--seed", default=42, help="Zufalls-Seed für --random.")
@click.option("--output", "-o", default=str(DEFAULT_CATALOG_JSON),
              help="Pfad für den Katalog.")
@_handle_errors
def cmd_sample(random_count: Optional[int], seed: int, output: str):
    """Speichert einen Beispiel-Katalog als JSON."""
    from data.sample_data import RandomCatalogGenerator, sample_catalog

    if random_count is not None:
        catalog = RandomCatalogGenerator(seed=seed).generate(random_count)
    else:
        catalog = sample_catalog()

    out_path = Path(output)
    catalog.save_json(out_path)
    console.print(f"\n[dim]{escape(catalog.summary())}[/dim]")
    console.print(f"[green]✓[/green] Katalog gespeichert: {out_path}")


# ─── IMPORT-TEXT ──────────────────────────────────────────────────────────────

@click.command("import-text")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--catalog", "catalog_path", type=click.Path(path_type=Path), default=None,
              help="Bestehender Katalog, an den angehängt wird.")
@click.option("--output", "-o", default=str(DEFAULT_CATALOG_JSON),
              help="Pfad für den resultierenden Katalog.")
@_handle_errors
def cmd_import_text(datei: Path, catalog_path: Optional[Path], output: str):
    """Importiert Kurse aus einer Textliste (CODE | Name | Credits | Termine)."""
    from data.text_import import parse_course_text
    from models.catalog import CourseCatalog

    existing = _load_catalog(catalog_path).courses if catalog_path else []

    console.print(f"[bold]Importiere:[/bold] {datei}")
    result = parse_course_text(datei.read_text(encoding="utf-8"), existing)

    console.print(f"[green]✓[/green] {len(result.added)} Kurs(e) übernommen")
    for entry in result.duplicates:
        console.print(f"  [yellow]Doppelt, übersprungen:[/yellow] {escape(entry)}")
    for entry in result.conflicts:
        console.print(f"  [yellow]Konflikt, übersprungen:[/yellow] {escape(entry)}")

    catalog = CourseCatalog(courses=[*existing, *result.added])
    out_path = Path(output)
    catalog.save_json(out_path)
    console.print(f"[green]✓[/green] Katalog gespeichert: {out_path} ({len(catalog)} Kurse)")


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@click.argument("catalog_path", type=click.Path(path_type=Path))
@click.option("--count", "-k", type=int, default=None, help="Gewünschte Kursanzahl.")
@_handle_errors
def cmd_check(catalog_path: Path, count: Optional[int]):
    """Führt einen Machbarkeits-Check auf einem Katalog durch."""
    catalog = _load_catalog(catalog_path)
    console.print(f"\n{escape(catalog.summary())}\n")
    report = catalog.validate_feasibility(target_count=count)
    report.print_rich()
    sys.exit(0 if report.is_feasible else 1)


# ─── CONFLICTS ────────────────────────────────────────────────────────────────

@click.command("conflicts")
@click.argument("catalog_path", type=click.Path(path_type=Path))
@click.argument("course_id")
@_handle_errors
def cmd_conflicts(catalog_path: Path, course_id: str):
    """Listet die Zeitkonflikte eines Kurses mit allen übrigen Kursen."""
    from solver.conflicts import find_conflicts

    catalog = _load_catalog(catalog_path)
    course = catalog.get(course_id)
    if course is None:
        raise ValueError(f"Kurs-ID '{course_id}' nicht im Katalog.")

    messages = find_conflicts(course, catalog.courses)
    if not messages:
        console.print(f"[green]✓[/green] {escape(str(course))} überschneidet sich mit keinem anderen Kurs.")
        return
    console.print(f"[bold]{escape(str(course))}[/bold]: {len(messages)} Konflikt(e)")
    for msg in messages:
        console.print(f"  [red]✗[/red] {escape(msg)}")


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.argument("catalog_path", type=click.Path(path_type=Path))
@click.option("--count", "-k", type=int, default=None,
              help="Genau so viele Kurse pro Stundenplan (sonst alle Größen).")
@click.option("--seed", type=int, default=None,
              help="Seed für den Zufallsmodus (reproduzierbar).")
@click.option("--top", default=5, show_default=True, help="Anzahl angezeigter Stundenpläne.")
@click.option("--tag", default=None, help="Nur Stundenpläne mit diesem Ranking-Tag.")
@click.option("--search", default=None, help="Suchbegriff (Kursname oder Kürzel).")
@click.option("--sort", "sort_by", default="score", show_default=True,
              type=click.Choice(["score", "gaps", "hours", "subjects"]))
@click.option("--json", "json_out", type=click.Path(path_type=Path), default=None,
              help="Besten Stundenplan als vollständiges JSON speichern.")
@click.option("--calendar", "calendar_out", type=click.Path(path_type=Path), default=None,
              help="Besten Stundenplan als Kalender-Export speichern.")
@click.option("--excel", "excel_out", type=click.Path(path_type=Path), default=None,
              help="Alle angezeigten Stundenpläne als Excel-Datei.")
@click.option("--pdf", "pdf_out", type=click.Path(path_type=Path), default=None,
              help="Alle angezeigten Stundenpläne als PDF.")
@click.option("--report/--no-report", default=True, help="Qualitätsbericht ausgeben.")
@click.pass_context
@_handle_errors
def cmd_generate(
    ctx: click.Context,
    catalog_path: Path,
    count: Optional[int],
    seed: Optional[int],
    top: int,
    tag: Optional[str],
    search: Optional[str],
    sort_by: str,
    json_out: Optional[Path],
    calendar_out: Optional[Path],
    excel_out: Optional[Path],
    pdf_out: Optional[Path],
    report: bool,
):
    """Erzeugt alle konfliktfreien Stundenpläne aus einem Katalog."""
    from analysis.quality_report import QualityAnalyzer
    from analysis.schedule_filter import ScheduleQuery, available_tags, filter_schedules
    from export.tui_renderer import print_schedule, print_schedule_list
    from solver.generator import ScheduleGenerator

    config = _load_config(ctx)
    catalog = _load_catalog(catalog_path)

    rng = random.Random(seed) if seed is not None else None
    generator = ScheduleGenerator(catalog, target_count=count, config=config, rng=rng)

    with console.status("[bold]Stundenpläne werden berechnet...[/bold]"):
        result = generator.generate()

    if not result.schedules:
        console.print(f"[yellow]{result.message}[/yellow]")
        return
    console.print(f"[green]✓[/green] {result.message}")

    query = ScheduleQuery(ranking_tag=tag, search=search, sort_by=sort_by)
    shown = filter_schedules(result.schedules, query)
    if not shown:
        console.print(
            "[yellow]Kein Stundenplan passt zum Filter.[/yellow]\n"
            f"[dim]Verfügbare Tags: {escape(', '.join(available_tags(result.schedules)))}[/dim]"
        )
        return

    print_schedule_list(shown[:top], console=console)
    print_schedule(shown[0], rank=1, console=console)

    if report:
        analyzer = QualityAnalyzer()
        analyzer.print_rich(analyzer.analyze(result))

    _export_results(shown, config, json_out, calendar_out, excel_out, pdf_out)


def _export_results(schedules, config, json_out, calendar_out, excel_out, pdf_out) -> None:
    """Schreibt die gewünschten Exportdateien."""
    from export.json_export import save_schedule_json

    if json_out:
        path = save_schedule_json(schedules[0], json_out, full=True)
        console.print(f"[green]✓[/green] JSON gespeichert: {path}")
    if calendar_out:
        path = save_schedule_json(schedules[0], calendar_out, title=config.planner_name)
        console.print(f"[green]✓[/green] Kalender-Export gespeichert: {path}")
    if excel_out:
        from export.excel_export import ExcelExporter
        path = ExcelExporter(schedules, config).export(excel_out)
        console.print(f"[green]✓[/green] Excel gespeichert: {path}")
    if pdf_out:
        from export.pdf_export import PdfExporter
        path = PdfExporter(schedules, config).export(pdf_out)
        console.print(f"[green]✓[/green] PDF gespeichert: {path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.argument("schedule_path", type=click.Path(path_type=Path),
                default=str(DEFAULT_SCHEDULE_JSON))
@click.option("--catalog", "catalog_path", type=click.Path(path_type=Path), default=None,
              help="Katalog, gegen den die Kurse abgeglichen werden.")
@click.pass_context
@_handle_errors
def cmd_validate(ctx: click.Context, schedule_path: Path, catalog_path: Optional[Path]):
    """Prüft einen exportierten Stundenplan (JSON) auf Konflikte und Kennzahlen."""
    from analysis.schedule_validator import ScheduleValidator
    from export.json_export import load_schedule_json
    from export.tui_renderer import print_schedule

    schedule = load_schedule_json(schedule_path)
    catalog = _load_catalog(catalog_path) if catalog_path else None

    print_schedule(schedule, console=console)
    report = ScheduleValidator(_load_config(ctx)).validate(schedule, catalog)
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


# ─── TAGS ─────────────────────────────────────────────────────────────────────

@click.command("tags")
def cmd_tags():
    """Listet alle möglichen Ranking-Tags."""
    from config.defaults import ALL_TAGS

    table = Table(title="Ranking-Tags", box=box.ROUNDED)
    table.add_column("Tag", style="bold")
    for tag in ALL_TAGS:
        table.add_row(tag)
    console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Ausgaben anzeigen.")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur Konfigurationsdatei (YAML).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[Path]):
    """Kursplaner: konfliktfreie Stundenpläne aus einem Kurskatalog.

    Starten Sie mit: python main.py sample && python main.py generate output/catalog.json
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main():
    """Einstiegspunkt. Zeigt beim ersten Aufruf ohne Argumente eine Begrüßung."""
    from config.manager import ConfigManager

    if len(sys.argv) == 1 and ConfigManager().first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Kursplaner![/bold]\n\n"
            "Keine Konfiguration gefunden – es gelten die Standardwerte.\n"
            "  [bold]python main.py config init[/bold]   Konfiguration anlegen\n"
            "  [bold]python main.py sample[/bold]        Demo-Katalog erzeugen",
            border_style="cyan",
        ))

    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_sample)
cli.add_command(cmd_import_text)
cli.add_command(cmd_check)
cli.add_command(cmd_conflicts)
cli.add_command(cmd_generate)
cli.add_command(cmd_validate)
cli.add_command(cmd_tags)


if __name__ == "__main__":
    main()
