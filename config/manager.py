"""Konfigurationsmanager für den Kursplaner.

Die Konfiguration liegt als kommentierte YAML-Datei vor (ruamel.yaml) und wird
beim Laden vollständig über die Pydantic-Modelle aus config/schema.py geprüft.
Jeder Parameter bekommt seine Field-Beschreibung als Zeilenkommentar.
"""

import json
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import NamedTuple, Optional

from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from config.defaults import default_planner_config
from config.schema import (
    EnumerationConfig,
    PlannerConfig,
    ScoringConfig,
    TagConfig,
)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


class _Section(NamedTuple):
    key: str
    label: str
    hint: str
    model: type[BaseModel]


# Reihenfolge = Reihenfolge in YAML, Anzeige und Bearbeitungsmenü
_SECTIONS = (
    _Section("scoring", "Bewertung",
             "Gewichte in Punkten, 0 = deaktiviert. Uhrzeiten als HH:MM.",
             ScoringConfig),
    _Section("tags", "Ranking-Tags",
             "Schwellen für die beschreibenden Tags eines Stundenplans.",
             TagConfig),
    _Section("enumeration", "Aufzählung",
             "Ohne Zielanzahl wird ab large_catalog_threshold Kursen\n"
             "per Zufallsauswahl statt vollständig gesucht.",
             EnumerationConfig),
)


def _yaml_header() -> str:
    return (
        "# ============================================\n"
        "# Kursplaner — Konfiguration\n"
        f"# Erstellt: {date.today().isoformat()}\n"
        "# ============================================\n"
    )


def _field_descriptions(model: type[BaseModel]) -> dict[str, str]:
    return {
        name: info.description
        for name, info in model.model_fields.items()
        if info.description
    }


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "planner_config.yaml"

    def __init__(self, path: Optional[Path] = None) -> None:
        if path is not None:
            self.DEFAULT_CONFIG = Path(path)

    def first_run_check(self) -> bool:
        """True, solange noch keine Konfigurationsdatei angelegt wurde."""
        return not self.DEFAULT_CONFIG.exists()

    def _target(self, path: Optional[Path]) -> Path:
        return Path(path) if path else self.DEFAULT_CONFIG

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> PlannerConfig:
        """Liest die YAML-Datei und validiert sie als PlannerConfig.

        Fehlende Abschnitte oder Parameter werden mit Standardwerten ergänzt.
        Syntax- und Validierungsfehler werden als ValueError mit Dateinamen
        weitergereicht.
        """
        target = self._target(path)
        if not target.exists():
            raise FileNotFoundError(
                f"Keine Konfiguration unter {target} gefunden.\n"
                f"Anlegen mit: python main.py config init"
            )
        try:
            with open(target, "r", encoding="utf-8") as f:
                raw = yaml.load(f)
        except YAMLError as e:
            raise ValueError(f"YAML-Syntaxfehler in {target}: {e}") from e
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise ValueError(
                f"Ungültige Konfiguration in {target}: erwartet Schlüssel/Wert-Paare, "
                f"gefunden {type(raw).__name__}"
            )
        try:
            return PlannerConfig.model_validate(dict(raw))
        except ValidationError as e:
            raise ValueError(f"Ungültige Werte in {target}:\n{e}") from e

    def load_or_default(self, path: Optional[Path] = None) -> PlannerConfig:
        target = self._target(path)
        if not target.exists():
            return default_planner_config()
        return self.load(target)

    # ─── Speichern ───

    def save(self, config: PlannerConfig, path: Optional[Path] = None) -> Path:
        """Schreibt die Konfiguration als kommentierte YAML-Datei."""
        target = self._target(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(_yaml_header() + "\n")
            yaml.dump(self._to_commented_map(config), f)
        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")
        return target

    def _to_commented_map(self, config: PlannerConfig) -> CommentedMap:
        # Umweg über JSON, damit nur YAML-taugliche Grundtypen übrig bleiben
        raw = json.loads(config.model_dump_json())
        root = CommentedMap(planner_name=raw["planner_name"])
        for section in _SECTIONS:
            values = CommentedMap(raw[section.key])
            for name, text in _field_descriptions(section.model).items():
                if name in values:
                    values.yaml_add_eol_comment(text, name)
            root[section.key] = values
            root.yaml_set_comment_before_after_key(
                section.key, before=f"\n─── {section.label} ───\n{section.hint}",
            )
        return root

    # ─── Anzeige ───

    def show(self, config: PlannerConfig) -> None:
        console.print(Panel(
            f"[bold]{escape(config.planner_name)}[/bold]",
            title="Kursplaner-Konfiguration",
            border_style="cyan",
        ))
        for section in _SECTIONS:
            console.print(self._section_table(section, getattr(config, section.key)))

    def _section_table(self, section: _Section, values: BaseModel) -> Table:
        descriptions = _field_descriptions(section.model)
        table = Table(title=section.label, box=box.ROUNDED)
        table.add_column("Parameter", style="bold")
        table.add_column("Wert", justify="right")
        table.add_column("Bedeutung", style="dim")
        for name, value in values.model_dump().items():
            table.add_row(name, str(value), descriptions.get(name, ""))
        return table

    # ─── Interaktives Bearbeiten ───

    def edit_interactive(self, config: PlannerConfig) -> PlannerConfig:
        """Menü über alle Abschnitte; '0' speichert und beendet."""
        choices = {str(i): s for i, s in enumerate(_SECTIONS, start=1)}
        while True:
            console.print()
            console.print(Panel("[bold]Konfiguration bearbeiten[/bold]", border_style="cyan"))
            for number, section in choices.items():
                console.print(f"  [bold]{number}.[/bold] {section.label}")
            console.print("  [bold]0.[/bold] Speichern & Beenden")

            choice = Prompt.ask("\nAuswahl", choices=["0", *choices], default="0")
            if choice == "0":
                self.save(config)
                return config
            section = choices[choice]
            edited = self._edit_section(section, getattr(config, section.key))
            config = config.model_copy(update={section.key: edited})

    def _edit_section(self, section: _Section, values: BaseModel) -> BaseModel:
        """Fragt jeden Parameter ab (Enter = unverändert) und validiert neu."""
        console.print(self._section_table(section, values))
        if not Confirm.ask("Werte ändern?", default=False):
            return values

        current = values.model_dump()
        answers = {
            name: IntPrompt.ask(name, default=value) if isinstance(value, int)
            else Prompt.ask(name, default=str(value))
            for name, value in current.items()
        }
        try:
            return section.model.model_validate(answers)
        except ValidationError as e:
            console.print(f"[red]Ungültige Werte, Abschnitt bleibt unverändert:[/red]\n{e}")
            return values
