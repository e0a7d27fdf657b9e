"""Rich display helpers for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nlshell.models.intent import Intent, IntentMatch
from nlshell.models.plan import Template
from nlshell.parser.command_validator import ValidationResult
from nlshell.planner import PlanResult

console = Console()


def print_match(match: IntentMatch) -> None:
    table = Table(title="Matched Intent", show_header=False, expand=True)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Intent", match.intent.name)
    table.add_row("Domain", _domain(match.intent))
    table.add_row("Confidence", f"{match.confidence:.0%}")
    if match.matched_keywords:
        table.add_row("Keywords", ", ".join(match.matched_keywords))
    if match.extracted_entities:
        entities_str = ", ".join(
            f"{name}={e.as_binding()}" for name, e in match.extracted_entities.items()
        )
        table.add_row("Entities", entities_str)
    console.print(table)


def print_plan(result: PlanResult) -> None:
    if result.plan is None:
        return
    console.print(
        Panel(
            f"[bold green]{escape(result.plan.command)}[/]",
            title=f"Command ({result.source.value})",
            border_style="green",
        )
    )
    if result.plan.operations:
        table = Table(title="Pipeline", expand=True)
        table.add_column("#", style="bold", width=3)
        table.add_column("Operation", style="cyan")
        table.add_column("Fragment")
        for i, op in enumerate(result.plan.operations, 1):
            table.add_row(str(i), op.op, escape(op.to_shell_fragment()))
        console.print(table)


def print_no_match(result: PlanResult) -> None:
    console.print(
        Panel(
            f"[yellow]{result.reason or 'No command could be generated'}[/]",
            title="No Match",
            border_style="yellow",
        )
    )


def print_validation(result: ValidationResult, threshold: float) -> None:
    style = "red" if result.should_warn(threshold) else "green"
    verdict = "VALID" if result.is_valid else "INVALID"
    lines = [f"[{style}]{verdict}[/] ({result.confidence:.0%}) {result.reason}"]
    lines.extend(f"  - {s}" for s in result.suggestions)
    console.print(Panel("\n".join(lines), title="Validation", border_style=style))


def print_error(message: str) -> None:
    console.print(Panel(f"[red]{message}[/]", title="Error", border_style="red"))


def print_info(message: str) -> None:
    console.print(f"[dim]{message}[/]")


def print_intents(intents: list[Intent]) -> None:
    table = Table(title="Intents", expand=True)
    table.add_column("Name", style="bold cyan")
    table.add_column("Domain")
    table.add_column("Threshold", justify="right")
    table.add_column("Entities")
    for intent in intents:
        table.add_row(
            intent.name,
            _domain(intent),
            f"{intent.confidence_threshold:.2f}",
            ", ".join(intent.entities),
        )
    console.print(table)


def print_templates(templates: list[Template]) -> None:
    table = Table(title="Templates", expand=True)
    table.add_column("Name", style="bold cyan")
    table.add_column("Template")
    table.add_column("Description")
    for template in templates:
        table.add_row(template.name, escape(template.template), template.description)
    console.print(table)


def _domain(intent: Intent) -> str:
    domain = intent.domain
    return domain.value if hasattr(domain, "value") else str(domain)
