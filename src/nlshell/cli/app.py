"""Typer CLI commands."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from nlshell.cli.output import (
    print_error,
    print_info,
    print_intents,
    print_match,
    print_no_match,
    print_plan,
    print_templates,
    print_validation,
)
from nlshell.config.settings import Settings
from nlshell.engine.builtin import BuiltinIntents
from nlshell.exceptions import NlshellError

console = Console()
app = typer.Typer(
    name="nlshell", help="Turn natural-language requests into shell commands."
)


def _load_settings() -> Settings:
    try:
        return Settings()
    except Exception as exc:
        print_error(f"Failed to load settings: {exc}")
        raise typer.Exit(1)


def _get_planner(settings: Settings):
    from nlshell.main import build_planner, configure_logging

    configure_logging(settings.log_level)
    return build_planner(settings=settings)


def _get_validator(settings: Settings):
    from nlshell.main import build_validator

    return build_validator(settings=settings)


@app.command()
def ask(
    query: str = typer.Argument(..., help="Natural language request"),
    validate: bool = typer.Option(
        False, "--validate", help="Ask the LLM to review the generated command"
    ),
) -> None:
    """Generate a shell command for a request. Nothing is executed."""
    settings = _load_settings()

    async def _run():
        planner = _get_planner(settings)
        try:
            result = await planner.aplan(query)
            if result.match is not None:
                print_match(result.match)
            if result.plan is None:
                print_no_match(result)
                raise typer.Exit(1)
            print_plan(result)

            if validate:
                validator = _get_validator(settings)
                if validator is None:
                    print_info("Validation skipped: no OpenAI API key configured.")
                    return
                verdict = await validator.validate(
                    query, result.plan, result.match.intent.name
                )
                print_validation(verdict, settings.validation_threshold)
        except NlshellError as exc:
            print_error(str(exc))
            raise typer.Exit(1)

    asyncio.run(_run())


@app.command()
def intents() -> None:
    """List the built-in intents."""
    print_intents(BuiltinIntents().all_intents())


@app.command()
def templates() -> None:
    """List the built-in command templates."""
    print_templates(BuiltinIntents().all_templates())


@app.command(name="config")
def show_config() -> None:
    """Show current configuration."""
    settings = _load_settings()

    table_data = {
        "Model": settings.openai_model,
        "API Key": "set" if settings.llm_available else "not set",
        "Log Level": settings.log_level,
        "Cache Capacity": str(settings.cache_capacity),
        "Fuzzy Matching": str(settings.fuzzy_enabled),
        "Fuzzy Threshold": str(settings.fuzzy_similarity_threshold),
        "Fuzzy Weight": str(settings.fuzzy_weight),
        "Use Pipeline": str(settings.use_pipeline),
        "LLM Extraction": str(settings.llm_extraction),
        "Validation Threshold": str(settings.validation_threshold),
    }

    table = Table(title="Configuration", show_header=False)
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")
    for k, v in table_data.items():
        table.add_row(k, v)
    console.print(table)
