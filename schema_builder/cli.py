"""
Schema Builder CLI
==================

Command-line interface for inspecting a schema builder.

TARGET is "package.module:attribute", naming a SchemaBuilder instance or a
zero-argument callable returning one.

Usage:
    schema-builder generate TARGET [--context JSON] [--whitelist a,b] [--resolvers]
    schema-builder explain TARGET [--context JSON] [--whitelist a,b]
    schema-builder guards TARGET          List registered guards
    schema-builder stats TARGET           Show fragment counts
    schema-builder init                   Write a default config file
"""

import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from schema_builder.builder import SchemaBuilder
from schema_builder.errors import SchemaBuilderError

app = typer.Typer(
    name="schema-builder",
    help="Schema Builder - guard-filtered GraphQL schema composition",
    add_completion=False,
)
console = Console()


def load_builder(target: str) -> SchemaBuilder:
    """Import a builder from a "module:attribute" path."""
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise typer.BadParameter(f"Expected 'module:attribute', got '{target}'")

    if str(Path.cwd()) not in sys.path:
        sys.path.insert(0, str(Path.cwd()))

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Could not import '{module_name}': {e}")

    obj = getattr(module, attribute, None)
    if obj is None:
        raise typer.BadParameter(f"'{module_name}' has no attribute '{attribute}'")

    if not isinstance(obj, SchemaBuilder) and callable(obj):
        obj = obj()
    if not isinstance(obj, SchemaBuilder):
        raise typer.BadParameter(f"'{target}' is not a SchemaBuilder")
    return obj


def parse_context(context: Optional[str]) -> Any:
    """Parse the --context JSON value."""
    if not context:
        return {}
    try:
        return json.loads(context)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"--context is not valid JSON: {e}")


def parse_whitelist(whitelist: Optional[str]) -> Optional[List[str]]:
    """Parse the --whitelist comma-separated value."""
    if whitelist is None:
        return None
    return [guard_id.strip() for guard_id in whitelist.split(",") if guard_id.strip()]


def describe_resolver(definition: Any) -> str:
    if isinstance(definition, dict):
        return ", ".join(definition) or "-"
    return getattr(definition, "__name__", type(definition).__name__)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Schema Builder CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def generate(
    target: str = typer.Argument(..., help="module:attribute of the builder"),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="Context as JSON"),
    whitelist: Optional[str] = typer.Option(None, "--whitelist", "-w", help="Comma-separated guard ids"),
    resolvers: bool = typer.Option(False, "--resolvers", "-r", help="Show resolvers instead of type defs"),
):
    """Generate type defs (or resolvers) for a context."""
    builder = load_builder(target)
    ctx = parse_context(context)
    guard_whitelist = parse_whitelist(whitelist)

    try:
        if resolvers:
            resolver_map = builder.generate_resolvers(ctx, guard_whitelist)
        else:
            type_defs = builder.generate_type_defs(ctx, guard_whitelist)
    except SchemaBuilderError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not resolvers:
        if type_defs:
            console.print(type_defs, markup=False, highlight=False, soft_wrap=True)
        else:
            console.print("[yellow]Nothing survived the guards[/yellow]")
        return

    table = Table(title="Resolvers")
    table.add_column("Type", style="cyan")
    table.add_column("Name")
    table.add_column("Definition", style="green")

    for name, definition in resolver_map.items():
        if name in ("Query", "Mutation", "Subscription"):
            if not definition:
                table.add_row(name, "-", "(all filtered)")
            for field_name, field_definition in definition.items():
                table.add_row(name, field_name, describe_resolver(field_definition))
        else:
            table.add_row(name, "-", describe_resolver(definition))

    console.print(table)


@app.command()
def explain(
    target: str = typer.Argument(..., help="module:attribute of the builder"),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="Context as JSON"),
    whitelist: Optional[str] = typer.Option(None, "--whitelist", "-w", help="Comma-separated guard ids"),
):
    """Show why each fragment is included or excluded."""
    builder = load_builder(target)

    try:
        report = builder.explain(parse_context(context), parse_whitelist(whitelist))
    except SchemaBuilderError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(report.format(), markup=False, highlight=False, soft_wrap=True)


@app.command()
def guards(
    target: str = typer.Argument(..., help="module:attribute of the builder"),
):
    """List registered guards."""
    builder = load_builder(target)

    table = Table(title="Guards")
    table.add_column("Guard", style="cyan")
    table.add_column("Class")
    table.add_column("Description", style="dim")

    for entry in builder.guards.list_guards():
        table.add_row(entry["id"], entry["class"], entry["description"] or "-")

    console.print(table)

    missing = builder.unresolved_guards()
    if missing:
        console.print(f"[red]Referenced but not registered: {', '.join(missing)}[/red]")
        raise typer.Exit(1)


@app.command()
def stats(
    target: str = typer.Argument(..., help="module:attribute of the builder"),
):
    """Show fragment statistics."""
    builder = load_builder(target)

    console.print(Panel.fit(
        f"[bold]{builder.config.project_name}[/bold]\n"
        f"Guards: {', '.join(builder.get_guard_ids()) or '(none)'}",
        title="Schema Builder",
    ))

    table = Table(title="Fragments")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right", style="green")

    for key, value in builder.get_statistics().items():
        display_key = key.replace("_", " ").title()
        table.add_row(display_key, str(value))

    console.print(table)


@app.command()
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
):
    """Write a default config file in the current directory."""
    from schema_builder.core.config import BuilderConfig, CONFIG_FILENAMES

    config_path = Path.cwd() / CONFIG_FILENAMES[0]

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path}[/yellow]")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    BuilderConfig(project_root=Path.cwd()).save(config_path)
    console.print(f"[green]✓[/green] Created {config_path}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
