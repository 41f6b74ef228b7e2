"""CLI commands for modelprices."""

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from modelprices import __logo__, __version__
from modelprices.catalog.costs import cost_per_volume
from modelprices.catalog.errors import CostUnavailable, ModelPricesError
from modelprices.catalog.loader import Dataset
from modelprices.catalog.models import CostKind, ModelRecord
from modelprices.catalog import query
from modelprices.config.schema import Config

app = typer.Typer(
    name="modelprices",
    help=f"{__logo__} modelprices - AI model pricing and capability lookup",
    no_args_is_help=True,
)

console = Console()

SORT_KEYS = {
    "input": query.cost_key(CostKind.INPUT_TOKEN),
    "output": query.cost_key(CostKind.OUTPUT_TOKEN),
    "context": query.context_key,
}

SourceOption = typer.Option(None, "--source", "-s", help="Pricing document path or URL (defaults to config)")


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} modelprices v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """modelprices - AI model pricing and capability lookup."""
    pass


def _load(source: Optional[str]) -> tuple[Dataset, Config]:
    """Load config, configure logging and build the dataset."""
    from modelprices.config.loader import load_config
    from modelprices.core.logger import configure_logger
    from modelprices.catalog.loader import load_dataset
    from modelprices.catalog.source import is_url, load_document

    config = load_config()
    configure_logger(config)
    location = source or config.source.location

    try:
        if is_url(location):
            with console.status(f"[bold cyan]Fetching {location}..."):
                document = load_document(location, timeout=config.source.timeout)
        else:
            document = load_document(location, timeout=config.source.timeout)
        dataset = load_dataset(document)
    except ModelPricesError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    return dataset, config


def _format_price(value: float) -> str:
    if value == 0:
        return "$0"
    if value >= 0.01:
        return f"${value:,.2f}"
    return f"${value:.6g}"


def _price(record: ModelRecord, kind: CostKind, volume: int) -> str:
    try:
        return _format_price(cost_per_volume(record, kind, volume))
    except CostUnavailable:
        return "-"


def _volume_label(volume: int) -> str:
    if volume % 1_000_000 == 0:
        return f"{volume // 1_000_000}M"
    if volume % 1_000 == 0:
        return f"{volume // 1_000}K"
    return f"{volume:,}"


# ============================================================================
# Query Commands
# ============================================================================


@app.command("list")
def list_models(
    provider: str = typer.Option(None, "--provider", "-p", help="Filter by provider"),
    mode: str = typer.Option(None, "--mode", "-m", help="Filter by mode (chat, embedding, ...)"),
    capability: List[str] = typer.Option([], "--capability", "-c", help="Require a capability (repeatable)"),
    sort: str = typer.Option(None, "--sort", help="Sort by input, output or context"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
    limit: int = typer.Option(None, "--limit", "-n", help="Show at most N models (defaults to config)"),
    source: Optional[str] = SourceOption,
):
    """List models with pricing and context windows."""
    if sort and sort not in SORT_KEYS:
        console.print(f"[red]Error: --sort must be one of {', '.join(SORT_KEYS)}[/red]")
        raise typer.Exit(2)

    dataset, config = _load(source)
    volume = config.query.default_volume
    if limit is None:
        limit = config.query.default_limit
    if limit < 0:
        console.print("[red]Error: --limit must be non-negative[/red]")
        raise typer.Exit(2)

    predicates = []
    if provider:
        predicates.append(query.by_provider(provider))
    if mode:
        predicates.append(query.by_mode(mode))
    for name in capability:
        predicates.append(query.with_capability(name))

    pairs = list(query.filter_records(dataset, query.all_of(*predicates)))
    if sort:
        pairs = query.sort_by(pairs, SORT_KEYS[sort], "desc" if desc else "asc")
    pairs = query.top_n(pairs, limit)

    if not pairs:
        console.print("No models match.")
        return

    label = _volume_label(volume)
    table = Table(title="AI Model Pricing")
    table.add_column("ID", style="cyan")
    table.add_column("Provider", style="magenta")
    table.add_column("Mode", style="green")
    table.add_column(f"Input / {label}", style="yellow", justify="right")
    table.add_column(f"Output / {label}", style="yellow", justify="right")
    table.add_column("Context", style="blue", justify="right")

    for model_id, record in pairs:
        ctx = query.context_key(record)
        table.add_row(
            model_id,
            record.provider or "-",
            record.mode or "-",
            _price(record, CostKind.INPUT_TOKEN, volume),
            _price(record, CostKind.OUTPUT_TOKEN, volume),
            f"{ctx:,}" if ctx is not None else "Unknown",
        )

    console.print(table)
    console.print(f"[dim]{len(pairs)} of {len(dataset)} models[/dim]")


@app.command("info")
def info(
    model_id: str = typer.Argument(..., help="Model ID"),
    source: Optional[str] = SourceOption,
):
    """Show everything known about one model."""
    dataset, _ = _load(source)

    record = dataset.get(model_id)
    if record is None:
        console.print(f"[red]Error: Model '{model_id}' not found.[/red]")
        raise typer.Exit(1)

    limits = record.context_limits
    caps = sorted(name for name, flag in record.capabilities.items() if flag)
    lines = [
        f"[bold]ID:[/bold] {record.id}",
        f"[bold]Provider:[/bold] {record.provider or 'Unknown'}",
        f"[bold]Mode:[/bold] {record.mode or 'Unknown'}",
        f"[bold]Max tokens:[/bold] {limits.max_tokens if limits.max_tokens is not None else 'Unknown'}",
        f"[bold]Max input tokens:[/bold] {limits.max_input_tokens if limits.max_input_tokens is not None else 'Unknown'}",
        f"[bold]Max output tokens:[/bold] {limits.max_output_tokens if limits.max_output_tokens is not None else 'Unknown'}",
        f"[bold]Capabilities:[/bold] {', '.join(caps) if caps else 'None'}",
    ]
    if record.deprecation_date:
        lines.append(f"[bold]Deprecation date:[/bold] {record.deprecation_date.isoformat()}")
    if record.source:
        lines.append(f"[bold]Source:[/bold] {record.source}")

    console.print(Panel("\n".join(lines), title=f"Model Info: {record.id}", border_style="cyan"))

    if record.costs:
        table = Table(title="Costs")
        table.add_column("Kind", style="cyan")
        table.add_column("Per unit", style="yellow", justify="right")
        table.add_column("Unit", style="dim")
        for kind, value in record.costs.items():
            table.add_row(kind.name.lower(), f"{value:.6g}", kind.unit)
        console.print(table)

    issues = dataset.report.for_id(model_id)
    for issue in issues:
        console.print(f"[yellow]⚠ {escape(str(issue))}[/yellow]")


@app.command("cost")
def cost(
    model_id: str = typer.Argument(..., help="Model ID"),
    kind: str = typer.Option("input_token", "--kind", "-k", help="Cost kind (e.g. input_token, output_cost_per_token)"),
    volume: int = typer.Option(None, "--volume", help="Units to price (defaults to config)"),
    source: Optional[str] = SourceOption,
):
    """Price a volume of one cost kind for a model."""
    try:
        cost_kind = CostKind.parse(kind)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(2)

    dataset, config = _load(source)
    record = dataset.get(model_id)
    if record is None:
        console.print(f"[red]Error: Model '{model_id}' not found.[/red]")
        raise typer.Exit(1)

    amount = volume if volume is not None else config.query.default_volume
    try:
        value = cost_per_volume(record, cost_kind, amount)
    except (ModelPricesError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(
        f"{model_id}: [bold]{_format_price(value)}[/bold] "
        f"for {amount:,} × {cost_kind.unit} ({cost_kind.name.lower()})"
    )


@app.command("providers")
def providers(source: Optional[str] = SourceOption):
    """Count models per provider."""
    dataset, _ = _load(source)
    counts = query.count_by_provider(dataset)

    table = Table(title="Providers")
    table.add_column("Provider", style="magenta")
    table.add_column("Models", justify="right")
    for name, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        table.add_row(name, str(count))
    console.print(table)

    missing = len(dataset) - sum(counts.values())
    if missing:
        console.print(f"[dim]{missing} model(s) without a provider[/dim]")


@app.command("validate")
def validate(source: Optional[str] = SourceOption):
    """Report entries that were rejected or had fields dropped."""
    dataset, _ = _load(source)
    report = dataset.report

    if not report.issues:
        console.print(f"[green]✓[/green] {len(dataset)} models, no issues.")
        return

    table = Table(title="Validation Issues")
    table.add_column("Model", style="cyan")
    table.add_column("Kind", style="yellow")
    table.add_column("Field", style="dim")
    table.add_column("Message")
    for model_id, found in report.issues.items():
        for issue in found:
            style = "red" if issue.is_error else "yellow"
            table.add_row(model_id, f"[{style}]{issue.kind.value}[/{style}]", issue.field or "-", escape(issue.message))
    console.print(table)

    rejected = len(report.errors)
    console.print(
        f"{len(dataset)} models loaded, {rejected} rejected, "
        f"{report.issue_count} issue(s)."
    )
    if rejected:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
