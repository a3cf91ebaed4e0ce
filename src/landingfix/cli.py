"""CLI interface for landingfix."""

import json
import logging
import sys

import click
from dotenv import load_dotenv
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .categories import FOCUS_CATEGORIES, focus_debug_info, get_expected_structure, normalize_focus_key
from .checklist import run_checklist
from .config import load_settings
from .exceptions import GenerationError, LandingFixError
from .fetcher import fetch_page
from .generator import generate_report
from .models import Report
from .providers import PROVIDERS, get_provider
from .scoring import calculate_benchmark
from .scoring.tables import default_tables

console = Console()

INDUSTRIES = list(default_tables().industries)
GOALS = list(default_tables().goal_aliases)


def configure_logging(level: str) -> None:
    """Send log records through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def score_color(score: int, max_score: int) -> str:
    """Get color for a score relative to its maximum."""
    pct = (score / max_score) * 100 if max_score else 0
    if pct >= 75:
        return "green"
    elif pct >= 50:
        return "yellow"
    elif pct >= 25:
        return "orange1"
    else:
        return "red"


def print_score_bar(score: int, width: int = 20) -> Text:
    """Create a visual 0-100 bar."""
    filled = int((min(score, 100) / 100) * width)
    color = score_color(score, 100)

    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * (width - filled), style="dim")
    bar.append(f" {score}/100", style=f"bold {color}")
    return bar


def print_report(report: Report, url: str, verbose: bool = False) -> None:
    """Print a report to the console."""
    console.print()
    console.print(Panel(
        f"[bold]{url}[/bold]\n"
        f"[dim]Focus: {report.focus}[/dim]",
        title="🔍 LandingFix Report",
        border_style="blue",
    ))

    if report.benchmark is not None:
        console.print()
        console.print("  Benchmark:  ", end="")
        console.print(print_score_bar(report.benchmark, width=25))
    if report.checklist_score is not None:
        console.print("  Checklist:  ", end="")
        console.print(print_score_bar(report.checklist_score, width=25))
    console.print()

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Optimization", justify="right")
    table.add_column("Impact", justify="right")
    table.add_column("Timing")

    for cat in report.categories:
        max_opt = 6 * len(cat.elements)
        max_impact = 4 * len(cat.elements)
        table.add_row(
            cat.category,
            f"[{score_color(cat.optimization_score, max_opt)}]{cat.optimization_score}/{max_opt}[/]",
            f"{cat.impact_score}/{max_impact}",
            cat.timing,
        )

    console.print(table)

    if verbose:
        for cat in report.categories:
            console.print(f"\n[bold]{cat.category}[/bold]\n")
            for el in cat.elements:
                m = el.metrics
                console.print(
                    f"  [cyan]{el.element}[/cyan] "
                    f"[dim](opt {m.optimization}, impact {m.impact}, {m.timing})[/dim]"
                )
                console.print(f"    [dim]Site:[/dim] {el.site_text}")
                console.print(f"    [red]Problem:[/red] {el.problem}")
                console.print(f"    [green]Solution:[/green] {el.solution}")
                for action in el.actions:
                    console.print(f"    [cyan]→ {action}[/cyan]")

    console.print()
    console.print(
        f"  [bold]Totals:[/bold] optimization {report.totals.optimization_score_totale}, "
        f"impact {report.totals.impact_score_totale}, time {report.total_timing}"
    )
    if report.regenerated:
        console.print("  [yellow]⚠ AI output did not match the expected structure; gaps were filled with defaults[/yellow]")

    console.print()
    console.print("[dim]─" * 50 + "[/dim]")
    console.print(f"[dim]landingfix v{__version__}[/dim]")
    console.print()


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx, verbose: bool):
    """LandingFix - AI landing page optimization reports.

    \b
    Quick start:
        landingfix report example.com --focus seo --industry saas
        landingfix benchmark --focus cta --industry ecommerce --goal Sales

    \b
    Commands:
        report      Analyze a landing page with AI and score it
        benchmark   Show the target score for a context
        schema      Show the categories and elements of a focus area
        checklist   Run the industry checklist against a page
    """
    load_dotenv()
    try:
        settings = load_settings()
    except LandingFixError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("url")
@click.option("-f", "--focus", default="copywriting", help="Focus area (copywriting, uxui, mobile, cta, seo)")
@click.option("-i", "--industry", default="other", help=f"Industry ({', '.join(INDUSTRIES)})")
@click.option("-g", "--goal", "goals", multiple=True, help=f"Business goal, repeatable ({', '.join(GOALS)})")
@click.option("-p", "--provider", "provider_name", type=click.Choice(list(PROVIDERS)), help="LLM provider")
@click.option("-m", "--model", help="Model name for the provider")
@click.option("--details", is_flag=True, help="Show every element, not just category totals")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_obj
def report(settings, url: str, focus: str, industry: str, goals: tuple[str, ...],
           provider_name: str | None, model: str | None, details: bool, json_output: bool):
    """Analyze a landing page and print a scored report.

    \b
    Examples:
        landingfix report stripe.com --focus cta --industry saas
        landingfix report example.com -g "Lead Generation" --details
        landingfix report example.com --json
    """
    try:
        provider = get_provider(provider_name or settings.provider, model or settings.model)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    try:
        with console.status(f"[bold blue]Analyzing {url}...[/bold blue]"):
            result = generate_report(
                url,
                focus=focus,
                industry=industry,
                goals=list(goals),
                provider=provider,
                settings=settings,
            )
    except GenerationError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        for err in e.errors:
            console.print(f"  [dim]{err}[/dim]")
        sys.exit(1)
    except LandingFixError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        print_report(result, url, verbose=details)


@cli.command()
@click.option("-f", "--focus", default="copywriting", help="Focus area")
@click.option("-i", "--industry", default="other", help="Industry")
@click.option("-g", "--goal", "goals", multiple=True, help=f"Business goal, repeatable ({', '.join(GOALS)})")
def benchmark(focus: str, industry: str, goals: tuple[str, ...]):
    """Show the benchmark score for a focus, industry and goals.

    \b
    Examples:
        landingfix benchmark --focus seo --industry local -g "Lead Generation"
    """
    score = calculate_benchmark(normalize_focus_key(focus), industry, list(goals))
    click.echo(score)


@cli.command()
@click.argument("focus", type=click.Choice(list(FOCUS_CATEGORIES)))
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def schema(focus: str, json_output: bool):
    """Show the canonical categories and elements for FOCUS."""
    if json_output:
        click.echo(json.dumps(focus_debug_info(focus), indent=2))
        return

    for i, cat in enumerate(get_expected_structure(focus), 1):
        console.print(f"[bold]{i}. {cat.category}[/bold] [dim]({cat.focus_hint})[/dim]")
        for element in cat.elements:
            console.print(f"   • {element}")


@cli.command()
@click.argument("url")
@click.option("-i", "--industry", default="other", help="Industry")
@click.pass_obj
def checklist(settings, url: str, industry: str):
    """Run the industry best-practice checklist against URL."""
    try:
        with console.status(f"[bold blue]Fetching {url}...[/bold blue]"):
            page = fetch_page(url, timeout=settings.timeout, max_html_length=settings.max_html_length)
    except LandingFixError as e:
        console.print(f"[red]Error fetching URL:[/red] {e}")
        sys.exit(1)

    result = run_checklist(page.html, industry)
    console.print(f"\n[bold]{result.industry} checklist[/bold] for {page.url}\n")
    for label, passed in result.items:
        icon = "[green]✓[/green]" if passed else "[red]✗[/red]"
        console.print(f"  {icon} {label}")
    console.print()
    console.print("  Score: ", end="")
    console.print(print_score_bar(result.score))
    console.print()


# Convenience: allow `landingfix URL` as shortcut for `landingfix report URL`
def main():
    """Entry point that handles both `landingfix URL` and `landingfix report URL`."""
    args = sys.argv[1:]

    if args and not args[0].startswith("-") and args[0] not in cli.commands:
        if "." in args[0] or args[0] == "localhost":
            sys.argv.insert(1, "report")

    cli()


if __name__ == "__main__":
    main()
