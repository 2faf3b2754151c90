"""
Command-line interface for SEO Content Analyzer.

Provides commands for keyword density, language precision, LSI term
integration, problem-solution alignment and internal link analysis.
"""

import json
import logging
import sys
from functools import wraps
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .broken_links import detect_broken_links
from .config import BrokenLinkPolicy, LinkGraphPolicy
from .keyword_density import analyze_keyword_density
from .keyword_loader import KeywordLoadError, load_keyword_list, load_lsi_keywords
from .language_precision import LanguagePrecisionEngine
from .link_distribution import LinkDistributionAnalyzer
from .lsi_integrator import LSIKeywordIntegrator
from .models import InvalidPageDataError, to_dict
from .page_graph import PageGraphLoadError, build_incoming_links, load_page_graph
from .problem_solution import ProblemSolutionAligner

console = Console()

SEVERITY_STYLES = {"high": "red", "medium": "yellow", "low": "dim"}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _emit_json(data) -> None:
    click.echo(json.dumps(to_dict(data), indent=2))


def _read_content(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def command_options(func: Callable) -> Callable:
    """Add --json and --verbose to a command and map known errors to exit code 1."""

    @click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON instead of tables.")
    @click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
    @wraps(func)
    def wrapper(*args, as_json: bool, verbose: bool, **kwargs):
        _configure_logging(verbose)
        try:
            return func(*args, as_json=as_json, verbose=verbose, **kwargs)
        except KeywordLoadError as e:
            console.print(f"[red]Keyword loading error:[/red] {e}")
            sys.exit(1)
        except PageGraphLoadError as e:
            console.print(f"[red]Page graph error:[/red] {e}")
            sys.exit(1)
        except InvalidPageDataError as e:
            console.print(f"[red]Invalid page data:[/red] {e}")
            sys.exit(1)
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]Could not read input:[/red] {e}")
            sys.exit(1)
        except Exception as e:
            console.print(f"[red]Unexpected error:[/red] {e}")
            if verbose:
                import traceback
                console.print(traceback.format_exc())
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(__version__, prog_name="seo-analyze")
def main() -> None:
    """
    SEO Content Analyzer - Analyze content and internal links for SEO.

    Examples:

        seo-analyze density article.md -k "content marketing"

        seo-analyze links pages.json --homepage https://example.com/ --check-broken
    """


@main.command()
@click.argument("content_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--keyword", "-k", "keywords", multiple=True, help="Target keyword (repeatable).")
@click.option(
    "--keywords-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="CSV or Excel file with a keyword column.",
)
@command_options
def density(
    content_file: Path,
    keywords: tuple[str, ...],
    keywords_file: Optional[Path],
    as_json: bool,
    verbose: bool,
) -> None:
    """Suggest keyword density and structure improvements."""
    target_keywords = list(keywords)
    if keywords_file:
        target_keywords.extend(load_keyword_list(keywords_file))
    if not target_keywords:
        console.print("[red]Error:[/red] Provide at least one --keyword or a --keywords-file")
        sys.exit(1)

    suggestions = analyze_keyword_density(_read_content(content_file), target_keywords)

    if as_json:
        _emit_json(suggestions)
        return

    if not suggestions:
        console.print("[green]No issues found.[/green]")
        return

    table = Table(title="Content Suggestions", show_header=True)
    table.add_column("Severity")
    table.add_column("Type", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Message")
    for s in suggestions:
        style = SEVERITY_STYLES.get(s.severity.value, "")
        table.add_row(f"[{style}]{s.severity.value}[/{style}]", s.type.value, s.title, s.message)
    console.print(table)


@main.command()
@click.argument("content_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the enhanced content to this file.",
)
@command_options
def precision(content_file: Path, output: Optional[Path], as_json: bool, verbose: bool) -> None:
    """Replace vague language and score word choice precision."""
    content = _read_content(content_file)
    engine = LanguagePrecisionEngine()

    result = engine.enhance_precision(content)
    score_before = engine.calculate_precision_score(content)
    score_after = engine.calculate_precision_score(result.content)

    if output:
        output.write_text(result.content, encoding="utf-8")

    if as_json:
        _emit_json({
            "score_before": score_before,
            "score_after": score_after,
            "result": to_dict(result),
        })
        return

    console.print(Panel.fit(
        f"Precision score: [bold]{score_before}[/bold] -> [bold green]{score_after}[/bold green]",
        border_style="blue",
    ))
    if result.changes:
        table = Table(title="Changes", show_header=True)
        table.add_column("Original", style="yellow")
        table.add_column("Replacement", style="green")
        for change in result.changes:
            table.add_row(change.original, change.optimized)
        console.print(table)
    else:
        console.print("[green]No vague language found.[/green]")

    if output and verbose:
        console.print(f"\n[dim]Enhanced content written to: {output}[/dim]")


@main.command()
@click.argument("content_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--terms",
    "-t",
    "terms_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="CSV or Excel file of LSI terms.",
)
@click.option(
    "--competitor",
    "-c",
    "competitor_files",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    multiple=True,
    help="Competitor content file used for usage patterns (repeatable).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the optimized content to this file.",
)
@command_options
def lsi(
    content_file: Path,
    terms_file: Path,
    competitor_files: tuple[Path, ...],
    output: Optional[Path],
    as_json: bool,
    verbose: bool,
) -> None:
    """Integrate semantically related terms into content."""
    integrator = LSIKeywordIntegrator()
    terms = load_lsi_keywords(terms_file)

    patterns = []
    if competitor_files:
        analysis = integrator.analyze_competitor_lsi_patterns(
            [_read_content(path) for path in competitor_files]
        )
        patterns = analysis.patterns
        if verbose:
            console.print(f"  Found {len(analysis.terms)} competitor term(s)")

    result = integrator.integrate_semantic_terms(_read_content(content_file), terms, patterns)

    if output:
        output.write_text(result.optimized_content, encoding="utf-8")

    if as_json:
        _emit_json(result)
        return

    table = Table(title="LSI Integration", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Terms integrated", str(result.integrated_terms))
    table.add_row("Semantic coverage", f"{result.semantic_coverage}%")
    table.add_row("Naturalness", f"{result.naturalness_score}")
    table.add_row("Context preservation", f"{result.context_preservation}%")
    console.print(table)


@main.command()
@click.argument("content_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--problem", "-p", "problems", multiple=True, help="User problem phrase (repeatable).")
@command_options
def align(content_file: Path, problems: tuple[str, ...], as_json: bool, verbose: bool) -> None:
    """Check that content addresses user problems with solutions."""
    aligner = ProblemSolutionAligner()
    analysis = aligner.validate_alignment(_read_content(content_file), list(problems))

    if as_json:
        _emit_json(analysis)
        return

    stats = aligner.get_alignment_stats(analysis)
    table = Table(title="Problem-Solution Alignment", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Problem coverage", f"{analysis.problem_coverage:.0%}")
    table.add_row("Solution completeness", f"{analysis.solution_completeness:.2f}")
    table.add_row("Alignment score", f"{analysis.alignment_score:.2f}")
    table.add_row("Problems identified", str(stats.problems_identified))
    table.add_row("Solutions provided", str(stats.solutions_provided))
    console.print(table)

    for gap in analysis.gap_analysis:
        console.print(f"[yellow]Not addressed:[/yellow] {gap}")


@main.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--homepage", required=True, help="Homepage URL to measure click depth from.")
@click.option(
    "--derive-incoming",
    is_flag=True,
    default=False,
    help="Build incoming links from every page's outgoing links.",
)
@click.option(
    "--policy",
    type=click.Choice(["default", "strict", "lenient"]),
    default="default",
    help="Hub/authority and depth thresholds.",
)
@click.option("--check-broken", is_flag=True, default=False, help="Send HEAD requests to find broken links.")
@click.option("--timeout", type=float, default=120.0, help="Overall broken link check deadline in seconds.")
@command_options
def links(
    graph_file: Path,
    homepage: str,
    derive_incoming: bool,
    policy: str,
    check_broken: bool,
    timeout: float,
    as_json: bool,
    verbose: bool,
) -> None:
    """Analyze the internal link graph of a site."""
    pages = load_page_graph(graph_file)
    if derive_incoming:
        pages = build_incoming_links(pages)

    graph_policy = {
        "default": LinkGraphPolicy,
        "strict": LinkGraphPolicy.strict,
        "lenient": LinkGraphPolicy.lenient,
    }[policy]()

    if not as_json:
        console.print(Panel.fit(
            "[bold blue]SEO Content Analyzer[/bold blue]\n"
            f"Analyzing {len(pages)} pages from {homepage}",
            border_style="blue",
        ))

    result = LinkDistributionAnalyzer(graph_policy).analyze(pages, homepage)

    broken = []
    if check_broken:
        if as_json:
            broken = detect_broken_links(pages, BrokenLinkPolicy(overall_timeout=timeout))
        else:
            with console.status("[bold green]Checking links..."):
                broken = detect_broken_links(pages, BrokenLinkPolicy(overall_timeout=timeout))

    if as_json:
        data = {"analysis": to_dict(result)}
        if check_broken:
            data["broken_links"] = to_dict(broken)
        _emit_json(data)
        return

    _display_link_summary(result)
    if check_broken:
        _display_broken_links(broken)


def _display_link_summary(result) -> None:
    """Display link graph statistics."""
    table = Table(title="Internal Links", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Pages", str(result.total_pages))
    table.add_row("Internal links", str(result.total_internal_links))
    table.add_row("Average links per page", str(result.average_links_per_page))
    table.add_row("Link equity score", str(result.link_equity_distribution_score))
    table.add_row("Orphan pages", str(len(result.orphan_pages)))
    table.add_row("Unreachable pages", str(len(result.unreachable_pages)))
    table.add_row("Too deep", str(len(result.accessibility_issues)))
    console.print(table)

    if result.hub_pages or result.authority_pages:
        ranking = Table(title="Hubs and Authorities", show_header=True)
        ranking.add_column("Role", style="cyan")
        ranking.add_column("URL")
        ranking.add_column("Links", justify="right")
        for entry in result.hub_pages:
            ranking.add_row("Hub", entry.url, str(entry.count))
        for entry in result.authority_pages:
            ranking.add_row("Authority", entry.url, str(entry.count))
        console.print(ranking)

    for recommendation in result.recommendations:
        console.print(f"[yellow]-[/yellow] {recommendation}")


def _display_broken_links(broken) -> None:
    """Display broken link results."""
    if not broken:
        console.print("\n[bold green]No broken links found.[/bold green]")
        return

    table = Table(title="Broken Links", show_header=True)
    table.add_column("Source", style="cyan")
    table.add_column("Target", style="red")
    table.add_column("Status")
    table.add_column("Reason")
    for link in broken:
        status = str(link.status_code) if link.status_code is not None else "-"
        table.add_row(link.source_url, link.target_url, status, link.reason)
    console.print(table)


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
