"""
ChartScope - Main Entry Point

Command-line interface for chart analysis.
"""

import sys
import json
import logging
from typing import Any, Dict, List

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.markup import escape

from chartscope import __version__
from chartscope.config import ChartScopeConfig, create_default_config
from chartscope.core.chart_store import Record
from chartscope.core.errors import ChartScopeError
from chartscope.service import ChartAnalyzer, UploadedFile

logger = logging.getLogger(__name__)

console = Console()


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def _print_json(payload: Dict[str, Any]):
    click.echo(json.dumps(payload, indent=2, default=str))


def _records_table(title: str, records: List[Record], limit: int = 20) -> Table:
    """Render records as a table using the first record's columns."""
    table = Table(title=title, show_header=True)
    columns = [str(c) for c in records[0].keys()] if records else []
    for column in columns:
        table.add_column(escape(column), overflow="fold")
    for record in records[:limit]:
        table.add_row(*[escape(str(record.get(c, "") or "")) for c in columns])
    return table


def _fail(e: Exception, verbose: bool):
    console.print(f"[bold red]✗ Error: {escape(str(e))}[/bold red]")
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)


# CLI Commands
@click.group()
@click.version_option(version=__version__, prog_name="ChartScope")
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file')
@click.option('--data-dir', '-d', type=click.Path(file_okay=False), help='Directory holding the chart CSVs')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, config_path, data_dir, verbose):
    """ChartScope - Music chart CSV analysis"""
    config = ChartScopeConfig.from_yaml(config_path) if config_path else create_default_config()
    if data_dir:
        config.data.data_dir = data_dir
    config.verbose = config.verbose or verbose

    _setup_logging(config.verbose)
    ctx.obj = config


@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON')
@click.pass_obj
def charts(config, as_json):
    """Load every configured chart and summarize it."""
    overview = ChartAnalyzer(config).all_charts()
    if as_json:
        _print_json(overview.to_dict())
        return

    table = Table(title="Charts", show_header=True)
    table.add_column("Platform", style="cyan")
    table.add_column("Songs", style="green", justify="right")
    table.add_column("Status")
    for result in overview.results:
        status = "[green]ok[/green]" if result.ok else f"[red]{escape(result.error)}[/red]"
        table.add_row(escape(result.platform), str(result.count), status)

    console.print(table)
    console.print(f"Total songs: [bold]{overview.total_songs}[/bold]")


@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON')
@click.pass_obj
def genres(config, as_json):
    """Genre distribution of the genre chart."""
    try:
        report = ChartAnalyzer(config).genre_analysis()
    except ChartScopeError as e:
        _fail(e, config.verbose)

    if as_json:
        _print_json(report.to_dict())
        return

    table = Table(title=escape(f"{report.platform} genres ({report.genre_field})"), show_header=True)
    table.add_column("Genre", style="cyan")
    table.add_column("Songs", style="green", justify="right")
    for entry in report.distribution:
        table.add_row(escape(str(entry.genre)), str(entry.count))
    console.print(table)
    console.print(f"Total songs: [bold]{report.total_songs}[/bold]")


@cli.command('cross-platform')
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON')
@click.pass_obj
def cross_platform(config, as_json):
    """Artists charting on more than one platform."""
    try:
        overlaps = ChartAnalyzer(config).cross_platform()
    except ChartScopeError as e:
        _fail(e, config.verbose)

    if as_json:
        _print_json({
            "success": True,
            "data": [o.to_dict() for o in overlaps],
            "totalArtists": len(overlaps),
        })
        return

    table = Table(title="Cross-platform artists", show_header=True)
    table.add_column("Artist", style="cyan")
    table.add_column("Platforms")
    table.add_column("Count", style="green", justify="right")
    for overlap in overlaps:
        table.add_row(escape(str(overlap.artist)), escape(", ".join(overlap.platforms)), str(overlap.platform_count))
    console.print(table)


@cli.command()
@click.argument('query')
@click.option('--platform', '-p', help='Only search this platform')
@click.option('--genre', '-g', help='Genre substring filter')
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON')
@click.pass_obj
def search(config, query, platform, genre, as_json):
    """Search the charts for QUERY."""
    try:
        result = ChartAnalyzer(config).search(query, platform=platform, genre=genre)
    except ChartScopeError as e:
        _fail(e, config.verbose)

    if as_json:
        _print_json(result.to_dict())
        return

    if not result.records:
        console.print(f"No results for [bold]{escape(query)}[/bold]")
        return
    console.print(_records_table(f"Results for '{escape(query)}' ({len(result.records)})", result.records))


@cli.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON')
@click.pass_obj
def inspect(config, files, as_json):
    """Analyze one or more chart CSV files."""
    analyzer = ChartAnalyzer(config)
    uploads = [UploadedFile(path=f, filename=click.format_filename(f)) for f in files]
    results = analyzer.analyze_uploads(uploads)

    if as_json:
        _print_json({"success": True, "results": results})
        return

    for result in results:
        if not result["success"]:
            console.print(f"[bold red]✗ {escape(result['filename'])}: {escape(result['error'])}[/bold red]")
            continue
        info = result["file"]
        genres_line = escape(", ".join(f"{g['genre']} ({g['count']})" for g in info["genreDistribution"][:5]))
        console.print(Panel(
            f"Rows: {info['rowCount']}\n"
            f"Columns: {escape(', '.join(str(c) for c in info['columns']))}\n"
            f"Top genres: {genres_line or '-'}",
            title=escape(info["filename"]),
            border_style="green",
        ))
        if info["preview"]:
            console.print(_records_table("Preview", info["preview"]))


@cli.command()
@click.argument('file', type=click.Path(dir_okay=False))
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON')
@click.pass_obj
def validate(config, file, as_json):
    """Check FILE for the title/artist/genre columns."""
    try:
        report = ChartAnalyzer(config).validate_upload(file, remove=False)
    except ChartScopeError as e:
        _fail(e, config.verbose)

    if as_json:
        _print_json({"success": True, "validation": report.to_dict()})
        return

    if report.is_valid:
        console.print("[bold green]✓ Structure looks good[/bold green]")
    else:
        console.print(f"[bold yellow]Missing columns: {escape(', '.join(report.missing_columns))}[/bold yellow]")

    table = Table(title=f"{report.row_count} rows, {report.column_count} columns", show_header=True)
    table.add_column("Column", style="cyan")
    table.add_column("Type", style="green")
    for column, kind in report.data_types.items():
        table.add_row(escape(str(column)), kind)
    console.print(table)


@cli.command()
@click.option('--host', help='Interface to bind')
@click.option('--port', type=int, help='Port to listen on')
@click.option('--debug', is_flag=True, help='Run Flask in debug mode')
@click.pass_obj
def serve(config, host, port, debug):
    """Run the JSON API."""
    from chartscope.webapp import create_app

    app = create_app(config)
    host = host or config.web.host
    port = port or config.web.port
    console.print(Panel(
        f"[bold blue]ChartScope API[/bold blue]\n"
        f"[dim]http://{host}:{port}/api/health[/dim]",
        border_style="blue"
    ))
    app.run(host=host, port=port, debug=debug)


@cli.command()
def version():
    """Show version information."""
    console.print(Panel(
        f"[bold]ChartScope[/bold] v{__version__}\n\n"
        "Music chart CSV analysis.\n\n"
        "Components:\n"
        "  • CSV Loader\n"
        "  • Genre Analyzer\n"
        "  • Cross-Platform Matcher\n"
        "  • Search Filter\n"
        "  • Type Sniffer",
        title="About",
        border_style="blue"
    ))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
