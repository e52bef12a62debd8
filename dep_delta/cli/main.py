"""Main CLI interface for DepDelta."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..core.detection import DependencyFileDetector
from ..core.parsers import DependencyChange, DiffParserRegistry, ParserConfig, create_registry
from ..core.patch import split_patch
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import get_logger, setup_logging
from ..utils.path_utils import describe_manifest

app = typer.Typer(
    name="depdelta",
    help="Classify dependency changes in Composer and npm manifest diffs",
    add_completion=False
)

console = Console()
error_formatter = ConsoleFormatter(console)
logger = get_logger("CLI")

DEFAULT_MAX_LINES = 5000


def _build_registry(config_path: Optional[Path], max_lines: Optional[int]) -> DiffParserRegistry:
    """Create a registry from an optional config file and line limit.

    Args:
        config_path: Optional TOML configuration file
        max_lines: Per-file diff line limit, 0 disables the limit

    Returns:
        Registry with the built-in parsers
    """
    config = ParserConfig.from_toml(config_path) if config_path else ParserConfig()
    if max_lines is not None:
        config = config.with_max_diff_lines(max_lines or None)
    return create_registry(config)


def _read_text(path: Path) -> str:
    if not path.exists():
        error_formatter.format_error("Path does not exist", str(path))
        raise typer.Exit(1)

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        error_formatter.format_error(f"Failed to read {path}", str(e))
        raise typer.Exit(1)


def _emit(changes: List[DependencyChange], as_json: bool, output: Optional[Path]) -> None:
    """Render changes to the console or as JSON.

    Args:
        changes: Dependency changes to render
        as_json: Print JSON instead of a table
        output: Optional JSON output file
    """
    if output or as_json:
        json_formatter = JSONFormatter(output)
        results = json_formatter.format_changes(changes)

        if output:
            json_formatter.save_results(results)
            console.print(f"[green]Results saved to: {output}[/green]")
        else:
            typer.echo(json_formatter.dumps(results))
        return

    ConsoleFormatter(console).format_changes(changes)


@app.command()
def parse(
    diff_file: Path = typer.Argument(
        ...,
        help="File holding the diff body of a single manifest"
    ),
    manifest: Optional[str] = typer.Option(
        None,
        "--as",
        "-a",
        help="Manifest path the diff belongs to (defaults to the diff file name)"
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML file with a [dep_delta] table"
    ),
    max_lines: int = typer.Option(
        DEFAULT_MAX_LINES,
        "--max-lines",
        help="Truncate diffs longer than this many lines (0 for no limit)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Classify dependency changes in one manifest's diff."""
    setup_logging(verbose=verbose)

    diff_text = _read_text(diff_file)
    filename = manifest or diff_file.name

    try:
        registry = _build_registry(config_path, max_lines)
    except (FileNotFoundError, ValueError) as e:
        error_formatter.format_error("Invalid configuration", str(e))
        raise typer.Exit(1)

    if not registry.supports(filename):
        console.print(f"[yellow]Unsupported manifest: {filename}[/yellow]")
        console.print(f"Supported files: {', '.join(registry.supported_files())}")
        raise typer.Exit(1)

    _emit(registry.parse(diff_text, filename), as_json, output)


@app.command()
def patch(
    patch_file: Path = typer.Argument(
        ...,
        help="Output of 'git show' or 'git diff' covering one or more files"
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML file with a [dep_delta] table"
    ),
    max_lines: int = typer.Option(
        DEFAULT_MAX_LINES,
        "--max-lines",
        help="Truncate per-file diffs longer than this many lines (0 for no limit)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Classify dependency changes across every manifest in a git patch."""
    setup_logging(verbose=verbose)

    patch_text = _read_text(patch_file)

    try:
        registry = _build_registry(config_path, max_lines)
    except (FileNotFoundError, ValueError) as e:
        error_formatter.format_error("Invalid configuration", str(e))
        raise typer.Exit(1)

    diffs = split_patch(patch_text)
    supported = {name: body for name, body in diffs.items() if registry.supports(name)}
    logger.debug(f"{len(supported)} of {len(diffs)} files in patch are manifests")

    _emit(registry.parse_all(supported), as_json, output)


@app.command()
def check(
    files: List[str] = typer.Argument(
        ...,
        help="Changed file paths of a commit"
    )
) -> None:
    """Report which changed files are dependency manifests."""
    detector = DependencyFileDetector()
    matches = detector.dependency_files_in(files)

    if not matches:
        console.print("[green]No dependency manifests changed[/green]")
        return

    table = Table(title="Dependency Manifests")
    table.add_column("Path", style="cyan")
    table.add_column("Ecosystem", style="blue")
    table.add_column("Kind")

    for path in matches:
        manifest = describe_manifest(path)
        table.add_row(path, manifest.ecosystem if manifest else "-", manifest.kind if manifest else "-")

    console.print(table)


@app.command()
def info() -> None:
    """Show DepDelta information."""
    console.print(Panel.fit(
        f"[bold blue]DepDelta[/bold blue] {__version__}\n"
        "Classifies added, removed and updated dependencies\n"
        "from unified diffs of manifest files",
        title="Information"
    ))

    registry = create_registry()
    console.print(f"\n[bold]Supported Ecosystems:[/bold] {', '.join(registry.ecosystems())}")
    console.print(f"[bold]Supported Files:[/bold] {', '.join(registry.supported_files())}")


def main() -> None:
    """Main entry point for DepDelta CLI."""
    app()


if __name__ == "__main__":
    main()
