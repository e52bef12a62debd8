"""Output formatters for DepDelta results."""

import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.parsers import ChangeType, DependencyChange
from ..utils.logging import get_logger

TYPE_STYLES = {
    ChangeType.ADDED: "green",
    ChangeType.REMOVED: "red",
    ChangeType.UPDATED: "yellow",
}


def summarize_changes(changes: List[DependencyChange]) -> Dict[str, Any]:
    """Count changes by type and by source file.

    Args:
        changes: Dependency changes

    Returns:
        Summary dictionary
    """
    by_type = Counter(change.type.value for change in changes)
    by_file = Counter(change.source_file for change in changes)

    return {
        "total_changes": len(changes),
        "added": by_type.get(ChangeType.ADDED.value, 0),
        "removed": by_type.get(ChangeType.REMOVED.value, 0),
        "updated": by_type.get(ChangeType.UPDATED.value, 0),
        "files": dict(by_file),
    }


class ConsoleFormatter:
    """Rich console formatter for DepDelta output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()

    def format_changes(self, changes: List[DependencyChange]) -> None:
        """Display dependency changes as a table with a summary panel.

        Args:
            changes: Dependency changes to display
        """
        if not changes:
            self.console.print(Panel("No dependency changes found", style="green"))
            return

        self.console.print(self._create_changes_table(changes))
        self.console.print(self._create_summary_panel(changes))

    def _create_changes_table(self, changes: List[DependencyChange]) -> Table:
        table = Table(title="Dependency Changes")

        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Change")
        table.add_column("Old", style="blue")
        table.add_column("New", style="blue")
        table.add_column("Source", style="dim")

        for change in changes:
            table.add_row(
                change.name,
                Text(change.type.value, style=TYPE_STYLES[change.type]),
                change.old_version or "-",
                change.new_version or "-",
                change.source_file,
            )

        return table

    def _create_summary_panel(self, changes: List[DependencyChange]) -> Panel:
        summary = summarize_changes(changes)

        content = (
            f"Added: {summary['added']}  "
            f"Removed: {summary['removed']}  "
            f"Updated: {summary['updated']}  "
            f"Files: {len(summary['files'])}"
        )

        return Panel(content, title=f"{summary['total_changes']} dependency changes", style="blue")

    def format_error(self, error: str, details: Optional[str] = None) -> None:
        """Format and display error message.

        Args:
            error: Error message
            details: Optional error details
        """
        content = f"[bold red]Error:[/bold red] {escape(error)}"
        if details:
            content += f"\n\n[dim]{escape(details)}[/dim]"

        self.console.print(Panel(content, style="red"))


class JSONFormatter:
    """JSON formatter for DepDelta output."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_changes(
        self,
        changes: List[DependencyChange],
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Format dependency changes as JSON-ready data.

        Args:
            changes: Dependency changes
            metadata: Optional additional metadata

        Returns:
            Formatted JSON data
        """
        summary = summarize_changes(changes)
        summary["timestamp"] = datetime.now().isoformat()

        result = {
            "summary": summary,
            "changes": [change.to_dict() for change in changes],
        }

        if metadata:
            result["metadata"] = metadata

        return result

    def dumps(self, results: Dict[str, Any]) -> str:
        return json.dumps(results, indent=2, ensure_ascii=False)

    def save_results(
        self,
        results: Dict[str, Any],
        output_file: Optional[Path] = None
    ) -> None:
        """Save results to JSON file.

        Args:
            results: Results dictionary
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(self.dumps(results))

            self.logger.info(f"Results saved to {file_path}")
        except IOError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise
