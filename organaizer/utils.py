"""
Utility functions for OrganAIzer.

Includes:
- Logging setup
- JSON save/load helpers
- Console output helpers for the CLI
"""

import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

# Global console instance
console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Route the standard logging module through the shared rich console."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def print_header(title: str, subtitle: str = ""):
    """Print a styled header."""
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{subtitle}[/italic]", expand=False))


def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {msg}")


def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {msg}")


def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {msg}")


def print_result_summary(result: dict):
    """Print a short, operation-aware summary of an organize result."""
    action = result.get("action", "unknown")

    table = Table(title=f"Result: {action}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta")

    if action == "categorize":
        for name, files in result.get("filesByCategory", {}).items():
            table.add_row(name, str(len(files)))
    elif action == "rename":
        table.add_row("Suggestions", str(len(result.get("suggestions", []))))
    elif action == "search":
        matches = result.get("matches")
        table.add_row("Matches", str(len(matches)) if isinstance(matches, list) else "0")
    elif action == "suggest":
        stats = result.get("folderStats", {})
        table.add_row("Files", str(stats.get("totalFiles", 0)))
        table.add_row("File types", str(len(stats.get("fileTypes", []))))

    if result.get("aiStatus"):
        table.add_row("AI", result["aiStatus"])

    console.print(table)

    if action == "rename":
        suggestions = result.get("suggestions", [])
        tree = Tree("[bold green]Sample Renames[/bold green]")
        for item in suggestions[:10]:
            tree.add(f"[yellow]{item['originalName']}[/yellow] -> [blue]{item['suggestedName']}[/blue]")
        if len(suggestions) > 10:
            tree.add(f"[italic]... and {len(suggestions) - 10} more[/italic]")
        console.print(tree)
    elif action == "search" and isinstance(result.get("matches"), list):
        tree = Tree("[bold green]Top Matches[/bold green]")
        for match in result["matches"]:
            tree.add(f"[yellow]{match['relevanceScore']:>3}[/yellow] {match['file'].get('path', '')}")
        console.print(tree)


def save_json(data: Any, path: Path) -> None:
    """
    Save data to a JSON file with pretty formatting.

    Args:
        data: The data to serialize.
        path: The output file path.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    console.print(f"[INFO] Saved: {path}")


def load_json(path: Path) -> Any:
    """
    Load data from a JSON file.

    Args:
        path: The input file path.

    Returns:
        The deserialized data.
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
