#!/usr/bin/env python3
"""
OrganAIzer - CLI Entry Point
============================

Usage:
    python -m organaizer serve --port 3000
    python -m organaizer organize tree.json --option categorize
    python -m organaizer organize tree.json --option search --input "tax invoices" --no-ai
    python -m organaizer stats tree.json
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from .config import Settings
from .errors import OrganizerError
from .llm import create_client
from .service import OPTIONS, Organizer
from .tree import analyze_folder, format_file_size
from .utils import (
    console,
    load_json,
    print_error,
    print_header,
    print_result_summary,
    print_success,
    print_warning,
    save_json,
    setup_logging,
)


def _load_tree(path: Path) -> dict | None:
    """Load a tree file; accepts either a bare tree or a {"folderData": ...} request."""
    if not path.exists():
        print_error(f"Tree file not found: {path}")
        return None

    try:
        data = load_json(path)
    except json.JSONDecodeError as e:
        print_error(f"Invalid JSON in {path}: {e}")
        return None

    if isinstance(data, dict) and "folderData" in data:
        return data["folderData"]
    return data


# =============================================================================
# Subcommands
# =============================================================================

def cmd_serve(args) -> int:
    """Serve command - run the HTTP API."""
    import uvicorn

    settings = Settings.from_env()
    host = args.host or settings.host
    port = args.port or settings.port

    print_header("OrganAIzer API", f"http://{host}:{port}\nModel: {settings.model}")
    if not settings.ai_enabled:
        print_warning("OPENROUTER_API_KEY not set. Serving fallback responses only.")

    if args.reload:
        uvicorn.run("organaizer.api:create_app", factory=True, host=host, port=port, reload=True)
    else:
        from .api import create_app
        uvicorn.run(create_app(settings), host=host, port=port)
    return 0


def cmd_organize(args) -> int:
    """Organize command - run one operation against a tree file."""
    folder_data = _load_tree(args.tree)
    if folder_data is None:
        return 1

    settings = Settings.from_env()
    if args.no_ai:
        settings = replace(settings, api_key=None)

    organizer = Organizer(settings, create_client(settings))

    try:
        with console.status(f"[bold green]Running {args.option}...[/bold green]"):
            result = organizer.organize(folder_data, args.option, args.input)
    except OrganizerError as e:
        print_error(str(e))
        return 1

    print_result_summary(result)

    if args.output:
        save_json(result, args.output)

    print_success(f"{args.option} complete")
    return 0


def cmd_stats(args) -> int:
    """Stats command - print folder statistics."""
    folder_data = _load_tree(args.tree)
    if folder_data is None:
        return 1

    stats = analyze_folder(folder_data)
    console.print(f"Files:      {stats.total_files}")
    console.print(f"Total size: {format_file_size(stats.total_size)}")
    console.print(f"Types:      {', '.join(stats.file_types) or '-'}")
    for f in stats.largest_files:
        console.print(f"  [cyan]{f.get('path')}[/cyan]")
    if stats.oldest_file:
        console.print(f"Oldest:     {stats.oldest_file.get('path')}")
    if stats.newest_file:
        console.print(f"Newest:     {stats.newest_file.get('path')}")
    return 0


# =============================================================================
# Main
# =============================================================================

def main() -> int:
    parser = argparse.ArgumentParser(
        description="OrganAIzer - File organization suggestions with LLM assistance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: from environment)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- SERVE command ---
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, help="Bind address (default: ORGANAIZER_HOST)")
    serve_parser.add_argument("--port", type=int, help="Port (default: ORGANAIZER_PORT or PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve_parser.set_defaults(func=cmd_serve)

    # --- ORGANIZE command ---
    organize_parser = subparsers.add_parser("organize", help="Run one operation on a tree file")
    organize_parser.add_argument("tree", type=Path, help="JSON folder tree (or full request body)")
    organize_parser.add_argument("--option", choices=OPTIONS, required=True,
                                 help="Operation to run")
    organize_parser.add_argument("--input", type=str, default=None,
                                 help="Rename pattern or search query")
    organize_parser.add_argument("-o", "--output", type=Path,
                                 help="Write the full result to this JSON file")
    organize_parser.add_argument("--no-ai", action="store_true",
                                 help="Use fallback heuristics even if an API key is set")
    organize_parser.set_defaults(func=cmd_organize)

    # --- STATS command ---
    stats_parser = subparsers.add_parser("stats", help="Print folder statistics for a tree file")
    stats_parser.add_argument("tree", type=Path, help="JSON folder tree")
    stats_parser.set_defaults(func=cmd_stats)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    setup_logging(args.log_level or Settings.from_env().log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
