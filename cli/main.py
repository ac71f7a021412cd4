#!/usr/bin/env python3
"""
ScaffoldAI CLI - Main Entry Point

Usage:
    scaffoldai tree project.json            # Print the directory tree
    scaffoldai flatten project.json         # List every file with its line count
    scaffoldai stats project.json           # File, line and test-target counts
    scaffoldai entry project.json           # Show the preview entry file
    scaffoldai docs project.json -o out.json
    scaffoldai tests project.json -o out.json
    scaffoldai preview project.json -o preview.html
    scaffoldai export project.json -o project.zip
    scaffoldai serve                        # Run the API server

FILE arguments are JSON tree documents: {name, type, children | content}.
"""

import argparse
import json
import sys
from pathlib import Path

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from rich.console import Console
from rich.table import Table

from app.core.config import settings
from app.core.exceptions import ScaffoldError
from app.core.logging_config import logger
from app.modules.agents import documentation_agent, tester_agent
from app.modules.filetree import (
    collect_by_predicate,
    count_files,
    count_lines,
    egest,
    export_zip,
    expand_all_paths,
    flatten,
    ingest_json,
    render_tree,
    resolve_entry_file,
)
from app.modules.filetree.predicates import is_component_file, is_hook_file, is_utility_file
from app.modules.preview import build_preview
from app.schemas.ai import Ideation


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="scaffoldai",
        description="ScaffoldAI - inspect and extend generated project trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  scaffoldai tree project.json                 Show the project layout
  scaffoldai docs project.json -i idea.json    Add docs/ using an ideation
  scaffoldai export project.json -o app.zip    Download-ready ZIP archive
""",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show tracebacks on error")

    subparsers = parser.add_subparsers(dest="command", required=True)

    tree_parser = subparsers.add_parser("tree", help="Print the directory tree")
    tree_parser.add_argument("file", help="JSON tree document")
    tree_parser.add_argument("--no-icons", action="store_true", help="Omit folder/file icons")

    flatten_parser = subparsers.add_parser("flatten", help="List every file path")
    flatten_parser.add_argument("file", help="JSON tree document")
    flatten_parser.add_argument("--json", action="store_true", help="Print the path → content map as JSON")

    stats_parser = subparsers.add_parser("stats", help="Show file, line and test-target counts")
    stats_parser.add_argument("file", help="JSON tree document")
    stats_parser.add_argument(
        "--count-empty-files",
        action="store_true",
        help="Count an empty file as one line"
    )

    entry_parser = subparsers.add_parser("entry", help="Show the preview entry file")
    entry_parser.add_argument("file", help="JSON tree document")

    docs_parser = subparsers.add_parser("docs", help="Generate documentation into docs/")
    docs_parser.add_argument("file", help="JSON tree document")
    docs_parser.add_argument("--ideation", "-i", help="JSON ideation document")
    docs_parser.add_argument("--output", "-o", help="Write the updated tree here instead of stdout")

    tests_parser = subparsers.add_parser("tests", help="Generate a Jest test suite into __tests__/")
    tests_parser.add_argument("file", help="JSON tree document")
    tests_parser.add_argument("--output", "-o", help="Write the updated tree here instead of stdout")

    preview_parser = subparsers.add_parser("preview", help="Write the live preview HTML")
    preview_parser.add_argument("file", help="JSON tree document")
    preview_parser.add_argument("--output", "-o", required=True, help="HTML output path")

    export_parser = subparsers.add_parser("export", help="Export the tree as a ZIP archive")
    export_parser.add_argument("file", help="JSON tree document")
    export_parser.add_argument("--output", "-o", required=True, help="ZIP output path")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=settings.SERVER_HOST)
    serve_parser.add_argument("--port", type=int, default=settings.SERVER_PORT)

    return parser


def load_tree(path: str):
    return ingest_json(Path(path).read_text(encoding="utf-8"))


def write_or_print(console: Console, document, output) -> None:
    text = json.dumps(document, indent=2)
    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]✓ Wrote {output}[/green]")
    else:
        console.print_json(text)


def cmd_tree(args, console: Console) -> None:
    for line in render_tree(load_tree(args.file), icons=not args.no_icons):
        console.print(line, markup=False, highlight=False)


def cmd_flatten(args, console: Console) -> None:
    files = flatten(load_tree(args.file))
    if args.json:
        console.print_json(json.dumps(files))
        return

    table = Table(title="Files")
    table.add_column("Path", style="cyan")
    table.add_column("Lines", justify="right")
    for path, content in files.items():
        table.add_row(path, str(len(content.split("\n")) if content else 0))
    console.print(table)


def cmd_stats(args, console: Console) -> None:
    tree = load_tree(args.file)
    table = Table(title=f"{tree.name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Files", str(count_files(tree)))
    table.add_row("Folders", str(len(expand_all_paths(tree))))
    table.add_row("Lines", str(count_lines(tree, count_empty_files=args.count_empty_files)))
    table.add_row("Components", str(len(collect_by_predicate(tree, is_component_file))))
    table.add_row("Utilities", str(len(collect_by_predicate(tree, is_utility_file))))
    table.add_row("Hooks", str(len(collect_by_predicate(tree, is_hook_file))))
    console.print(table)


def cmd_entry(args, console: Console) -> None:
    entry = resolve_entry_file(flatten(load_tree(args.file)))
    console.print(f"[green]Entry file:[/green] {entry.path}")


def cmd_docs(args, console: Console) -> None:
    tree = load_tree(args.file)
    ideation = None
    if args.ideation:
        ideation = Ideation.model_validate_json(Path(args.ideation).read_text(encoding="utf-8"))

    documentation = documentation_agent.generate(ideation, tree)
    write_or_print(console, egest(documentation_agent.add_documentation_to_tree(tree, documentation)), args.output)


def cmd_tests(args, console: Console) -> None:
    tree = load_tree(args.file)
    suite = tester_agent.generate(
        tree,
        on_progress=lambda progress: logger.debug(
            f"[CLI] {progress.phase} {progress.percentage}%: {progress.current_task}"
        ),
    )
    console.print(
        f"[green]✓ {suite.summary['total_tests']} test files[/green] "
        f"({suite.summary['components']} components, {suite.summary['utilities']} utilities, "
        f"{suite.summary['hooks']} hooks)"
    )
    write_or_print(console, egest(tester_agent.add_tests_to_tree(tree, suite)), args.output)


def cmd_preview(args, console: Console) -> None:
    preview = build_preview(load_tree(args.file))
    Path(args.output).write_text(preview.html, encoding="utf-8")
    console.print(f"[green]✓ Preview from {preview.entry_path} written to {args.output}[/green]")


def cmd_export(args, console: Console) -> None:
    tree = load_tree(args.file)
    Path(args.output).write_bytes(export_zip(tree))
    console.print(f"[green]✓ Exported {count_files(tree)} files to {args.output}[/green]")


def cmd_serve(args, console: Console) -> None:
    import uvicorn
    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=settings.DEBUG)


COMMANDS = {
    "tree": cmd_tree,
    "flatten": cmd_flatten,
    "stats": cmd_stats,
    "entry": cmd_entry,
    "docs": cmd_docs,
    "tests": cmd_tests,
    "preview": cmd_preview,
    "export": cmd_export,
    "serve": cmd_serve,
}


def main(argv=None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console()

    try:
        logger.debug(f"[CLI] Running {args.command}")
        COMMANDS[args.command](args, console)
    except KeyboardInterrupt:
        console.print("\n\nGoodbye! 👋")
        sys.exit(0)
    except (ScaffoldError, OSError, ValueError) as e:
        if args.verbose:
            console.print_exception()
        else:
            console.print(f"[red]✗ Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
