# code_canvas/main.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
CLI entry point for code-canvas.

Usage:
    code-canvas src/ --usages formatDate --output canvas.json
    python -m code_canvas --config project.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

import yaml

from .analyzer import CodeAnalyzer
from .config import CanvasConfig
from .errors import CodeCanvasError
from .graph.canvas import CanvasGraph
from .graph.symbol_table import SymbolTable
from .models import SymbolKind
from .project import ProjectConfig, SourcePath
from .sources import iter_source_files, read_sources

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="code-canvas",
        description="Extract symbols, imports and usages from source files and lay them out as a graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Build a canvas for a directory
    code-canvas src/ --output canvas.json

    # Show where a function is called
    code-canvas src/ --usages formatDate --json

    # From a project file, with verbose logging
    code-canvas --config project.yaml --verbose
        """,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Source files or directories to analyze",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to project configuration YAML file",
    )
    parser.add_argument(
        "--usages",
        nargs="+",
        default=[],
        metavar="NAME",
        help="Symbol names to show usages of",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write the canvas JSON to this file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the canvas JSON to stdout",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    return parser


def load_project(config_path: Path) -> Optional[ProjectConfig]:
    """Load a project file, logging why it is unusable."""
    if not config_path.exists():
        logger.error(f"Config file not found: {config_path}")
        return None

    try:
        return ProjectConfig.from_yaml(config_path)
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in config file: {e}")
    except Exception as e:
        logger.error(f"Invalid configuration: {e}")
    return None


def collect_files(sources: Sequence[SourcePath]) -> list[Path]:
    """Expand source paths into files, first occurrence wins."""
    seen: dict[Path, None] = {}
    for source in sources:
        for file_path in iter_source_files(source.path, source.recursive, source.extensions):
            seen.setdefault(file_path, None)
    return list(seen)


def show_usages(
    canvas: CanvasGraph, names: Sequence[str], out: Optional[TextIO] = None
) -> None:
    """Query each name on the canvas and print the usage contexts found.

    Only the last query stays on the canvas.
    """
    out = out or sys.stdout
    table = SymbolTable.from_structures(canvas.structures)
    for name in names:
        refs = table.lookup_name(name)
        if not refs:
            logger.warning(f"No declaration found for {name}")
            continue

        # Prefer a function/class/type declaration over a variable
        defining_file, symbol = next(
            (ref for ref in refs if ref[1].kind != SymbolKind.VARIABLE), refs[0]
        )
        groups = canvas.show_usages(symbol, defining_file)

        print(f"{symbol.kind.value} {name} ({defining_file}:{symbol.start_line}):", file=out)
        if not groups:
            print("  no usages", file=out)
        for group in groups:
            lines = ", ".join(str(o.line) for o in group.occurrences)
            context = group.enclosing.name if group.enclosing else "<top level>"
            print(f"  {context} in {group.file} (lines {lines})", file=out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for code-canvas CLI.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    canvas_config = CanvasConfig.from_env()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else canvas_config.log_level.upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    sources = [SourcePath(path=path) for path in args.paths]
    usages = list(args.usages)
    output = args.output

    if args.config is not None:
        project = load_project(args.config)
        if project is None:
            return 1
        sources = project.sources + sources
        usages = project.usages + usages
        output = output or project.output

    if not sources:
        parser.error("no source paths given (pass paths or --config)")

    files = collect_files(sources)
    if not files:
        logger.error("No source files found")
        return 1

    try:
        analyzer = CodeAnalyzer(canvas_config).initialize()
        contents = dict(read_sources(files))
        structures = analyzer.analyze_files(contents.items())
    except CodeCanvasError as e:
        logger.error(f"Analysis failed: {e}")
        return 1

    canvas = CanvasGraph(canvas_config).build(
        structures, contents=contents, candidate_files=list(contents)
    )
    # Keep stdout clean for the canvas JSON
    out = sys.stderr if args.json and output is None else sys.stdout
    print(
        f"Analyzed {len(structures)} of {len(files)} files, {len(canvas.edges)} import edges",
        file=out,
    )

    if usages:
        show_usages(canvas, usages, out)

    if output is not None:
        canvas.save(output)
        print(f"Canvas saved to {output}")
    elif args.json:
        print(json.dumps(canvas.to_dict(), indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
