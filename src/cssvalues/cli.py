"""CLI for the values replacement tool."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from cssvalues.config import load_config
from cssvalues.crawler import FileCrawler
from cssvalues.errors import CssValuesError
from cssvalues.exporters import JSONExporter
from cssvalues.plugins import ValuesReplacePlugin
from cssvalues.processor import Processor, ProcessResult
from cssvalues.resolution import DocumentCache

console = Console(stderr=True)


def _collect_inputs(inputs: Tuple[str, ...]) -> List[Tuple[Path, Path]]:
    """Expand input files and directories into ``(path, output relative path)`` pairs."""
    collected = []
    for item in inputs:
        path = Path(item)
        if path.is_dir():
            crawler = FileCrawler(path)
            collected.extend((f.path, f.relative_path) for f in crawler.crawl())
        else:
            collected.append((path, Path(path.name)))
    return collected


async def _process_all(
    processor: Processor,
    files: List[Tuple[Path, Path]]
) -> List[ProcessResult]:
    return await asyncio.gather(*(processor.process_file(path) for path, _ in files))


@click.command()
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--config", default=None, help="Path to configuration file")
@click.option("--out", default=None, help="Output directory (stdout for a single file if omitted)")
@click.option("--values-out", default=None, help="Write resolved values to this JSON file")
@click.option("--no-emit-exports", is_flag=True, default=None, help="Remove @value statements from output")
@click.option("--replace-in-selectors", is_flag=True, default=None, help="Also replace values in selectors")
@click.option("--imports-as-module-requests", is_flag=True, default=None,
              help="Treat import paths as module requests (~pkg/file.css)")
@click.option("--at-rule", "at_rules", multiple=True, help="At-rule whose parameters get values (repeatable)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    inputs: Tuple[str, ...],
    config: Optional[str],
    out: Optional[str],
    values_out: Optional[str],
    no_emit_exports: Optional[bool],
    replace_in_selectors: Optional[bool],
    imports_as_module_requests: Optional[bool],
    at_rules: Tuple[str, ...],
    verbose: bool
) -> None:
    """CSS Modules @value resolver.

    Resolves @value definitions and imports in the given stylesheets (files
    or directories) and writes the stylesheets with every value substituted.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    # Load configuration
    cfg = load_config(config)
    if no_emit_exports:
        cfg.no_emit_exports = True
    if replace_in_selectors:
        cfg.replace_in_selectors = True
    if imports_as_module_requests:
        cfg.imports_as_module_requests = True
    if at_rules:
        cfg.at_rules = [name.lstrip("@").lower() for name in at_rules]

    files = _collect_inputs(inputs)
    if not files:
        console.print("[yellow]No stylesheets found[/yellow]")
        return

    if out is None and len(files) > 1:
        raise click.UsageError("--out is required when processing more than one stylesheet")

    # One cache for the whole batch: shared imports are parsed once
    cache = DocumentCache()
    processor = Processor([ValuesReplacePlugin(cfg, cache=cache)])

    try:
        results = asyncio.run(_process_all(processor, files))
    except (CssValuesError, OSError, ValueError) as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        sys.exit(1)

    results_by_file: Dict[str, ProcessResult] = {}
    for (path, relative_path), result in zip(files, results):
        results_by_file[str(path)] = result

        if out is None:
            click.echo(result.css, nl=False)
            continue

        target = Path(out) / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.css, encoding="utf-8")

    if values_out:
        JSONExporter().export(results_by_file, Path(values_out))

    if out is None:
        return

    table = Table(title="Resolved @value symbols")
    table.add_column("Stylesheet", style="cyan")
    table.add_column("Values", justify="right", style="green")
    table.add_column("Imports", justify="right")
    table.add_column("Warnings", justify="right")

    for path, result in results_by_file.items():
        values = result.get_messages("values")
        table.add_row(
            path,
            str(len(values[-1]["values"]) if values else 0),
            str(len(cache.graph.get_transitive_imports(str(Path(path).resolve())))),
            str(len(result.warnings)),
        )

    console.print(table)
    console.print(
        f"[dim]{len(files)} stylesheets written to {Path(out).absolute()}, "
        f"{cache.loads} imported files parsed, "
        f"{cache.graph.get_stats()['total_imports']} imports resolved[/dim]"
    )


if __name__ == "__main__":
    main()
