"""
Main entry point for the Local Graph CLI.

This module provides the command-line interface for building a note's
local graph from a vault and inspecting the vault's link index.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from localgraph.graph.builder import GraphBuilder
from localgraph.graph.formatters import PhysicsHints, format_summary, to_payload
from localgraph.graph.models import GraphBuildOptions
from localgraph.graph.styling import GraphPalette
from localgraph.services.vault import VaultLinkIndex, VaultReader
from localgraph.utils.config import MAX_DEPTH, get_settings
from localgraph.utils.errors import DocumentNotFoundError, LocalGraphError
from localgraph.utils.helpers import resolve_vault_path_or_exit, validate_settings_or_exit
from localgraph.utils.logging import configure_root_logging, setup_logging

logger = setup_logging(__name__)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Local Graph - explore the neighborhood of a note."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    settings = get_settings()
    configure_root_logging(
        level="DEBUG" if verbose else settings.log_level,
        structured=settings.log_structured,
        log_file=settings.get_log_file_path(),
    )

    if verbose:
        logger.info("Verbose logging enabled")


@cli.command()
@click.argument('note')
@click.option('--vault', type=click.Path(path_type=Path),
              help='Path to the vault')
@click.option('--out-depth', type=click.IntRange(0, MAX_DEPTH),
              help='Maximum outgoing link depth (default from settings)')
@click.option('--in-depth', type=click.IntRange(0, MAX_DEPTH),
              help='Maximum backlink depth (default from settings)')
@click.option('--neighbor-links/--no-neighbor-links', default=None,
              help='Keep links between notes at the same depth')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text',
              help='Output format')
@click.option('--output', type=click.Path(path_type=Path),
              help='Write the result to a file instead of stdout')
def graph(note: str, vault: Optional[Path], out_depth: Optional[int], in_depth: Optional[int],
          neighbor_links: Optional[bool], output_format: str, output: Optional[Path]) -> None:
    """Build the local graph of NOTE."""
    try:
        validate_settings_or_exit(vault)
        settings = get_settings()
        vault_path = resolve_vault_path_or_exit(vault)

        defaults = GraphBuildOptions.from_settings(settings)
        options = GraphBuildOptions(
            max_out_depth=defaults.max_out_depth if out_depth is None else out_depth,
            max_in_depth=defaults.max_in_depth if in_depth is None else in_depth,
            include_neighbor_links=defaults.include_neighbor_links if neighbor_links is None else neighbor_links,
        )

        index = VaultLinkIndex(VaultReader(vault_path))
        root_id = index.resolve(note)
        if root_id is None:
            raise DocumentNotFoundError(f"Note not found: {note}", context={"vault": str(vault_path)})

        logger.info(f"Building local graph for {root_id} with {options}")
        graph_data = GraphBuilder(index).build_with_options(root_id, options)

        if output_format == 'json':
            payload = to_payload(
                graph_data,
                options,
                palette=GraphPalette.from_settings(settings),
                physics=PhysicsHints(**settings.get_physics_config()),
            )
            rendered = payload.model_dump_json(indent=2)
        else:
            rendered = format_summary(graph_data)

        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(rendered + "\n", encoding="utf-8")
            click.echo(f"Wrote {len(graph_data.nodes)} nodes and {len(graph_data.edges)} edges to {output}")
        else:
            click.echo(rendered)

    except LocalGraphError as e:
        logger.error(f"Graph error: {e}")
        click.echo(f"Error: {str(e)}")
        sys.exit(1)


@cli.command('vault-stats')
@click.option('--vault', type=click.Path(path_type=Path),
              help='Path to the vault')
def vault_stats(vault: Optional[Path]) -> None:
    """Index the vault's links and print statistics."""
    try:
        validate_settings_or_exit(vault)
        vault_path = resolve_vault_path_or_exit(vault)

        index = VaultLinkIndex(VaultReader(vault_path))
        stats = index.refresh()

        click.echo(f"Vault: {vault_path}")
        click.echo(f"Notes: {stats.total_notes}")
        click.echo(f"Resolved links: {stats.resolved_links}")
        click.echo(f"Unresolved links: {stats.unresolved_links}")
        click.echo(f"Failed notes: {stats.failed_notes}")
        click.echo(f"Total time: {stats.total_time:.2f}s")

    except LocalGraphError as e:
        logger.error(f"Indexing error: {e}")
        click.echo(f"Error: {str(e)}")
        sys.exit(1)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
