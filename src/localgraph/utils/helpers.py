"""
Common utility functions for the Local Graph CLI.
"""

import logging
import sys
from pathlib import Path

import click

from localgraph.utils.config import get_settings

logger = logging.getLogger(__name__)


def validate_settings_or_exit(vault: Path | None = None) -> None:
    """
    Validate settings and exit with error message if invalid.

    Warnings are echoed to stderr but do not stop the command.

    Args:
        vault: Vault path from command line; the configured vault path is
            only checked when this is not given
    """
    settings = get_settings()
    validation_result = settings.validate_settings(check_vault=vault is None)

    for warning in validation_result.warnings:
        click.echo(f"Warning: {warning}", err=True)
        logger.warning(f"Settings warning: {warning}")

    if not validation_result.valid:
        for error in validation_result.errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(1)


def resolve_vault_path_or_exit(vault: Path | None = None) -> Path:
    """
    Resolve vault path from parameter or settings, exit if none found.

    Args:
        vault: Optional vault path from command line

    Returns:
        Resolved vault path

    Raises:
        SystemExit: If no vault path can be resolved
    """
    settings = get_settings()
    vault_path = vault or settings.get_vault_path()

    if not vault_path:
        click.echo("Error: No vault path specified. Use --vault parameter or configure vault_path in settings.")
        sys.exit(1)

    vault_path = Path(vault_path).expanduser().resolve()

    if not vault_path.exists():
        click.echo(f"Error: Vault path not found: {vault_path}")
        sys.exit(1)

    if not vault_path.is_dir():
        click.echo(f"Error: Vault path is not a directory: {vault_path}")
        sys.exit(1)

    return vault_path
