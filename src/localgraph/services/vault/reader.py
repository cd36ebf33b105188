"""
Vault Reader service for filesystem operations.

This module handles secure, vault-relative access to Markdown notes:
path conversion with an outside-the-vault guard, note enumeration and
reading with an encoding fallback.
"""

from pathlib import Path, PurePosixPath

from localgraph.utils.config import get_settings
from localgraph.utils.errors import ConfigurationError, ServiceError, ValidationError
from localgraph.utils.logging import setup_logging

logger = setup_logging(__name__)

NOTE_EXTENSION = ".md"


class VaultReader:
    """Service for accessing Markdown notes in a vault."""

    def __init__(self, vault_path: str | Path | None = None, excluded_folders: list[str] | None = None):
        """Initialize the vault reader.

        Args:
            vault_path: Path to the vault (from settings if None)
            excluded_folders: Vault-relative folders to ignore (from settings if None)
        """
        settings = get_settings()
        if vault_path is None:
            vault_path = settings.vault_path

        if not vault_path:
            raise ConfigurationError(
                "No vault path provided and none configured in settings",
                suggestions=["Pass --vault or set LOCALGRAPH_VAULT_PATH"],
            )

        self.vault_path = Path(vault_path).expanduser().resolve()

        if not self.vault_path.exists():
            raise ConfigurationError(f"Vault path not found: {self.vault_path}")

        if not self.vault_path.is_dir():
            raise ConfigurationError(f"Vault path is not a directory: {self.vault_path}")

        if excluded_folders is None:
            excluded_folders = settings.excluded_folders
        self.excluded_folders = [
            folder.replace("\\", "/").strip("/") for folder in excluded_folders if folder.strip("/\\")
        ]

        logger.info(f"VaultReader initialized with path: {self.vault_path}")

    def is_within_vault(self, path: Path) -> bool:
        """Check if a path is within the vault."""
        try:
            resolved_path = path.resolve()
            return self.vault_path in resolved_path.parents or resolved_path == self.vault_path
        except (OSError, ValueError) as e:
            raise ServiceError(f"Error resolving path {path}: {e}") from e

    def get_absolute_path(self, relative_path: str) -> Path:
        """Convert a vault-relative path to an absolute path.

        Raises:
            ValidationError: If the path escapes the vault
        """
        clean_rel_path = str(relative_path).replace("\\", "/").lstrip("/")
        absolute_path = self.vault_path / clean_rel_path

        if not self.is_within_vault(absolute_path):
            raise ValidationError(f"Path outside vault: {relative_path}")

        return absolute_path

    def get_relative_path(self, absolute_path: Path) -> str:
        """Convert an absolute path to a vault-relative POSIX path."""
        resolved_path = absolute_path.resolve()

        if not self.is_within_vault(resolved_path):
            raise ValidationError(f"Path outside vault: {absolute_path}")

        return resolved_path.relative_to(self.vault_path).as_posix()

    def is_excluded_path(self, path: str) -> bool:
        """Check if a vault-relative path is hidden or in an excluded folder."""
        normalized_path = str(path).replace("\\", "/").strip("/")

        if any(part.startswith(".") for part in PurePosixPath(normalized_path).parts):
            return True

        for excluded in self.excluded_folders:
            if normalized_path == excluded or normalized_path.startswith(f"{excluded}/"):
                return True

        return False

    def exists(self, relative_path: str) -> bool:
        """Check whether a note currently exists on disk."""
        if not relative_path or self.is_excluded_path(relative_path):
            return False
        try:
            return self.get_absolute_path(relative_path).is_file()
        except ValidationError:
            return False

    def list_notes(self) -> list[str]:
        """List all Markdown notes as sorted vault-relative paths."""
        notes = []
        for file_path in self.vault_path.rglob(f"*{NOTE_EXTENSION}"):
            if not file_path.is_file():
                continue
            try:
                rel_path = self.get_relative_path(file_path)
            except ValidationError:
                logger.warning(f"Skipping note linked from outside the vault: {file_path}")
                continue
            if not self.is_excluded_path(rel_path):
                notes.append(rel_path)
        return sorted(notes)

    def read_file(self, relative_path: str) -> str:
        """Read a note from the vault.

        Args:
            relative_path: Path relative to vault root

        Returns:
            Note content
        """
        if self.is_excluded_path(relative_path):
            raise PermissionError(f"Access to this path is restricted: {relative_path}")

        absolute_path = self.get_absolute_path(relative_path)

        if not absolute_path.exists():
            raise FileNotFoundError(f"File not found: {relative_path}")

        if not absolute_path.is_file():
            raise ValidationError(f"Not a file: {relative_path}")

        try:
            return absolute_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            try:
                content = absolute_path.read_text(encoding="latin-1")
                logger.warning(f"File {relative_path} read with latin-1 encoding")
                return content
            except Exception as e:
                logger.error(f"Failed to read file {relative_path}: {e}")
                raise ServiceError(f"Cannot read file with supported encodings: {relative_path}") from e
