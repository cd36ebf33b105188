"""
Configuration management for Local Graph.

This module provides centralized configuration using Pydantic settings
with support for environment variables and .env files.
"""

import re
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Depth sliders in the graph view go from 0 to 5
MAX_DEPTH = 5


class ValidationResult(BaseModel):
    valid: bool = True
    errors: list[str] = []
    warnings: list[str] = []


class LocalGraphSettings(BaseSettings):
    """Local Graph configuration settings."""

    # Application
    app_name: str = "local-graph"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False)

    # Vault settings
    vault_path: str = Field(default="", description="Path to the Markdown vault")
    excluded_folders: list[str] = Field(
        default=[],
        description="Vault-relative folders to ignore when indexing links"
    )

    # Default depth settings
    default_outgoing_depth: int = Field(default=2, ge=0, le=MAX_DEPTH, description="Default outgoing link depth")
    default_incoming_depth: int = Field(default=1, ge=0, le=MAX_DEPTH, description="Default backlink depth")
    include_neighbor_links: bool = Field(default=True, description="Keep links between notes of equal depth")

    # Appearance
    root_color: str = Field(default="#ff6600", description="Color of the root node")
    outgoing_colors: list[str] = Field(
        default=["#ffaa00", "#ffd700", "#aaff00", "#00ff88", "#00ccff"],
        description="Colors for outgoing nodes, indexed by depth - 1"
    )
    incoming_colors: list[str] = Field(
        default=["#9d00ff", "#b357ff", "#c27dff", "#d6a4ff", "#e8ccff"],
        description="Colors for incoming nodes, indexed by depth - 1"
    )

    # Default physics handed to the renderer
    node_size: int = Field(default=10, ge=2, le=20, description="Node radius")
    link_distance: int = Field(default=100, ge=20, le=200, description="Preferred link length")
    charge_strength: int = Field(default=-250, ge=-500, le=-10, description="Node repulsion strength")

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_structured: bool = Field(default=False, description="Emit JSON log records")
    log_file: str | None = Field(default=None, description="Optional log file path")

    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file="config/.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="LOCALGRAPH_",
        extra="ignore",
    )

    def get_vault_path(self) -> Path | None:
        """Get vault path as Path object."""
        if self.vault_path:
            return Path(self.vault_path).expanduser().resolve()
        return None

    def get_log_file_path(self) -> Path | None:
        """Get log file path as Path object."""
        if not self.log_file:
            return None
        path = Path(self.log_file).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def validate_settings(self, check_vault: bool = True) -> ValidationResult:
        """Validate settings and return status information.

        Args:
            check_vault: Whether to check the configured vault path
        """
        status = ValidationResult()

        vault_path = self.get_vault_path() if check_vault else None
        if vault_path and not vault_path.exists():
            status.errors.append(f"Vault path does not exist: {vault_path}")
            status.valid = False
        elif vault_path and not vault_path.is_dir():
            status.errors.append(f"Vault path is not a directory: {vault_path}")
            status.valid = False

        colors = [("root_color", self.root_color)]
        colors += [(f"outgoing_colors[{i}]", c) for i, c in enumerate(self.outgoing_colors)]
        colors += [(f"incoming_colors[{i}]", c) for i, c in enumerate(self.incoming_colors)]
        for name, value in colors:
            if not HEX_COLOR_PATTERN.match(value):
                status.errors.append(f"{name} is not a hex color: {value!r}")
                status.valid = False

        if not self.outgoing_colors:
            status.warnings.append("No outgoing colors configured; outgoing nodes will use the root color.")
        if not self.incoming_colors:
            status.warnings.append("No incoming colors configured; incoming nodes will use the root color.")

        return status

    def get_physics_config(self) -> dict[str, int]:
        """Get the renderer physics defaults as a dictionary."""
        return {
            "node_size": self.node_size,
            "link_distance": self.link_distance,
            "charge_strength": self.charge_strength,
        }


# Global settings instance
settings = LocalGraphSettings()


def get_settings() -> LocalGraphSettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> LocalGraphSettings:
    """Reload settings from environment and return new instance."""
    global settings
    settings = LocalGraphSettings()
    return settings
