"""
Vault services: note access, Markdown link parsing and the link index.
"""

from .link_index import IndexStats, VaultLinkIndex
from .parser import MarkdownParser
from .reader import VaultReader

__all__ = [
    "IndexStats",
    "MarkdownParser",
    "VaultLinkIndex",
    "VaultReader",
]
