"""
Service interfaces for graph construction.

This module defines the abstract base class a link source must implement
so the graph builder can run against any document collection.
"""

from abc import ABC, abstractmethod
from typing import Iterable


class ILinkResolutionSource(ABC):
    """Abstract interface for resolving links between documents."""

    @abstractmethod
    def exists(self, doc_id: str) -> bool:
        """Check whether a document currently exists."""
        pass

    @abstractmethod
    def outgoing_links_of(self, doc_id: str) -> Iterable[str]:
        """Get the documents a document links to.

        Only resolved targets that exist are returned; dangling links are
        excluded by the implementation.
        """
        pass

    @abstractmethod
    def backlinks_of(self, doc_id: str) -> Iterable[str]:
        """Get the documents that link to a document.

        Entries may be stale and refer to documents that no longer exist.
        """
        pass
