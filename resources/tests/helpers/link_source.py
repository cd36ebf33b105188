"""
In-memory link source for graph builder tests.

Usage:
    from resources.tests.helpers.link_source import InMemoryLinkSource
    source = InMemoryLinkSource.from_edges([("A", "B"), ("B", "C"), ("D", "A")])
    source.delete("D")  # D stays in the backlink index, like a stale cache
"""

from __future__ import annotations

from collections import defaultdict

from localgraph.core.interfaces import ILinkResolutionSource


class InMemoryLinkSource(ILinkResolutionSource):
    def __init__(self, documents: set[str] | None = None):
        self.documents: set[str] = set(documents or ())
        self.links: dict[str, list[str]] = defaultdict(list)
        self.backlinks: dict[str, list[str]] = defaultdict(list)
        self.calls: list[tuple[str, str]] = []

    @classmethod
    def from_edges(cls, edges: list[tuple[str, str]], documents: set[str] | None = None) -> InMemoryLinkSource:
        source = cls(documents)
        for src, dst in edges:
            source.add_link(src, dst)
        return source

    def add_link(self, src: str, dst: str) -> None:
        self.documents.update((src, dst))
        if dst not in self.links[src]:
            self.links[src].append(dst)
        if src not in self.backlinks[dst]:
            self.backlinks[dst].append(src)

    def delete(self, doc_id: str) -> None:
        """Remove a document but keep its backlink entries, as a stale index would."""
        self.documents.discard(doc_id)
        for targets in self.links.values():
            if doc_id in targets:
                targets.remove(doc_id)

    def exists(self, doc_id: str) -> bool:
        self.calls.append(("exists", doc_id))
        return doc_id in self.documents

    def outgoing_links_of(self, doc_id: str) -> list[str]:
        self.calls.append(("outgoing", doc_id))
        return [t for t in self.links.get(doc_id, []) if t in self.documents]

    def backlinks_of(self, doc_id: str) -> list[str]:
        self.calls.append(("backlinks", doc_id))
        return list(self.backlinks.get(doc_id, []))
