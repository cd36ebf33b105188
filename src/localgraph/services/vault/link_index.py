"""
Link index for a Markdown vault.

Scans every note once, resolves its links to vault documents and keeps a
forward map (note -> linked notes) and a backlink map (note -> notes linking
to it). The index is a snapshot: existence checks go to the filesystem, so
backlinks recorded before a note was deleted stay in the index until the
next refresh.
"""

import posixpath
import time
from collections import defaultdict
from dataclasses import dataclass

from localgraph.core.interfaces import ILinkResolutionSource
from localgraph.services.vault.parser import MarkdownParser
from localgraph.services.vault.reader import NOTE_EXTENSION, VaultReader
from localgraph.utils.errors import ServiceError, ValidationError
from localgraph.utils.logging import setup_logging

logger = setup_logging(__name__)


@dataclass
class IndexStats:
    """Statistics of the last index refresh."""
    total_notes: int = 0
    resolved_links: int = 0
    unresolved_links: int = 0
    failed_notes: int = 0
    total_time: float = 0.0


class VaultLinkIndex(ILinkResolutionSource):
    """Resolved links and backlinks for every note in a vault."""

    def __init__(self, reader: VaultReader, parser: MarkdownParser | None = None):
        self.reader = reader
        self.parser = parser or MarkdownParser()
        self.stats = IndexStats()

        self._indexed = False
        self._notes: set[str] = set()
        self._by_lower_path: dict[str, str] = {}
        self._by_name: dict[str, list[str]] = defaultdict(list)
        self._forward: dict[str, list[str]] = {}
        self._backward: dict[str, list[str]] = {}
        self._unresolved: dict[str, list[str]] = {}

    def refresh(self) -> IndexStats:
        """Rescan the vault and rebuild both link maps."""
        start_time = time.perf_counter()
        stats = IndexStats()

        notes = self.reader.list_notes()
        self._notes = set(notes)
        self._by_lower_path = {note.lower(): note for note in notes}
        self._by_name = defaultdict(list)
        for note in notes:
            self._by_name[posixpath.basename(note).lower()].append(note)

        forward: dict[str, list[str]] = {}
        backward: dict[str, list[str]] = defaultdict(list)
        unresolved: dict[str, list[str]] = {}

        for note in notes:
            try:
                parsed = self.parser.parse(self.reader.read_file(note))
            except (OSError, ServiceError, ValidationError) as e:
                logger.warning(f"Skipping unreadable note {note}: {e}")
                stats.failed_notes += 1
                forward[note] = []
                continue

            targets: list[str] = []
            missing: list[str] = []
            for link in parsed["links"]:
                resolved = self._resolve(link["target"], from_path=note)
                if resolved is None:
                    if link["target"] not in missing:
                        missing.append(link["target"])
                elif resolved not in targets:
                    targets.append(resolved)

            forward[note] = targets
            for target in targets:
                backward[target].append(note)
            if missing:
                unresolved[note] = missing

            stats.resolved_links += len(targets)
            stats.unresolved_links += len(missing)

        self._forward = forward
        self._backward = dict(backward)
        self._unresolved = unresolved
        self._indexed = True

        stats.total_notes = len(notes)
        stats.total_time = time.perf_counter() - start_time
        self.stats = stats

        logger.info(
            f"Indexed {stats.total_notes} notes: {stats.resolved_links} resolved links, "
            f"{stats.unresolved_links} unresolved, {stats.failed_notes} failed "
            f"in {stats.total_time:.2f}s"
        )
        return stats

    def _ensure_indexed(self) -> None:
        if not self._indexed:
            self.refresh()

    def resolve(self, link_target: str, from_path: str | None = None) -> str | None:
        """Resolve a link target to a note path.

        Tries the exact vault path, then a path relative to the linking note,
        then a file-name match (shortest path first, ties alphabetical).
        Matching is case-insensitive.

        Args:
            link_target: Target as written in the link, e.g. ``Note`` or ``dir/Note.md``
            from_path: Vault-relative path of the linking note

        Returns:
            Vault-relative note path, or None when the link is unresolved
        """
        self._ensure_indexed()
        return self._resolve(link_target, from_path)

    def _resolve(self, link_target: str, from_path: str | None) -> str | None:
        target = link_target.strip().replace("\\", "/")
        if not target:
            return None
        if not target.lower().endswith(NOTE_EXTENSION):
            target += NOTE_EXTENSION

        candidates = [posixpath.normpath(target.lstrip("/"))]
        if from_path and not target.startswith("/"):
            folder = posixpath.dirname(from_path)
            candidates.append(posixpath.normpath(posixpath.join(folder, target)))

        for candidate in candidates:
            if candidate in self._notes:
                return candidate
            match = self._by_lower_path.get(candidate.lower())
            if match:
                return match

        name = posixpath.basename(target).lower()
        suffix = "/" + target.lstrip("/").lower()
        matches = [
            note for note in self._by_name.get(name, [])
            if "/" not in target.strip("/") or ("/" + note.lower()).endswith(suffix)
        ]
        if not matches:
            return None
        return min(matches, key=lambda note: (note.count("/"), len(note), note))

    def exists(self, doc_id: str) -> bool:
        return self.reader.exists(doc_id)

    def outgoing_links_of(self, doc_id: str) -> list[str]:
        self._ensure_indexed()
        return [target for target in self._forward.get(doc_id, []) if self.reader.exists(target)]

    def backlinks_of(self, doc_id: str) -> list[str]:
        self._ensure_indexed()
        return list(self._backward.get(doc_id, []))

    def unresolved_links_of(self, doc_id: str) -> list[str]:
        """Link targets in a note that matched no document."""
        self._ensure_indexed()
        return list(self._unresolved.get(doc_id, []))
