"""
Markdown parser for Obsidian notes.

This module extracts frontmatter, internal links, tags and headings from a
note. Links are returned unresolved; resolution against the vault happens in
the link index.
"""

import re
from typing import Any
from urllib.parse import unquote

import yaml

from localgraph.utils.logging import setup_logging

logger = setup_logging(__name__)

# Regular expressions for Markdown elements
FRONTMATTER_PATTERN = r"^---\s*\n(.*?)\n---\s*\n"
WIKI_LINK_PATTERN = r"(!?)\[\[([^\]]+?)\]\]"
MARKDOWN_LINK_PATTERN = r"(!?)\[([^\]]*)\]\((<[^>\n]+>|[^)\s]+)(?:\s+\"[^\"]*\")?\)"
HEADING_PATTERN = r"^(#+)\s+(.*?)(?:\s*#+)?$"
TAG_PATTERN = r"(?:^|\s)#([a-zA-Z0-9_/-]+)"
CODE_FENCE_PATTERN = r"^(```|~~~).*?^\1\s*$"
INLINE_CODE_PATTERN = r"(`+)(.+?)\1"
URL_SCHEME_PATTERN = r"^[a-zA-Z][a-zA-Z0-9+.-]*:"


class MarkdownParser:
    """Extracts links and metadata from Obsidian Markdown."""

    def __init__(self, include_embeds: bool = True):
        """Initialize the parser.

        Args:
            include_embeds: Whether embeds (``![[Note]]``) count as links
        """
        self.include_embeds = include_embeds

    def parse(self, content: str) -> dict[str, Any]:
        """Parse a note.

        Args:
            content: Markdown content

        Returns:
            Dictionary with frontmatter, links, tags and headings
        """
        frontmatter, body = self.parse_frontmatter(content)
        body = self.strip_code_blocks(body)

        return {
            "frontmatter": frontmatter or {},
            "links": self.parse_links(body),
            "tags": self.parse_tags(body, frontmatter),
            "headings": self.parse_headings(body),
        }

    def parse_frontmatter(self, content: str) -> tuple[dict[str, Any] | None, str]:
        """Extract YAML frontmatter from a note.

        Args:
            content: Markdown content

        Returns:
            Tuple of (frontmatter_dict, remaining_content)
        """
        match = re.search(FRONTMATTER_PATTERN, content, re.DOTALL)
        if not match:
            return None, content

        frontmatter_text = match.group(1)
        remaining_content = content[match.end():]

        try:
            frontmatter = yaml.safe_load(frontmatter_text)
            if not isinstance(frontmatter, dict):
                logger.warning(f"Frontmatter is not a dictionary: {frontmatter}")
                frontmatter = {}
            return frontmatter, remaining_content
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing frontmatter: {e}")
            return {}, remaining_content

    def strip_code_blocks(self, content: str) -> str:
        """Blank out fenced and inline code so links inside it are ignored."""
        content = re.sub(CODE_FENCE_PATTERN, "", content, flags=re.DOTALL | re.MULTILINE)
        # Inline code becomes spaces so link offsets are unchanged
        return re.sub(INLINE_CODE_PATTERN, lambda m: " " * len(m.group(0)), content)

    def parse_links(self, content: str) -> list[dict[str, Any]]:
        """Extract wiki links and Markdown links in document order."""
        links = self.parse_wiki_links(content) + self.parse_markdown_links(content)
        links.sort(key=lambda link: link["start"])
        return links

    def parse_wiki_links(self, content: str) -> list[dict[str, Any]]:
        """Extract ``[[Target#Section|Alias]]`` style links.

        Args:
            content: Markdown content

        Returns:
            List of link dictionaries
        """
        links = []
        for match in re.finditer(WIKI_LINK_PATTERN, content):
            embed = bool(match.group(1))
            if embed and not self.include_embeds:
                continue

            link_text = match.group(2)

            # Handle optional alias with | syntax; tables escape it as \|
            alias = None
            if "|" in link_text:
                link_text, alias = link_text.split("|", 1)
                link_text = link_text.rstrip().removesuffix("\\")
                alias = alias.strip()

            target, section, block_ref = self._split_target(link_text.strip())

            # [[#Heading]] points into the current note
            if not target:
                continue

            links.append({
                "target": target,
                "alias": alias,
                "section": section,
                "block_ref": block_ref,
                "embed": embed,
                "kind": "wiki",
                "start": match.start(),
            })

        return links

    def parse_markdown_links(self, content: str) -> list[dict[str, Any]]:
        """Extract ``[text](path.md)`` links to other notes.

        External URLs and pure anchors are skipped.
        """
        links = []
        for match in re.finditer(MARKDOWN_LINK_PATTERN, content):
            embed = bool(match.group(1))
            if embed and not self.include_embeds:
                continue

            href = match.group(3).strip("<>")
            if re.match(URL_SCHEME_PATTERN, href) or href.startswith("#"):
                continue

            target, section, block_ref = self._split_target(unquote(href))
            if not target:
                continue

            links.append({
                "target": target,
                "alias": match.group(2) or None,
                "section": section,
                "block_ref": block_ref,
                "embed": embed,
                "kind": "markdown",
                "start": match.start(),
            })

        return links

    def parse_tags(self, content: str, frontmatter: dict[str, Any] | None = None) -> list[str]:
        """Extract tags from frontmatter and note body."""
        tags = set()

        if frontmatter:
            fm_tags = frontmatter.get("tags") or frontmatter.get("tag")
            if isinstance(fm_tags, list):
                tags.update(str(tag).lstrip("#") for tag in fm_tags if tag)
            elif isinstance(fm_tags, str):
                tags.update(tag.strip().lstrip("#") for tag in fm_tags.split(",") if tag.strip())

        for match in re.finditer(TAG_PATTERN, content):
            tags.add(match.group(1))

        return sorted(tags)

    def parse_headings(self, content: str) -> list[dict[str, Any]]:
        """Extract headings with their level."""
        headings = []
        for line in content.split("\n"):
            match = re.match(HEADING_PATTERN, line)
            if match:
                headings.append({
                    "level": len(match.group(1)),
                    "text": match.group(2).strip(),
                })
        return headings

    @staticmethod
    def _split_target(raw: str) -> tuple[str, str | None, str | None]:
        """Split ``Note#Section`` and ``Note#^block`` / ``Note^block`` references."""
        target = raw
        section = None
        block_ref = None

        if "#" in target:
            target, section = target.split("#", 1)
            section = section.strip()
            if section.startswith("^"):
                block_ref = section[1:]
                section = None

        if "^" in target:
            target, block_ref = target.split("^", 1)

        return target.strip(), section or None, block_ref.strip() if block_ref else None
