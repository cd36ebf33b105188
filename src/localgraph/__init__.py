"""
Local Graph - neighborhood graphs for linked Markdown vaults.

This package provides:
- Breadth-first construction of a note's local graph (outgoing links and backlinks)
- Link resolution over an Obsidian-style vault on disk
- Renderer hand-off as a JSON payload or a networkx graph
- A command-line interface for building graphs from a vault
"""

__version__ = "0.1.0"
