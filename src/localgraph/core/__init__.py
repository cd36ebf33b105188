"""
Core abstractions for Local Graph.

This package contains the interfaces that decouple graph construction
from where link information comes from.
"""

from .interfaces import ILinkResolutionSource

__all__ = [
    "ILinkResolutionSource",
]
