"""Source abstractions for the extraction pipeline.

This package contains base classes and interfaces for card sources.
Format-specific implementations live in the platforms/ directory.
"""

from .base import BlobSource, CardData, CardSource, Container, collect_candidates

__all__ = ["BlobSource", "CardData", "CardSource", "Container", "collect_candidates"]
