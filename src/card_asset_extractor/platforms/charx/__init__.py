"""CharX platform for the extraction pipeline.

This platform reads .charx character cards: ZIP archives carrying a
card.json manifest and the asset files it references.
"""

from .source import (
    ArchiveBlobSource,
    CharxCardSource,
    open_archive,
    strip_embed_prefix,
)

# Auto-register with the registry
from ...registry import SourceRegistry
from ...sources.base import Container


def _create_charx_source(
    container: Container, max_workers: int | None = None, **kwargs
) -> CharxCardSource:
    """Factory function for creating .charx sources.

    Args:
        container: The input file
        max_workers: Thread pool size for concurrent member reads
        **kwargs: Additional parameters (unused)

    Returns:
        CharxCardSource instance

    Raises:
        NotAnArchive: If the container is not a ZIP archive
    """
    return CharxCardSource(container, max_workers=max_workers)


# Auto-register at module import
SourceRegistry.register_factory("charx", _create_charx_source)

__all__ = [
    "ArchiveBlobSource",
    "CharxCardSource",
    "open_archive",
    "strip_embed_prefix",
]
