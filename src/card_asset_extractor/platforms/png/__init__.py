"""PNG card platform for the extraction pipeline.

This platform reads character cards stored as PNG images whose tEXt
chunks carry the card JSON and base64 encoded asset blobs.
"""

from .chunks import Chunk, iter_chunks, iter_text_chunks
from .metadata import (
    PngMetadata,
    decode_base64,
    decode_png_metadata,
    decode_text_chunk,
    parse_card_document,
)
from .source import IndexedBlobSource, PngCardSource

# Auto-register with the registry
from ...registry import SourceRegistry
from ...sources.base import Container


def _create_png_source(container: Container, **kwargs) -> PngCardSource:
    """Factory function for creating PNG card sources.

    Args:
        container: The input file
        **kwargs: Additional parameters (unused for PNG)

    Returns:
        PngCardSource instance
    """
    return PngCardSource(container)


# Auto-register at module import
SourceRegistry.register_factory("png", _create_png_source)

__all__ = [
    "Chunk",
    "IndexedBlobSource",
    "PngCardSource",
    "PngMetadata",
    "decode_base64",
    "decode_png_metadata",
    "decode_text_chunk",
    "iter_chunks",
    "iter_text_chunks",
    "parse_card_document",
]
