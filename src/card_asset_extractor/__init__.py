"""Card Asset Extractor.

This package pulls embedded assets (images and other files) out of AI
character cards, stored either as PNG images with tEXt metadata or as
.charx ZIP archives, and names them from the card's asset references.
"""

# Core library interface
from .pipeline import ExtractionPipeline, ExtractionResult, extract_bytes, extract_file
from .registry import SourceRegistry
from .sources.base import BlobSource, CardData, CardSource, Container

# Core utilities
from .core import (
    AssetReference,
    CollisionPolicy,
    ExtractionError,
    ExtractionOptions,
    MalformedContainer,
    ManifestMissing,
    MetadataDecodeFailure,
    NameCollision,
    OutputEntry,
    UnsupportedFormat,
    sniff_extension,
)

# Output packaging
from .output import archive_name, build_archive, write_archive, write_directory

# CLI entry point
from .cli import main

__version__ = "0.1.0"

# Auto-discover and register all platforms
SourceRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "ExtractionPipeline",
    "ExtractionResult",
    "extract_bytes",
    "extract_file",
    "SourceRegistry",
    "BlobSource",
    "CardData",
    "CardSource",
    "Container",
    # Core utilities
    "AssetReference",
    "CollisionPolicy",
    "ExtractionOptions",
    "OutputEntry",
    "sniff_extension",
    # Errors
    "ExtractionError",
    "MalformedContainer",
    "ManifestMissing",
    "MetadataDecodeFailure",
    "NameCollision",
    "UnsupportedFormat",
    # Output
    "archive_name",
    "build_archive",
    "write_archive",
    "write_directory",
    "main",
]
