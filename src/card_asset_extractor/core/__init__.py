"""Core utilities shared by every card format.

This package contains the exception hierarchy, run options, type
definitions, naming helpers, content sniffing and asset reference
decoding used across all platform implementations.
"""

from .errors import (
    ExtractionError,
    MalformedContainer,
    ManifestMissing,
    MetadataDecodeFailure,
    NameCollision,
    NotAnArchive,
    UnsupportedFormat,
)
from .naming import final_name, path_stem, safe_output_name, sanitize_filename
from .options import CollisionPolicy, ExtractionOptions
from .sniffer import PNG_SIGNATURE, sniff_extension
from .types import AssetReference, CardDocument, OutputEntry
from .validator import InvalidRef, ObjectRef, TupleRef, decode_reference

__all__ = [
    "AssetReference",
    "CardDocument",
    "CollisionPolicy",
    "ExtractionError",
    "ExtractionOptions",
    "InvalidRef",
    "MalformedContainer",
    "ManifestMissing",
    "MetadataDecodeFailure",
    "NameCollision",
    "NotAnArchive",
    "ObjectRef",
    "OutputEntry",
    "PNG_SIGNATURE",
    "TupleRef",
    "UnsupportedFormat",
    "decode_reference",
    "final_name",
    "path_stem",
    "safe_output_name",
    "sanitize_filename",
    "sniff_extension",
]
