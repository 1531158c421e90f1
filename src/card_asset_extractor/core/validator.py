"""Decoding of asset references with JSON Schema.

Card documents list their assets in two shapes: card spec v3 records
(`{"uri": ..., "name": ..., "ext": ...}`) and card spec v2 tuples
(`[path, uri, ext]`). Each raw item is matched against the schema in
schemas/asset_reference.schema.json exactly once and turned into one of
three variants: ObjectRef, TupleRef or InvalidRef.
"""

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Union

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from .naming import path_stem
from .types import AssetReference

# Path to the schema file (relative to this module)
# src/card_asset_extractor/core/validator.py -> src/card_asset_extractor/schemas/
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "asset_reference.schema.json"

# Extension hint used for v2 tuples that carry only [path, uri]
TUPLE_DEFAULT_EXT = "dat"


@dataclass(frozen=True)
class ObjectRef:
    """Record-shaped reference (card spec v3)."""

    uri: str | None
    name: str | None
    ext: str | None

    def to_reference(self) -> AssetReference | None:
        if not self.uri or not self.name:
            return None
        return AssetReference(uri=self.uri, name=self.name, ext=self.ext)


@dataclass(frozen=True)
class TupleRef:
    """Tuple-shaped reference (card spec v2): [path, uri, ext?]."""

    path: str
    uri: str
    ext: str | None

    def to_reference(self) -> AssetReference | None:
        name = path_stem(self.path)
        if not self.uri or not name:
            return None
        return AssetReference(uri=self.uri, name=name, ext=self.ext)


@dataclass(frozen=True)
class InvalidRef:
    """Anything that is neither a record nor a tuple."""

    reason: str

    def to_reference(self) -> AssetReference | None:
        return None


DecodedRef = Union[ObjectRef, TupleRef, InvalidRef]


def _extension_hint(value: Any) -> str | None:
    # Non-string hints are treated as absent
    return value if isinstance(value, str) else None


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    """Load the asset reference JSON schema from disk.

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema = json.load(f)

    Draft202012Validator.check_schema(schema)
    return schema  # type: ignore[no-any-return]


@lru_cache(maxsize=None)
def _variant_validator(variant: str) -> Draft202012Validator:
    schema = load_schema()
    # Keep $defs alongside the $ref so it resolves against this document
    return Draft202012Validator({"$ref": f"#/$defs/{variant}", "$defs": schema["$defs"]})


def decode_reference(item: Any) -> DecodedRef:
    """Classify a raw asset list item.

    Args:
        item: One element of an asset list, straight from json.loads

    Returns:
        ObjectRef, TupleRef, or InvalidRef with a short explanation
    """
    if _variant_validator("objectRef").is_valid(item):
        return ObjectRef(
            uri=item.get("uri"),
            name=item.get("name"),
            ext=_extension_hint(item.get("ext")),
        )

    if _variant_validator("tupleRef").is_valid(item):
        ext = TUPLE_DEFAULT_EXT
        if len(item) > 2 and (item[2] is None or isinstance(item[2], str)):
            ext = item[2]
        return TupleRef(path=item[0], uri=item[1], ext=ext)

    error = best_match(Draft202012Validator(load_schema()).iter_errors(item))
    return InvalidRef(reason=error.message if error else f"unrecognized item: {item!r}")
