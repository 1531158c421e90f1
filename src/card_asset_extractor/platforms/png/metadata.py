"""Decoding of tEXt metadata carried by PNG character cards.

A tEXt payload is `key\\x00value`. Two kinds of keys matter:

- `chara-ext-asset_:<N>`: the value is a base64 encoded asset blob with
  index N.
- `chara` / `ccv3`: the value is the base64 encoded card JSON. If both
  are present, the one appearing later in the file wins.
"""

import base64
import binascii
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ...core.errors import MetadataDecodeFailure
from ...core.types import CardDocument
from .chunks import Chunk

logger = logging.getLogger(__name__)

ASSET_KEY_PREFIX = "chara-ext-asset_:"
CARD_KEYS = frozenset({"chara", "ccv3"})

# Card text starting with this marker is not base64 JSON
UNENCODED_MARKER = "rcc||"


@dataclass
class PngMetadata:
    """Metadata gathered from the tEXt chunks of one card."""

    blobs: dict[int, bytes] = field(default_factory=dict)
    card_text: str | None = None


def decode_text_chunk(payload: bytes) -> tuple[str, str] | None:
    """Split a tEXt payload into key and value.

    Args:
        payload: Raw chunk data

    Returns:
        (key, value), or None if the payload has no NUL separator

    Raises:
        MetadataDecodeFailure: If the payload is not valid UTF-8
    """
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MetadataDecodeFailure(f"tEXt payload is not valid UTF-8: {e}") from e

    key, separator, value = text.partition("\x00")
    if not separator:
        return None
    return key, value


def decode_base64(value: str) -> bytes:
    """Decode standard base64, tolerating whitespace and missing padding.

    Raises:
        MetadataDecodeFailure: If the value is not base64
    """
    compact = "".join(value.split())
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MetadataDecodeFailure(f"Invalid base64 data: {e}") from e


def parse_asset_index(key: str) -> int:
    """Return N from a `chara-ext-asset_:<N>` key.

    Raises:
        MetadataDecodeFailure: If the suffix is not a decimal integer
    """
    suffix = key[len(ASSET_KEY_PREFIX):]
    if not (suffix.isascii() and suffix.isdigit()):
        raise MetadataDecodeFailure(f"Invalid asset key: {key!r}")
    return int(suffix)


def decode_png_metadata(chunks: Iterable[Chunk]) -> PngMetadata:
    """Collect asset blobs and the card text from tEXt chunks.

    A chunk that fails to decode is logged and skipped; the rest are
    still processed.

    Args:
        chunks: tEXt chunks in file order

    Returns:
        PngMetadata with blobs keyed by index and the raw card text
    """
    metadata = PngMetadata()

    for chunk in chunks:
        try:
            parsed = decode_text_chunk(chunk.data)
            if parsed is None:
                logger.debug("Skipping tEXt chunk without key separator")
                continue

            key, value = parsed
            if key.startswith(ASSET_KEY_PREFIX):
                index = parse_asset_index(key)
                metadata.blobs[index] = decode_base64(value)
            elif key in CARD_KEYS:
                if metadata.card_text is not None:
                    logger.debug("Card data in %r replaces an earlier card chunk", key)
                metadata.card_text = value

        except MetadataDecodeFailure as e:
            logger.warning("Skipping tEXt chunk: %s", e)

    return metadata


def parse_card_document(text: str) -> CardDocument:
    """Decode the base64 card text into a card document.

    Args:
        text: Value of the `chara` or `ccv3` chunk

    Returns:
        The parsed JSON object

    Raises:
        MetadataDecodeFailure: If the text is marked as unencoded, or
                               any of base64, UTF-8 or JSON decoding fails
    """
    if text.startswith(UNENCODED_MARKER):
        raise MetadataDecodeFailure("Card data is not base64 JSON (rcc|| marker)")

    raw = decode_base64(text)
    try:
        document = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MetadataDecodeFailure(f"Card data is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise MetadataDecodeFailure(
            f"Card data is a JSON {type(document).__name__}, expected an object"
        )
    return document  # type: ignore[return-value]
