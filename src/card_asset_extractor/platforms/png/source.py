"""PNG card source.

Reads tEXt metadata from a PNG character card: embedded asset blobs
keyed by index, and the card document that names them.
"""

import logging
from collections.abc import Hashable

from ...core.errors import MetadataDecodeFailure
from ...sources.base import BlobSource, CardData, CardSource
from .chunks import iter_text_chunks
from .metadata import decode_png_metadata, parse_card_document

logger = logging.getLogger(__name__)


class IndexedBlobSource(BlobSource):
    """Blobs keyed by their `chara-ext-asset_:<N>` index.

    References point at them with `__asset:<N>` URIs. Blobs no
    reference claims are still emitted under a synthesized name.
    """

    emits_unclaimed = True

    URI_PREFIX = "__asset:"

    def __init__(self, blobs: dict[int, bytes]):
        self._blobs = dict(blobs)

    def locate(self, uri: str) -> Hashable | None:
        if not uri.startswith(self.URI_PREFIX):
            return None
        suffix = uri.rsplit(":", 1)[-1]
        if not (suffix.isascii() and suffix.isdigit()):
            return None
        index = int(suffix)
        return index if index in self._blobs else None

    def fetch(self, key: Hashable) -> bytes:
        return self._blobs[key]  # type: ignore[index]

    def keys(self) -> list[Hashable]:
        return sorted(self._blobs)


class PngCardSource(CardSource):
    """Source implementation for PNG character cards.

    Asset lists are gathered from the v3 `data.assets` list and the
    RisuAI extension block, in that order.

    Example:
        >>> source = PngCardSource(Container.from_path(Path("card.png")))
        >>> card = source.load()
        >>> card.blobs.keys()
        [0, 1, 2]
    """

    format_name = "png"
    reference_paths = (
        ("data", "assets"),
        ("data", "extensions", "risuai", "additionalAssets"),
        ("data", "extensions", "risuai", "emotions"),
    )

    def load(self) -> CardData:
        """Parse the chunk stream and decode its metadata.

        Raises:
            MalformedContainer: If the chunk stream is truncated
        """
        metadata = decode_png_metadata(iter_text_chunks(self.container.data))
        blobs = IndexedBlobSource(metadata.blobs)

        if not metadata.blobs:
            logger.warning("No embedded assets found in %s", self.container.name)
            return CardData(format_name=self.format_name, blobs=blobs)

        logger.info(
            "Found %d embedded asset(s), card data %s",
            len(metadata.blobs),
            "present" if metadata.card_text is not None else "missing",
        )

        document = None
        if metadata.card_text is not None:
            try:
                document = parse_card_document(metadata.card_text)
            except MetadataDecodeFailure as e:
                logger.warning("Card data unavailable, using generic names: %s", e)

        return CardData(
            format_name=self.format_name,
            blobs=blobs,
            document=document,
            candidates=self.collect(document),
        )
