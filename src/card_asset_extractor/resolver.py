"""Asset resolution: turning card data into named output files.

One resolver serves every container format. Format differences are
confined to the BlobSource the card data carries.
"""

import logging
from collections.abc import Hashable

from .core.errors import NameCollision
from .core.naming import final_name, safe_output_name
from .core.options import CollisionPolicy, ExtractionOptions
from .core.sniffer import sniff_extension
from .core.types import AssetReference, OutputEntry
from .core.validator import InvalidRef, decode_reference
from .sources.base import CardData

logger = logging.getLogger(__name__)

# Prefix for blobs that no reference names
SYNTHESIZED_PREFIX = "asset_"


class OutputSetBuilder:
    """Collects output entries for a single run, keeping names unique.

    Duplicate names are handled according to the collision policy.
    """

    def __init__(self, policy: CollisionPolicy = CollisionPolicy.RENAME):
        self.policy = policy
        self._entries: dict[str, OutputEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def add(self, name: str, data: bytes, resolved: bool = True) -> str:
        """Add an entry and return the name it was stored under.

        Raises:
            NameCollision: If the name is taken and the policy is ERROR
        """
        name = safe_output_name(name)

        if name in self._entries:
            if self.policy is CollisionPolicy.ERROR:
                raise NameCollision(name)
            if self.policy is CollisionPolicy.OVERWRITE:
                logger.warning("Output name %s used twice, keeping the later file", name)
            else:
                renamed = self._free_name(name)
                logger.warning("Output name %s used twice, saving as %s", name, renamed)
                name = renamed

        self._entries[name] = OutputEntry(name=name, data=data, resolved=resolved)
        return name

    def build(self) -> tuple[OutputEntry, ...]:
        return tuple(self._entries.values())

    def _free_name(self, name: str) -> str:
        stem, dot, suffix = name.rpartition(".")
        if not dot:
            stem, suffix = name, ""
        else:
            suffix = f".{suffix}"

        counter = 1
        while f"{stem}_{counter}{suffix}" in self._entries:
            counter += 1
        return f"{stem}_{counter}{suffix}"


class AssetResolver:
    """Resolves asset references against a blob source.

    Example:
        >>> resolver = AssetResolver()
        >>> entries = resolver.resolve(source.load())
        >>> [entry.name for entry in entries]
        ['portrait.png', 'asset_3.webp']
    """

    def __init__(self, options: ExtractionOptions | None = None):
        self.options = options or ExtractionOptions()

    def plan(self, card: CardData) -> list[tuple[AssetReference, Hashable]]:
        """Match each usable reference with the blob it names.

        Items of unknown shape, references missing a uri or name,
        dangling URIs and repeat claims on one blob are dropped.

        Returns:
            (reference, blob key) pairs in reference order
        """
        plans: list[tuple[AssetReference, Hashable]] = []
        claimed: set[Hashable] = set()

        for item in card.candidates:
            decoded = decode_reference(item)
            if isinstance(decoded, InvalidRef):
                logger.debug("Ignoring asset item: %s", decoded.reason)
                continue

            reference = decoded.to_reference()
            if reference is None:
                logger.debug("Ignoring asset item without uri or name: %r", item)
                continue

            key = card.blobs.locate(reference.uri)
            if key is None:
                logger.debug("No blob for %s (%s)", reference.uri, reference.name)
                continue

            if key in claimed:
                logger.debug("Blob %s already named, ignoring %s", key, reference.name)
                continue

            claimed.add(key)
            plans.append((reference, key))

        return plans

    def resolve(self, card: CardData) -> tuple[OutputEntry, ...]:
        """Produce the named output entries for one card.

        Named entries come first, in reference order. If the blob source
        emits unclaimed blobs, those follow in key order as
        `asset_<key>` plus a sniffed extension.

        Raises:
            NameCollision: Only under CollisionPolicy.ERROR
        """
        builder = OutputSetBuilder(self.options.collision_policy)
        plans = self.plan(card)

        # All reads finish before any entry is assembled
        fetched = card.blobs.fetch_many([key for _, key in plans])

        emitted: set[Hashable] = set()
        for reference, key in plans:
            if key not in fetched:
                continue
            builder.add(final_name(reference.name, reference.ext), fetched[key])
            emitted.add(key)

        if card.blobs.emits_unclaimed:
            for key in card.blobs.keys():
                if key in emitted:
                    continue
                data = card.blobs.fetch(key)
                extension = sniff_extension(data, loose_riff=self.options.loose_riff)
                builder.add(f"{SYNTHESIZED_PREFIX}{key}{extension}", data, resolved=False)

        return builder.build()
