"""Base abstractions for card sources.

This module defines the interfaces that every container format must
implement to plug into the extraction pipeline: a CardSource that reads
the container once, and a BlobSource that lets the resolver look up and
fetch embedded blobs without knowing how they are stored.
"""

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from ..core.types import CardDocument

# Key paths into the card document that hold asset lists
ReferencePath = tuple[str, ...]


@dataclass(frozen=True)
class Container:
    """An input file: raw bytes plus the name it was submitted under.

    The name is only used to label outputs; the format is always
    detected from the bytes.
    """

    name: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path) -> "Container":
        return cls(name=path.name, data=path.read_bytes())


class BlobSource(ABC):
    """Lookup-and-fetch capability over the blobs embedded in a container.

    Keys are source-specific (integer indices for PNG cards, archive
    paths for .charx files). The resolver only passes keys back to the
    source that produced them.
    """

    #: Whether blobs that no reference claims are still emitted
    emits_unclaimed: ClassVar[bool] = False

    @abstractmethod
    def locate(self, uri: str) -> Hashable | None:
        """Map a reference URI onto a blob key.

        Args:
            uri: The `uri` field of an asset reference

        Returns:
            The key of an existing blob, or None if the URI does not
            name a blob held by this source
        """
        pass

    @abstractmethod
    def fetch(self, key: Hashable) -> bytes:
        """Read the blob stored under `key`.

        Raises:
            KeyError: If no blob exists under that key
        """
        pass

    @abstractmethod
    def keys(self) -> list[Hashable]:
        """List every blob key in a stable order."""
        pass

    def fetch_many(self, keys: Sequence[Hashable]) -> dict[Hashable, bytes]:
        """Read several blobs, returning them in request order.

        Sources backed by slower storage override this to read
        concurrently. Keys that fail to read are left out of the result.
        """
        return {key: self.fetch(key) for key in keys}


@dataclass
class CardData:
    """Everything the resolver needs from one container.

    Attributes:
        format_name: Name of the container format ("png", "charx")
        blobs: Blob lookup for this container
        document: Decoded card document, or None if unavailable
        candidates: Raw asset list items gathered from the document
    """

    format_name: str
    blobs: BlobSource
    document: CardDocument | None = None
    candidates: list[Any] = field(default_factory=list)


def collect_candidates(
    document: CardDocument | None, paths: Iterable[ReferencePath]
) -> list[Any]:
    """Concatenate the asset lists found at `paths`, in order.

    Missing keys, non-dict intermediates and non-list leaves all count
    as an empty list.
    """
    candidates: list[Any] = []
    if document is None:
        return candidates

    for path in paths:
        node: Any = document
        for key in path:
            node = node.get(key) if isinstance(node, dict) else None
        if isinstance(node, list):
            candidates.extend(node)

    return candidates


class CardSource(ABC):
    """Abstract base class for all container formats.

    Implementations parse one container into CardData. They are created
    by factories registered with SourceRegistry and selected by the
    dispatcher from the container's content.
    """

    #: Registry name of the format
    format_name: ClassVar[str]

    #: Where asset lists are looked up in the card document
    reference_paths: ClassVar[tuple[ReferencePath, ...]] = (("data", "assets"),)

    def __init__(self, container: Container):
        self.container = container

    @abstractmethod
    def load(self) -> CardData:
        """Read the container and return its card data.

        Returns:
            CardData with the blob source and gathered references

        Raises:
            ExtractionError: If the container is unusable as a whole
        """
        pass

    def collect(self, document: CardDocument | None) -> list[Any]:
        """Gather raw asset list items from this format's reference paths."""
        return collect_candidates(document, self.reference_paths)

    def close(self) -> None:
        """Release any resources held by the source."""

    def __enter__(self) -> "CardSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
