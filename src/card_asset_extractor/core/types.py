"""Type definitions for card documents and extraction output.

The TypedDict classes mirror the JSON carried by character cards (the
`chara`/`ccv3` PNG metadata and the `card.json` archive manifest). Only the
fields this package reads are declared; cards carry many more.
"""

from dataclasses import dataclass
from typing import Any, TypedDict


class AssetRecord(TypedDict, total=False):
    """Object-shaped asset reference (card spec v3 and .charx manifests)."""

    uri: str  # "__asset:<N>" in PNG cards, "embed://<path>" in archives
    name: str  # Display name, with or without extension
    ext: str | None  # Extension hint without the dot
    type: str  # e.g. "icon", "emotion" (not used for naming)


class RisuExtension(TypedDict, total=False):
    """Vendor extension block found at data.extensions.risuai."""

    additionalAssets: list[Any]  # Records or [path, uri, ext] tuples
    emotions: list[Any]  # Records or [path, uri] tuples


class CardDataSection(TypedDict, total=False):
    """The `data` section of a card document."""

    name: str
    assets: list[Any]
    extensions: dict[str, Any]


class CardDocument(TypedDict, total=False):
    """Top level of a decoded card document."""

    spec: str  # "chara_card_v2", "chara_card_v3", ...
    spec_version: str
    data: CardDataSection


@dataclass(frozen=True)
class AssetReference:
    """A normalized pointer from card metadata to an embedded blob."""

    uri: str
    name: str
    ext: str | None = None


@dataclass(frozen=True)
class OutputEntry:
    """A named file produced by an extraction run."""

    name: str
    data: bytes
    resolved: bool = True  # False for names synthesized from content sniffing

    @property
    def size_bytes(self) -> int:
        return len(self.data)
