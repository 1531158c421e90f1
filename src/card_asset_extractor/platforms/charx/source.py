"""CharX card source.

A .charx file is a ZIP archive with a `card.json` manifest at its root.
Manifest asset records point at archive members through `embed://` URIs.
"""

import io
import json
import logging
import lzma
import re
import struct
import zipfile
import zlib
from collections.abc import Hashable, Sequence
from concurrent.futures import ThreadPoolExecutor

from ...core.errors import MalformedContainer, ManifestMissing, NotAnArchive
from ...sources.base import BlobSource, CardData, CardSource, Container

logger = logging.getLogger(__name__)

MANIFEST_NAME = "card.json"

# embed://, embed:/ and the embeded:// spelling some exporters write
EMBED_PREFIX_RE = re.compile(r"^embed(?:ed)?:/{1,2}")

# Errors a damaged central directory can raise while opening
ARCHIVE_OPEN_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    OSError,
    ValueError,
    RuntimeError,
    EOFError,
    struct.error,
)

# Errors a single member read can raise without the archive being unusable
ENTRY_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    lzma.LZMAError,
    OSError,
    KeyError,
    RuntimeError,
    EOFError,
    ValueError,
)


def open_archive(data: bytes) -> zipfile.ZipFile:
    """Open bytes as a ZIP archive.

    Raises:
        NotAnArchive: If the bytes are not a readable ZIP archive
    """
    try:
        return zipfile.ZipFile(io.BytesIO(data))
    except ARCHIVE_OPEN_ERRORS as e:
        raise NotAnArchive(str(e) or type(e).__name__) from e


def strip_embed_prefix(uri: str) -> str:
    """Turn an `embed://` URI into an archive-relative path."""
    return EMBED_PREFIX_RE.sub("", uri, count=1)


class ArchiveBlobSource(BlobSource):
    """Blobs stored as members of a ZIP archive, keyed by member path.

    Only members named by a manifest record are emitted.
    """

    def __init__(self, archive: zipfile.ZipFile, max_workers: int | None = None):
        self.archive = archive
        self.max_workers = max_workers
        self._names = [name for name in archive.namelist() if not name.endswith("/")]
        self._name_set = set(self._names)

    def locate(self, uri: str) -> Hashable | None:
        path = strip_embed_prefix(uri)
        return path if path in self._name_set else None

    def fetch(self, key: Hashable) -> bytes:
        return self.archive.read(key)  # type: ignore[arg-type]

    def keys(self) -> list[Hashable]:
        return list(self._names)

    def fetch_many(self, keys: Sequence[Hashable]) -> dict[Hashable, bytes]:
        """Read members concurrently and wait for all of them.

        A member that fails to read is logged and left out. The result
        follows the order of `keys`, not completion order.
        """
        if not keys:
            return {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {key: executor.submit(self.fetch, key) for key in keys}

        results: dict[Hashable, bytes] = {}
        for key, future in futures.items():
            try:
                results[key] = future.result()
            except ENTRY_READ_ERRORS as e:
                logger.warning("Failed to read archive member %s: %s", key, e)
        return results


class CharxCardSource(CardSource):
    """Source implementation for .charx archives.

    The archive is opened when the source is created, so a dispatcher can
    tell right away whether the bytes are an archive at all.

    Example:
        >>> with CharxCardSource(Container.from_path(Path("card.charx"))) as source:
        ...     card = source.load()
    """

    format_name = "charx"

    def __init__(self, container: Container, max_workers: int | None = None):
        """Initialize the source.

        Args:
            container: The input file
            max_workers: Thread pool size for concurrent member reads

        Raises:
            NotAnArchive: If the container is not a ZIP archive
        """
        super().__init__(container)
        self.archive = open_archive(container.data)
        self.max_workers = max_workers

    def load(self) -> CardData:
        """Read card.json and wrap the archive members as blobs.

        Raises:
            ManifestMissing: If card.json is not in the archive root
            MalformedContainer: If card.json cannot be read from the archive
        """
        try:
            raw = self.archive.read(MANIFEST_NAME)
        except KeyError:
            raise ManifestMissing(
                f"'{MANIFEST_NAME}' not found in {self.container.name}"
            ) from None
        except ENTRY_READ_ERRORS as e:
            raise MalformedContainer(f"Cannot read '{MANIFEST_NAME}': {e}") from e

        blobs = ArchiveBlobSource(self.archive, self.max_workers)

        try:
            document = json.loads(raw.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("'%s' is not valid JSON: %s", MANIFEST_NAME, e)
            return CardData(format_name=self.format_name, blobs=blobs)

        if not isinstance(document, dict):
            logger.warning("'%s' is not a JSON object", MANIFEST_NAME)
            return CardData(format_name=self.format_name, blobs=blobs)

        candidates = self.collect(document)  # type: ignore[arg-type]
        if not candidates:
            logger.warning("No asset records found in '%s'", MANIFEST_NAME)

        return CardData(
            format_name=self.format_name,
            blobs=blobs,
            document=document,  # type: ignore[arg-type]
            candidates=candidates,
        )

    def close(self) -> None:
        self.archive.close()
