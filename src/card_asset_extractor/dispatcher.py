"""Format detection and source selection.

The container format is decided from the bytes alone, never from the
file name: PNG signature first, ZIP archive second.
"""

import logging

from .core.errors import NotAnArchive, UnsupportedFormat
from .core.options import ExtractionOptions
from .core.sniffer import PNG_SIGNATURE
from .registry import SourceRegistry
from .sources.base import CardSource, Container

logger = logging.getLogger(__name__)

PNG_FORMAT = "png"
ARCHIVE_FORMAT = "charx"


def detect_format(data: bytes) -> str:
    """Name the pipeline to try first for `data`.

    Returns:
        "png" if the data starts with the PNG signature, else "charx"
    """
    return PNG_FORMAT if data[: len(PNG_SIGNATURE)] == PNG_SIGNATURE else ARCHIVE_FORMAT


def open_source(container: Container, options: ExtractionOptions | None = None) -> CardSource:
    """Create the card source matching the container's content.

    Args:
        container: The input file
        options: Run options (max_workers is handed to archive sources)

    Returns:
        A CardSource ready to load

    Raises:
        UnsupportedFormat: If the data is neither a PNG nor an archive
    """
    options = options or ExtractionOptions()
    data = container.data

    if detect_format(data) == PNG_FORMAT:
        logger.debug("%s: PNG signature found", container.name)
        return SourceRegistry.create_source(PNG_FORMAT, container)

    try:
        return SourceRegistry.create_source(
            ARCHIVE_FORMAT, container, max_workers=options.max_workers
        )
    except NotAnArchive as e:
        head = data[: len(PNG_SIGNATURE)].hex(" ") or "empty"
        raise UnsupportedFormat(
            f"Unsupported file '{container.name}': no PNG signature (got {head}) "
            f"and not a readable archive ({e})"
        ) from e
