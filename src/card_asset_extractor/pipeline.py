"""Extraction pipeline.

This module provides the main interface for pulling embedded assets out
of character cards. The pipeline is format-agnostic: the dispatcher picks
a source from the container's bytes, the source produces card data, and
the resolver names the blobs.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .core.options import ExtractionOptions
from .core.types import OutputEntry
from .dispatcher import open_source
from .resolver import AssetResolver
from .sources.base import Container

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionResult:
    """The complete outcome of one extraction run.

    An empty result is a successful run that found nothing to extract.
    """

    container_name: str
    format_name: str
    entries: tuple[OutputEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    @property
    def resolved_count(self) -> int:
        return sum(1 for entry in self.entries if entry.resolved)

    @property
    def synthesized_count(self) -> int:
        return len(self.entries) - self.resolved_count


class ExtractionPipeline:
    """Main interface for asset extraction.

    Example:
        >>> pipeline = ExtractionPipeline()
        >>> result = pipeline.extract_file(Path("card.png"))
        >>> result.names
        ['portrait.png', 'asset_1.jpg']
        >>>
        >>> # Keep the last of two equally named files
        >>> pipeline = ExtractionPipeline(
        ...     ExtractionOptions(collision_policy=CollisionPolicy.OVERWRITE)
        ... )
    """

    def __init__(self, options: ExtractionOptions | None = None):
        """Initialize the pipeline.

        Args:
            options: Run options; defaults to ExtractionOptions()
        """
        self.options = options or ExtractionOptions()
        self.resolver = AssetResolver(self.options)

    def extract(self, container: Container) -> ExtractionResult:
        """Extract every asset from a container.

        Args:
            container: The input file

        Returns:
            ExtractionResult, possibly empty

        Raises:
            ExtractionError: If the container cannot be processed
        """
        logger.info("Processing %s", container.name)

        with open_source(container, self.options) as source:
            card = source.load()
            entries = self.resolver.resolve(card)

        result = ExtractionResult(
            container_name=container.name,
            format_name=card.format_name,
            entries=entries,
        )
        logger.info(
            "%s: %d file(s) extracted (%d named, %d unnamed)",
            container.name,
            len(result.entries),
            result.resolved_count,
            result.synthesized_count,
        )
        return result

    def extract_bytes(self, data: bytes, name: str = "card") -> ExtractionResult:
        """Extract assets from in-memory file contents."""
        return self.extract(Container(name=name, data=data))

    def extract_file(self, path: Path) -> ExtractionResult:
        """Extract assets from a file on disk."""
        return self.extract(Container.from_path(path))


def extract_bytes(
    data: bytes, name: str = "card", options: ExtractionOptions | None = None
) -> ExtractionResult:
    """Shortcut for ExtractionPipeline(options).extract_bytes(data, name)."""
    return ExtractionPipeline(options).extract_bytes(data, name)


def extract_file(path: Path, options: ExtractionOptions | None = None) -> ExtractionResult:
    """Shortcut for ExtractionPipeline(options).extract_file(path)."""
    return ExtractionPipeline(options).extract_file(path)
