"""Source registry for factory-based source creation.

This module provides a central registry for card source factories,
keeping the dispatcher format-agnostic and enabling automatic
platform discovery.
"""

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .sources.base import CardSource, Container


class SourceRegistry:
    """Central registry for card source factories.

    Platforms register a factory when imported, and the registry can
    automatically discover all available platforms.
    """

    _factories: dict[str, Callable[..., "CardSource"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "CardSource"]) -> None:
        """Register a factory function for creating sources.

        Args:
            name: Name of the container format (e.g., 'png', 'charx')
            factory: Callable taking a Container and keyword options

        Example:
            >>> def create_png_source(container: Container, **kwargs) -> PngCardSource:
            ...     return PngCardSource(container)
            >>> SourceRegistry.register_factory('png', create_png_source)
        """
        cls._factories[name] = factory

    @classmethod
    def create_source(cls, name: str, container: "Container", **kwargs) -> "CardSource":
        """Create a source for a container.

        Args:
            name: Name of the registered format
            container: The input file
            **kwargs: Options passed to the factory (e.g. max_workers)

        Returns:
            CardSource for the container

        Raises:
            ValueError: If name is not registered
            ExtractionError: If the factory rejects the container
        """
        if name not in cls._factories:
            available = ", ".join(cls._factories.keys()) or "none"
            raise ValueError(f"Unknown format: '{name}'. Available formats: {available}")

        return cls._factories[name](container, **kwargs)

    @classmethod
    def list_sources(cls) -> list[str]:
        """List all registered format names.

        Example:
            >>> SourceRegistry.list_sources()
            ['charx', 'png']
        """
        return list(cls._factories.keys())

    @classmethod
    def discover_platforms(cls) -> None:
        """Auto-discover and import all platforms.

        This method iterates through the platforms/ directory and
        imports each platform module. Platforms register themselves
        via their __init__.py files.
        """
        platforms_dir = Path(__file__).parent / "platforms"

        if not platforms_dir.exists():
            return

        for platform_path in sorted(platforms_dir.iterdir()):
            if not platform_path.is_dir():
                continue

            if not (platform_path / "__init__.py").exists():
                continue

            importlib.import_module(
                f".platforms.{platform_path.name}",
                package="card_asset_extractor",
            )
