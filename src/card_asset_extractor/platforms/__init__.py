"""Container format implementations for the extraction pipeline.

This package contains self-contained platform modules that provide
card sources for each supported container (PNG cards, .charx archives).

Each platform module auto-registers itself with the SourceRegistry
when imported.
"""

# Platform modules are imported dynamically by SourceRegistry.discover_platforms()
