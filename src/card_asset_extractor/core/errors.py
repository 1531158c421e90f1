"""Exception hierarchy for card asset extraction.

Only the errors that abort a run escape the pipeline. Decoding problems
with individual chunks or the card document are raised as
MetadataDecodeFailure by the helpers and absorbed by their callers.
"""


class ExtractionError(Exception):
    """Base class for all extraction errors."""


class UnsupportedFormat(ExtractionError):
    """Input is neither a PNG card nor a readable archive."""


class MalformedContainer(ExtractionError):
    """PNG chunk stream is truncated or corrupt."""


class ManifestMissing(ExtractionError):
    """Archive has no card.json at its root."""


class NotAnArchive(ExtractionError):
    """Bytes could not be opened as a ZIP archive."""


class NameCollision(ExtractionError):
    """Two outputs resolved to the same name under the error policy."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate output name: {name}")
        self.name = name


class MetadataDecodeFailure(ExtractionError):
    """A metadata chunk or the card document could not be decoded."""
