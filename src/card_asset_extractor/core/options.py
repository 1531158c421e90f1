"""Run-time options for an extraction run."""

from dataclasses import dataclass
from enum import Enum


class CollisionPolicy(str, Enum):
    """What to do when two outputs resolve to the same file name."""

    RENAME = "rename"  # append _1, _2, ... to the later entry
    OVERWRITE = "overwrite"  # later entry replaces the earlier one
    ERROR = "error"  # abort the run with NameCollision


@dataclass(frozen=True)
class ExtractionOptions:
    """Options shared by every stage of one extraction run.

    Attributes:
        collision_policy: How duplicate output names are handled
        loose_riff: Treat any RIFF header as WebP when sniffing
        max_workers: Thread pool size for concurrent archive reads
    """

    collision_policy: CollisionPolicy = CollisionPolicy.RENAME
    loose_riff: bool = False
    max_workers: int | None = None
