"""Packaging of extraction results.

Results are written either as a single `<stem>_assets.zip` archive or as
loose files in a directory.
"""

import io
import re
import zipfile
from collections.abc import Iterable
from pathlib import Path

from .core.types import OutputEntry
from .pipeline import ExtractionResult

ARCHIVE_SUFFIX = "_assets.zip"

# Fixed member timestamp so identical results give identical archives
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


def output_stem(container_name: str) -> str:
    """Strip the last extension from a container name."""
    return re.sub(r"\.[^/.]+$", "", container_name)


def archive_name(container_name: str) -> str:
    """Name of the archive produced for `container_name`.

    Example:
        "Alice.charx" -> "Alice_assets.zip"
    """
    return f"{output_stem(container_name)}{ARCHIVE_SUFFIX}"


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    This prevents path traversal attacks.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        ValueError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise ValueError(f"Path {path} escapes base directory {base_dir}")


def build_archive(entries: Iterable[OutputEntry]) -> bytes:
    """Pack entries into an in-memory ZIP archive (DEFLATE)."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for entry in entries:
            info = zipfile.ZipInfo(entry.name, date_time=ZIP_EPOCH)
            info.compress_type = zipfile.ZIP_DEFLATED
            archive.writestr(info, entry.data)
    return buffer.getvalue()


def write_archive(result: ExtractionResult, out_dir: Path) -> Path | None:
    """Write `<stem>_assets.zip` into `out_dir`.

    Returns:
        Path of the archive, or None if the result is empty
    """
    if result.is_empty:
        return None

    out_dir.mkdir(parents=True, exist_ok=True)
    target = out_dir / archive_name(result.container_name)
    target.write_bytes(build_archive(result.entries))
    return target


def write_directory(result: ExtractionResult, out_dir: Path) -> list[Path]:
    """Write every entry as a separate file under `out_dir`.

    Raises:
        ValueError: If an entry name would land outside `out_dir`
    """
    written: list[Path] = []
    if result.is_empty:
        return written

    out_dir.mkdir(parents=True, exist_ok=True)
    for entry in result.entries:
        target = out_dir / entry.name
        validate_path_safety(target, out_dir)
        target.write_bytes(entry.data)
        written.append(target)
    return written
