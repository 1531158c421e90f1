"""File name helpers for extracted assets."""

import re

# Dangerous characters to remove from filenames
DANGEROUS_FILENAME_CHARS = r'[<>:"|?*\x00-\x1f]'

# Trailing ".ext" of a basename, the whole name when it starts with a dot
_EXTENSION_RE = re.compile(r"\.[^/.]+$")

FALLBACK_NAME = "asset"


def sanitize_filename(filename: str) -> str:
    """Sanitize filename by removing dangerous characters.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename safe for storage
    """
    # Remove dangerous characters
    sanitized = re.sub(DANGEROUS_FILENAME_CHARS, "", filename)
    # Remove path separators
    sanitized = sanitized.replace("/", "").replace("\\", "")
    return sanitized


def path_stem(path: str) -> str:
    """Return the last path component of `path` without its extension.

    Example:
        "folder/pic.png" -> "pic"
    """
    basename = re.split(r"[/\\]", path)[-1]
    return _EXTENSION_RE.sub("", basename)


def final_name(name: str, ext: str | None) -> str:
    """Append `.ext` to `name` unless it already ends with it.

    The comparison ignores case, so "Cover.JPG" with hint "jpg" is kept
    as-is. An empty or missing hint leaves the name untouched.
    """
    if ext and not name.lower().endswith(f".{ext.lower()}"):
        return f"{name}.{ext}"
    return name


def safe_output_name(name: str) -> str:
    """Sanitize a resolved name, falling back to a generic one if nothing usable is left.

    Names made only of dots ("." and "..") would refer to directories, so
    they are replaced as well.
    """
    sanitized = sanitize_filename(name)
    if not sanitized.strip("."):
        return FALLBACK_NAME
    return sanitized
