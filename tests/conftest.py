"""Shared fixtures and builders for card files."""

import base64
import io
import json
import zipfile
from typing import Any

import png
import pytest

from card_asset_extractor import ExtractionPipeline


def make_image(width: int = 1, height: int = 1) -> bytes:
    """Encode a small greyscale PNG image."""
    buffer = io.BytesIO()
    writer = png.Writer(width, height, greyscale=True)
    writer.write(buffer, [[0] * width for _ in range(height)])
    return buffer.getvalue()


def text_chunk(key: str, value: str | bytes) -> tuple[bytes, bytes]:
    """Build a tEXt chunk tuple for png.write_chunks."""
    raw = value if isinstance(value, bytes) else value.encode("utf-8")
    return b"tEXt", key.encode("utf-8") + b"\x00" + raw


def asset_chunk(index: int | str, data: bytes) -> tuple[bytes, bytes]:
    """tEXt chunk carrying a base64 encoded asset blob."""
    return text_chunk(f"chara-ext-asset_:{index}", base64.b64encode(data).decode("ascii"))


def encode_card(document: Any) -> str:
    return base64.b64encode(json.dumps(document).encode("utf-8")).decode("ascii")


def card_chunk(document: Any, key: str = "ccv3") -> tuple[bytes, bytes]:
    """tEXt chunk carrying a base64 encoded card document."""
    return text_chunk(key, encode_card(document))


def make_card_png(*chunks: tuple[bytes, bytes], image: bytes | None = None) -> bytes:
    """Insert extra chunks just before IEND of a real PNG image."""
    original = list(png.Reader(bytes=image or make_image()).chunks())
    buffer = io.BytesIO()
    png.write_chunks(buffer, original[:-1] + list(chunks) + original[-1:])
    return buffer.getvalue()


def make_charx(
    manifest: Any = None,
    members: dict[str, bytes] | None = None,
    compression: int = zipfile.ZIP_DEFLATED,
) -> bytes:
    """Build a .charx archive in memory.

    A dict or list manifest is stored as JSON, bytes are stored as-is,
    and None leaves card.json out entirely.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=compression) as archive:
        if isinstance(manifest, bytes):
            archive.writestr("card.json", manifest)
        elif manifest is not None:
            archive.writestr("card.json", json.dumps(manifest))
        for name, data in (members or {}).items():
            archive.writestr(name, data)
    return buffer.getvalue()


JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 16
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 16
GIF_BYTES = b"GIF89a\x01\x00\x01\x00" + b"\x00" * 16


@pytest.fixture
def png_image() -> bytes:
    """A valid 1x1 PNG image."""
    return make_image()


@pytest.fixture
def pipeline() -> ExtractionPipeline:
    """Pipeline with default options."""
    return ExtractionPipeline()
