"""PNG chunk reader.

Walks the chunk stream of a PNG file: a 4-byte big-endian length, a
4-byte type tag, the payload, and a 4-byte CRC. CRCs are skipped, not
verified. Reading stops after IEND, so data appended to the image is
ignored.
"""

import struct
from collections.abc import Iterator
from dataclasses import dataclass

from ...core.errors import MalformedContainer
from ...core.sniffer import PNG_SIGNATURE

# Length and type tag that open every chunk
CHUNK_HEADER = struct.Struct(">I4s")
CRC_SIZE = 4

TEXT_CHUNK = b"tEXt"
END_CHUNK = b"IEND"


@dataclass(frozen=True)
class Chunk:
    """A single PNG chunk."""

    type: bytes  # 4-byte tag, e.g. b"tEXt"
    data: bytes


def iter_chunks(data: bytes) -> Iterator[Chunk]:
    """Yield the chunks of a PNG file in file order.

    Args:
        data: Complete file contents, starting with the PNG signature

    Yields:
        Chunk records up to and including IEND

    Raises:
        MalformedContainer: If the signature is missing or the stream
                            ends inside a chunk
    """
    if not data.startswith(PNG_SIGNATURE):
        raise MalformedContainer("Missing PNG signature")

    pos = len(PNG_SIGNATURE)
    end = len(data)

    while pos < end:
        if pos + CHUNK_HEADER.size > end:
            raise MalformedContainer(f"Truncated chunk header at offset {pos}")

        length, tag = CHUNK_HEADER.unpack_from(data, pos)
        start = pos + CHUNK_HEADER.size
        stop = start + length

        if stop + CRC_SIZE > end:
            raise MalformedContainer(
                f"Chunk {tag!r} at offset {pos} declares {length} bytes, "
                f"only {max(end - start, 0)} remain"
            )

        yield Chunk(type=tag, data=data[start:stop])

        pos = stop + CRC_SIZE
        if tag == END_CHUNK:
            return


def iter_text_chunks(data: bytes) -> Iterator[Chunk]:
    """Yield only the tEXt chunks of a PNG file."""
    return (chunk for chunk in iter_chunks(data) if chunk.type == TEXT_CHUNK)
