"""Magic-byte content sniffing for blobs that have no declared name."""

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SOI = b"\xff\xd8\xff"
RIFF_TAG = b"RIFF"
WEBP_TAG = b"WEBP"
GIF_TAG = b"GIF8"

DEFAULT_EXTENSION = ".dat"


def sniff_extension(data: bytes, loose_riff: bool = False) -> str:
    """Guess a file extension from the leading bytes of a blob.

    Checks run in a fixed order and the first match wins. Anything
    unrecognized is reported as generic binary; this never raises.

    Args:
        data: Blob contents (only the first 12 bytes are inspected)
        loose_riff: Accept any RIFF container as WebP without checking
                    the WEBP tag at offset 8

    Returns:
        Extension including the leading dot, e.g. ".png"
    """
    if data.startswith(PNG_SIGNATURE):
        return ".png"
    if data.startswith(JPEG_SOI):
        return ".jpg"
    if data.startswith(RIFF_TAG) and (loose_riff or data[8:12] == WEBP_TAG):
        return ".webp"
    if data.startswith(GIF_TAG):
        return ".gif"
    return DEFAULT_EXTENSION
