"""Tests for magic-byte content sniffing."""

from card_asset_extractor.core.sniffer import sniff_extension

from conftest import GIF_BYTES, JPEG_BYTES, WEBP_BYTES


class TestSniffExtension:
    """Test extension inference from leading bytes."""

    def test_detects_png(self, png_image: bytes) -> None:
        """Test that a real PNG image is recognized."""
        assert sniff_extension(png_image) == ".png"

    def test_detects_jpeg(self) -> None:
        """Test that the JPEG SOI marker is recognized."""
        assert sniff_extension(JPEG_BYTES) == ".jpg"

    def test_detects_webp(self) -> None:
        """Test that RIFF with a WEBP tag at offset 8 is recognized."""
        assert sniff_extension(WEBP_BYTES) == ".webp"

    def test_detects_gif87a_and_gif89a(self) -> None:
        """Test that both GIF signatures are recognized."""
        assert sniff_extension(GIF_BYTES) == ".gif"
        assert sniff_extension(b"GIF87a\x01\x00") == ".gif"

    def test_riff_without_webp_tag_is_generic(self) -> None:
        """Test that a RIFF WAVE file is not mistaken for WebP by default."""
        wave = b"RIFF\x24\x00\x00\x00WAVEfmt "
        assert sniff_extension(wave) == ".dat"

    def test_loose_riff_accepts_any_riff(self) -> None:
        """Test that the loose rule maps any RIFF header to WebP."""
        wave = b"RIFF\x24\x00\x00\x00WAVEfmt "
        assert sniff_extension(wave, loose_riff=True) == ".webp"

    def test_unknown_and_short_data_never_raise(self) -> None:
        """Test that unrecognized or tiny blobs fall back to .dat."""
        assert sniff_extension(b"hello") == ".dat"
        assert sniff_extension(b"") == ".dat"
        assert sniff_extension(b"\x89P") == ".dat"
        assert sniff_extension(b"RIFF") == ".dat"
