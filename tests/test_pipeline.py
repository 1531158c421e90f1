"""Tests for format dispatch, the pipeline and output packaging."""

import io
import zipfile
from pathlib import Path

import pytest

from card_asset_extractor import (
    CollisionPolicy,
    ExtractionOptions,
    ExtractionPipeline,
    NameCollision,
    SourceRegistry,
    UnsupportedFormat,
    archive_name,
    build_archive,
    extract_bytes,
    extract_file,
    write_archive,
    write_directory,
)
from card_asset_extractor.dispatcher import detect_format, open_source
from card_asset_extractor.pipeline import ExtractionResult
from card_asset_extractor.platforms.charx import CharxCardSource
from card_asset_extractor.platforms.png import PngCardSource
from card_asset_extractor.sources.base import Container
from card_asset_extractor.core.types import OutputEntry

from conftest import GIF_BYTES, asset_chunk, card_chunk, make_card_png, make_charx


class TestSourceRegistry:
    """Tests for platform registration."""

    def test_platforms_are_discovered(self) -> None:
        assert {"png", "charx"} <= set(SourceRegistry.list_sources())

    def test_unknown_format_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown format"):
            SourceRegistry.create_source("tar", Container("x", b""))


class TestDispatcher:
    """Tests for content-based format detection."""

    def test_detect_format(self, png_image: bytes) -> None:
        assert detect_format(png_image) == "png"
        assert detect_format(make_charx({})) == "charx"
        assert detect_format(b"") == "charx"

    def test_png_signature_selects_png_source(self, png_image: bytes) -> None:
        """Test that the name has no say in the format."""
        with open_source(Container("card.charx", png_image)) as source:
            assert isinstance(source, PngCardSource)

    def test_archive_selects_charx_source(self) -> None:
        with open_source(Container("card.png", make_charx({}))) as source:
            assert isinstance(source, CharxCardSource)

    @pytest.mark.parametrize("data", [b"", b"hello world", b"GIF89a" + b"\x00" * 64])
    def test_unsupported_input(self, data: bytes) -> None:
        """Test that non-PNG, non-archive data is rejected with both reasons."""
        with pytest.raises(UnsupportedFormat) as excinfo:
            open_source(Container("mystery.bin", data))

        message = str(excinfo.value)
        assert "no PNG signature" in message
        assert "not a readable archive" in message


class TestExtractionPipeline:
    """Tests for ExtractionPipeline."""

    def test_extraction_is_repeatable(self, pipeline: ExtractionPipeline) -> None:
        """Test that identical input gives identical entries."""
        document = {"data": {"assets": [{"uri": "__asset:1", "name": "one", "ext": "gif"}]}}
        data = make_card_png(asset_chunk(0, b"zero"), asset_chunk(1, GIF_BYTES), card_chunk(document))

        first = pipeline.extract_bytes(data, "card.png")
        second = pipeline.extract_bytes(data, "card.png")

        assert first == second
        assert first.names == ["one.gif", "asset_0.dat"]

    def test_collision_error_policy_fails_run(self) -> None:
        data = make_charx(
            {
                "data": {
                    "assets": [
                        {"uri": "embed://a.png", "name": "x", "ext": "png"},
                        {"uri": "embed://b.png", "name": "x", "ext": "png"},
                    ]
                }
            },
            {"a.png": b"a", "b.png": b"b"},
        )
        pipeline = ExtractionPipeline(ExtractionOptions(collision_policy=CollisionPolicy.ERROR))

        with pytest.raises(NameCollision):
            pipeline.extract_bytes(data)

    def test_extract_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Alice.png"
        path.write_bytes(make_card_png(asset_chunk(0, b"hello")))

        result = extract_file(path)

        assert result.container_name == "Alice.png"
        assert result.names == ["asset_0.dat"]

    def test_extract_bytes_shortcut(self) -> None:
        result = extract_bytes(make_card_png(asset_chunk(3, GIF_BYTES)), "x.png")

        assert result.names == ["asset_3.gif"]


class TestOutput:
    """Tests for archive and directory output."""

    def result(self) -> ExtractionResult:
        return ExtractionResult(
            container_name="Alice.card.png",
            format_name="png",
            entries=(OutputEntry("portrait.png", b"p"), OutputEntry("asset_1.dat", b"d", False)),
        )

    def test_archive_name(self) -> None:
        assert archive_name("Alice.charx") == "Alice_assets.zip"
        assert archive_name("Alice.card.png") == "Alice.card_assets.zip"
        assert archive_name("noext") == "noext_assets.zip"

    def test_build_archive_contents(self) -> None:
        data = build_archive(self.result().entries)

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert archive.namelist() == ["portrait.png", "asset_1.dat"]
            assert archive.read("portrait.png") == b"p"
            assert archive.testzip() is None

    def test_build_archive_is_deterministic(self) -> None:
        entries = self.result().entries

        assert build_archive(entries) == build_archive(entries)

    def test_write_archive(self, tmp_path: Path) -> None:
        target = write_archive(self.result(), tmp_path / "out")

        assert target == tmp_path / "out" / "Alice.card_assets.zip"
        assert target.exists()

    def test_write_archive_skips_empty_result(self, tmp_path: Path) -> None:
        empty = ExtractionResult(container_name="x.png", format_name="png")

        assert write_archive(empty, tmp_path) is None
        assert list(tmp_path.iterdir()) == []

    def test_write_directory(self, tmp_path: Path) -> None:
        written = write_directory(self.result(), tmp_path / "assets")

        assert [p.name for p in written] == ["portrait.png", "asset_1.dat"]
        assert (tmp_path / "assets" / "asset_1.dat").read_bytes() == b"d"

    def test_write_directory_with_dot_named_asset(self, tmp_path: Path) -> None:
        """Test that a card naming an asset '..' still writes every file."""
        document = {
            "data": {
                "assets": [
                    {"uri": "__asset:0", "name": "ok", "ext": "png"},
                    {"uri": "__asset:1", "name": "..", "ext": ""},
                ]
            }
        }
        data = make_card_png(asset_chunk(0, b"p"), asset_chunk(1, b"x"), card_chunk(document))
        result = extract_bytes(data, "card.png")

        written = write_directory(result, tmp_path / "out")

        assert [p.name for p in written] == ["ok.png", "asset"]
        with zipfile.ZipFile(io.BytesIO(build_archive(result.entries))) as archive:
            assert ".." not in archive.namelist()
