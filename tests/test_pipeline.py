"""Tests for the image pipeline."""

from __future__ import annotations

import base64
import io
from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock

import numpy as np
import pytest
from PIL import Image, ImageOps

from imgpipe import (
    AppConfig,
    DecodeFailedError,
    EncodeFailedError,
    ImageFormat,
    ImagePipeline,
    InvalidArgumentError,
    MetadataReadError,
    NotInitializedError,
    OutputNotConfiguredError,
    RawBytesSource,
    RawImage,
    UnsupportedFormatError,
)
from imgpipe.domain.ports import MetadataReaderPort
from imgpipe.infrastructure.codec import PillowImageCodec

# "BM" signature with an info-header size no BMP variant uses
BAD_BMP_HEADER = b"BM" + b"\x00" * 12 + b"\x07\x00\x00\x00" + b"\x00" * 40


def _spy_codec() -> MagicMock:
    return MagicMock(wraps=PillowImageCodec())


def _blank(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width, 3), dtype=np.uint8)


class TestConstruction:
    def test_image_and_source_are_exclusive(self, png_bytes: bytes) -> None:
        with pytest.raises(InvalidArgumentError):
            ImagePipeline(_blank(2, 2), source=RawBytesSource(png_bytes))

    @pytest.mark.parametrize(
        ("factory", "payload"),
        [
            (ImagePipeline.from_bytes, "not bytes"),
            (ImagePipeline.from_data_url, b"data:image/png;base64,"),
            (ImagePipeline.from_file, 42),
            (ImagePipeline.from_image, "pixels"),
            (ImagePipeline.from_image, np.zeros((2, 2, 5), dtype=np.uint8)),
        ],
    )
    def test_wrong_payload_type(self, factory: Callable, payload: object) -> None:
        with pytest.raises(InvalidArgumentError):
            factory(payload)

    def test_unknown_interpolation(self, png_bytes: bytes) -> None:
        config = AppConfig.from_dict({"transform": {"interpolation": "nearest"}})
        with pytest.raises(InvalidArgumentError):
            ImagePipeline.from_bytes(png_bytes, config=config)

    def test_empty_pipeline(self) -> None:
        pipeline = ImagePipeline()
        with pytest.raises(NotInitializedError):
            pipeline.resolve()
        with pytest.raises(NotInitializedError):
            pipeline.cache_metadata()
        with pytest.raises(NotInitializedError):
            pipeline.downscale(10)
        with pytest.raises(NotInitializedError):
            pipeline.set_output("png").to_bytes()
        with pytest.raises(NotInitializedError):
            pipeline.to_file()


class TestResolve:
    def test_idempotent(self, png_bytes: bytes) -> None:
        codec = _spy_codec()
        pipeline = ImagePipeline.from_bytes(png_bytes, codec=codec)
        assert not pipeline.is_resolved

        first = pipeline.resolve()
        second = pipeline.resolve()

        assert first is second
        assert pipeline.is_resolved
        assert codec.decode.call_count == 1

    def test_lazy_until_pixels_needed(self, png_bytes: bytes) -> None:
        codec = _spy_codec()
        ImagePipeline.from_bytes(png_bytes, codec=codec).set_output("jpeg", 80)
        codec.decode.assert_not_called()

    def test_data_url(self, png_bytes: bytes) -> None:
        data_url = "data:image/png;base64," + base64.b64encode(png_bytes).decode()
        assert ImagePipeline.from_data_url(data_url).resolve().size == (6, 4)

    def test_data_url_header_mime_is_not_trusted(self, png_bytes: bytes) -> None:
        data_url = "data:image/jpeg;base64," + base64.b64encode(png_bytes).decode()
        assert ImagePipeline.from_data_url(data_url).resolve().size == (6, 4)

    @pytest.mark.parametrize("data_url", ["data:image/png;base64", "data:image/png;base64,@@@"])
    def test_malformed_data_url(self, data_url: str) -> None:
        pipeline = ImagePipeline.from_data_url(data_url)
        with pytest.raises(DecodeFailedError):
            pipeline.resolve()
        assert not pipeline.is_resolved

    def test_corrupt_bytes_leave_state_untouched(self) -> None:
        pipeline = ImagePipeline.from_bytes(b"\x89PNG garbage")
        with pytest.raises(DecodeFailedError):
            pipeline.resolve()
        assert not pipeline.is_resolved

    def test_malformed_bmp_header_from_bytes(self) -> None:
        pipeline = ImagePipeline.from_bytes(BAD_BMP_HEADER)
        with pytest.raises(DecodeFailedError):
            pipeline.resolve()
        assert not pipeline.is_resolved

    def test_malformed_bmp_header_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.bmp"
        path.write_bytes(BAD_BMP_HEADER)
        pipeline = ImagePipeline.from_file(path)
        with pytest.raises(DecodeFailedError):
            pipeline.resolve()
        assert not pipeline.is_resolved

    def test_file(self, tmp_path: Path, png_bytes: bytes) -> None:
        path = tmp_path / "image.png"
        path.write_bytes(png_bytes)
        assert ImagePipeline.from_file(str(path)).resolve().size == (6, 4)

    def test_file_content_sniffed_not_extension(self, tmp_path: Path, png_bytes: bytes) -> None:
        path = tmp_path / "image.jpg"
        path.write_bytes(png_bytes)
        assert ImagePipeline.from_file(path).resolve().size == (6, 4)

    def test_text_file_is_unsupported(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("just some text\n")
        pipeline = ImagePipeline.from_file(path)
        with pytest.raises(UnsupportedFormatError):
            pipeline.resolve()
        assert not pipeline.is_resolved

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ImagePipeline.from_file(tmp_path / "missing.png").resolve()

    def test_pre_decoded_image(self) -> None:
        pipeline = ImagePipeline.from_image(_blank(3, 2))
        assert pipeline.is_resolved
        assert pipeline.resolve().size == (3, 2)


class TestMetadata:
    def test_image_without_metadata(self, png_bytes: bytes) -> None:
        codec = _spy_codec()
        pipeline = ImagePipeline.from_bytes(png_bytes, codec=codec).cache_metadata()
        assert pipeline.metadata is not None
        assert pipeline.metadata.is_empty

        pipeline.rotate_from_metadata()
        codec.decode.assert_not_called()
        assert not pipeline.is_resolved

    def test_snapshot_computed_once(self, jpeg_with_exif: bytes) -> None:
        reader = MagicMock(spec=MetadataReaderPort)
        reader.read_metadata.return_value = {"Orientation": 6}
        pipeline = ImagePipeline.from_bytes(jpeg_with_exif, metadata_reader=reader)

        snapshot = pipeline.cache_metadata().metadata
        pipeline.cache_metadata().rotate_from_metadata()

        assert reader.read_metadata.call_count == 1
        assert pipeline.metadata is snapshot

    def test_reader_failure_gives_empty_snapshot(self, png_bytes: bytes) -> None:
        reader = MagicMock(spec=MetadataReaderPort)
        reader.read_metadata.side_effect = MetadataReadError("broken")
        pipeline = ImagePipeline.from_bytes(png_bytes, metadata_reader=reader).cache_metadata()
        assert pipeline.metadata.is_empty

    def test_other_reader_errors_propagate(self, png_bytes: bytes) -> None:
        reader = MagicMock(spec=MetadataReaderPort)
        reader.read_metadata.side_effect = RuntimeError("bug")
        pipeline = ImagePipeline.from_bytes(png_bytes, metadata_reader=reader)
        with pytest.raises(RuntimeError):
            pipeline.cache_metadata()
        assert pipeline.metadata is None

    def test_malformed_data_url_gives_empty_snapshot(self) -> None:
        pipeline = ImagePipeline.from_data_url("no comma here").cache_metadata()
        assert pipeline.metadata.is_empty

    def test_unavailable_after_byte_source_decoded(self, jpeg_with_exif: bytes) -> None:
        pipeline = ImagePipeline.from_bytes(jpeg_with_exif)
        pipeline.resolve()
        with pytest.raises(NotInitializedError):
            pipeline.cache_metadata()

    def test_file_origin_readable_after_decode(self, tmp_path: Path, jpeg_with_exif: bytes) -> None:
        path = tmp_path / "photo.jpg"
        path.write_bytes(jpeg_with_exif)
        pipeline = ImagePipeline.from_file(path)
        pipeline.resolve()
        assert pipeline.cache_metadata().metadata.orientation == 6

    def test_pre_decoded_image_has_no_metadata(self) -> None:
        with pytest.raises(NotInitializedError):
            ImagePipeline.from_image(_blank(2, 2)).rotate_from_metadata()


class TestRotateFromMetadata:
    @pytest.mark.parametrize("code", range(1, 9))
    def test_matches_exif_transpose(self, exif_png: Callable[[int], bytes], code: int) -> None:
        data = exif_png(code)
        with Image.open(io.BytesIO(data)) as img:
            expected = np.array(ImageOps.exif_transpose(img).convert("RGB"))

        pipeline = ImagePipeline.from_bytes(data).rotate_from_metadata()

        assert pipeline.metadata.orientation == code
        np.testing.assert_array_equal(pipeline.resolve().pixels, expected)

    def test_jpeg_orientation_6(self, jpeg_with_exif: bytes) -> None:
        pipeline = ImagePipeline.from_bytes(jpeg_with_exif).rotate_from_metadata()
        assert pipeline.resolve().size == (4, 6)

    def test_metadata_disabled(self, exif_png: Callable[[int], bytes]) -> None:
        config = AppConfig.from_dict({"metadata": {"reader": "none"}})
        pipeline = ImagePipeline.from_bytes(exif_png(6), config=config).rotate_from_metadata()
        assert not pipeline.is_resolved
        assert pipeline.resolve().size == (6, 4)


class TestDownscale:
    def test_large_landscape(self) -> None:
        pipeline = ImagePipeline.from_image(_blank(4000, 3000)).downscale(800)
        assert pipeline.resolve().size == (800, 600)

    def test_portrait_with_both_bounds(self) -> None:
        pipeline = ImagePipeline.from_image(_blank(300, 600)).downscale(200, 100)
        assert pipeline.resolve().size == (50, 100)

    def test_within_bounds_is_noop(self) -> None:
        pipeline = ImagePipeline.from_image(_blank(100, 50))
        before = pipeline.resolve()
        pipeline.downscale(800)
        assert pipeline.resolve() is before

    def test_never_upscales(self) -> None:
        pipeline = ImagePipeline.from_image(_blank(10, 20)).downscale(1000, 1000)
        assert pipeline.resolve().size == (10, 20)

    def test_preserves_alpha(self) -> None:
        rgba = np.zeros((40, 80, 4), dtype=np.uint8)
        image = ImagePipeline.from_image(RawImage.from_array(rgba)).downscale(20).resolve()
        assert image.size == (20, 10)
        assert image.has_alpha

    @pytest.mark.parametrize(("max_width", "max_height"), [(0, None), (-5, None), (10, 0), (1.5, None), (True, None)])
    def test_invalid_bounds_checked_before_decode(
        self, png_bytes: bytes, max_width: object, max_height: object
    ) -> None:
        pipeline = ImagePipeline.from_bytes(png_bytes)
        with pytest.raises(InvalidArgumentError):
            pipeline.downscale(max_width, max_height)
        assert not pipeline.is_resolved


class TestOutput:
    def test_output_not_configured(self, png_bytes: bytes, tmp_path: Path) -> None:
        pipeline = ImagePipeline.from_bytes(png_bytes)
        with pytest.raises(OutputNotConfiguredError):
            pipeline.to_bytes()
        with pytest.raises(OutputNotConfiguredError):
            pipeline.to_data_url()
        with pytest.raises(OutputNotConfiguredError):
            pipeline.to_file(tmp_path / "out.png")
        assert not pipeline.is_resolved

    def test_set_output_accepts_names(self, png_bytes: bytes) -> None:
        pipeline = ImagePipeline.from_bytes(png_bytes)
        assert pipeline.set_output("JPG", 70).output_config.format is ImageFormat.JPEG
        assert pipeline.set_output("image/webp").output_config.format is ImageFormat.WEBP
        assert pipeline.output_config.quality is None

    @pytest.mark.parametrize(("fmt", "quality"), [("gif", None), ("png", "high"), ("png", 5.0)])
    def test_set_output_rejects(self, png_bytes: bytes, fmt: str, quality: object) -> None:
        with pytest.raises(InvalidArgumentError):
            ImagePipeline.from_bytes(png_bytes).set_output(fmt, quality)

    def test_data_url_round_trip_is_pixel_exact(self, quadrant_image: Callable[..., Image.Image]) -> None:
        original = np.array(quadrant_image())
        data_url = ImagePipeline.from_image(original).set_output(ImageFormat.PNG).to_data_url()

        assert data_url.startswith("data:image/png;base64,")
        np.testing.assert_array_equal(ImagePipeline.from_data_url(data_url).resolve().pixels, original)

    def test_jpeg_bytes(self, png_bytes: bytes) -> None:
        data = ImagePipeline.from_bytes(png_bytes).set_output("jpeg", 85).to_bytes()
        with Image.open(io.BytesIO(data)) as img:
            assert img.format == "JPEG"
            assert img.size == (6, 4)

    def test_encode_failure(self, png_bytes: bytes, tmp_path: Path) -> None:
        target = tmp_path / "out.jpg"
        pipeline = ImagePipeline.from_bytes(png_bytes).set_output("jpeg", 150)
        with pytest.raises(EncodeFailedError):
            pipeline.to_file(target)
        assert not target.exists()

    def test_to_file(self, png_bytes: bytes, tmp_path: Path) -> None:
        target = tmp_path / "out.webp"
        written = ImagePipeline.from_bytes(png_bytes).set_output("webp", 90).to_file(str(target))
        assert written == target
        with Image.open(target) as img:
            assert img.format == "WEBP"

    def test_to_file_overwrites_input(self, tmp_path: Path) -> None:
        path = tmp_path / "big.png"
        path.write_bytes(_png(_blank(400, 200)))

        written = ImagePipeline.from_file(path).downscale(100).set_output("png").to_file()

        assert written == path
        with Image.open(path) as img:
            assert img.size == (100, 50)

    def test_to_file_accepts_path_like(self, png_bytes: bytes, tmp_path: Path) -> None:
        class FsPath:
            def __fspath__(self) -> str:
                return str(tmp_path / "out.png")

        written = ImagePipeline.from_bytes(png_bytes).set_output("png").to_file(FsPath())
        assert written == tmp_path / "out.png"
        assert written.read_bytes().startswith(b"\x89PNG")

    def test_to_file_without_path_needs_file_origin(self, png_bytes: bytes) -> None:
        with pytest.raises(InvalidArgumentError):
            ImagePipeline.from_bytes(png_bytes).set_output("png").to_file()

    def test_to_file_rejects_directory(self, png_bytes: bytes, tmp_path: Path) -> None:
        with pytest.raises(InvalidArgumentError):
            ImagePipeline.from_bytes(png_bytes).set_output("png").to_file(tmp_path)


def _png(pixels: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(pixels).save(buffer, "PNG")
    return buffer.getvalue()
