"""
Image Pipeline

Fluent, single-image normalization pipeline:
source -> (metadata) -> decode -> rotate -> downscale -> encode.

Decoding is lazy and destructive: the encoded source is kept until an
operation needs pixels, then it is replaced by the decoded bitmap.
"""

from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple, Union
import logging
import os
import uuid

import numpy as np

from .state import PipelineState, PipelineStep, Resolved, Unresolved
from ...config.settings import AppConfig
from ...cross_cutting.error_handling import ErrorHandler
from ...cross_cutting.logging import PipelineLogger
from ...cross_cutting.validation import (
    validate_dimension,
    validate_quality,
    validate_output_path,
)
from ...domain.ports.image_codec import ImageCodecPort
from ...domain.ports.metadata_reader import MetadataReaderPort
from ...domain.value_objects.image_format import ImageFormat
from ...domain.value_objects.image_source import (
    ImageSource,
    RawBytesSource,
    DataUrlSource,
    FilePathSource,
)
from ...domain.value_objects.metadata import MetadataSnapshot
from ...domain.value_objects.output_config import OutputConfig
from ...domain.value_objects.raw_image import RawImage
from ...domain.exceptions import (
    DecodeFailedError,
    InvalidArgumentError,
    MetadataReadError,
    NotInitializedError,
    OutputNotConfiguredError,
    UnsupportedFormatError,
)
from ...infrastructure.codec.factory import ImageCodecFactory
from ...infrastructure.metadata.factory import MetadataReaderFactory
from ...infrastructure.utils.data_url import parse_data_url, build_data_url
from ...infrastructure.utils.image_processing import (
    compute_downscaled_size,
    interpolation_flag,
    resize_image,
    rotate_from_orientation,
)


logger = logging.getLogger(__name__)

_SOURCE_TYPES = (RawBytesSource, DataUrlSource, FilePathSource)


class ImagePipeline:
    """
    Normalization pipeline for a single image.

    Every operation either completes or leaves the pipeline as it was.
    Configuration methods return the pipeline so calls can be chained.

    Usage:
        data_url = (
            ImagePipeline.from_file("photo.jpg")
            .rotate_from_metadata()
            .downscale(800)
            .set_output("webp", quality=80)
            .to_data_url()
        )
    """

    def __init__(
        self,
        image: Optional[Union[RawImage, np.ndarray]] = None,
        *,
        source: Optional[ImageSource] = None,
        codec: Optional[ImageCodecPort] = None,
        metadata_reader: Optional[MetadataReaderPort] = None,
        config: Optional[AppConfig] = None
    ):
        """
        Initialize the pipeline.

        Args:
            image: Already-decoded image (metadata is then unavailable)
            source: Encoded image source, decoded on first use
            codec: Codec implementation (default: built from config)
            metadata_reader: Metadata reader (default: built from config)
            config: Application configuration

        Raises:
            InvalidArgumentError: If both image and source are given, or
                either has the wrong type
        """
        if image is not None and source is not None:
            raise InvalidArgumentError("source", "pass either a decoded image or a source, not both")

        self.config = config or AppConfig()
        self.pipeline_id = str(uuid.uuid4())
        self._log = PipelineLogger(self.pipeline_id)

        try:
            self.codec = codec or ImageCodecFactory.create_from_config(asdict(self.config.codec))
            self.metadata_reader = metadata_reader or MetadataReaderFactory.create_from_config(
                asdict(self.config.metadata)
            )
        except ValueError as e:
            raise InvalidArgumentError("config", str(e)) from e

        try:
            self._interpolation = interpolation_flag(self.config.transform.interpolation)
        except ValueError as e:
            raise InvalidArgumentError("interpolation", str(e)) from e

        self._state: Optional[PipelineState] = None
        self._metadata: Optional[MetadataSnapshot] = None
        self._output: Optional[OutputConfig] = None

        if image is not None:
            self._state = Resolved(image=self._coerce_image(image))
        elif source is not None:
            if not isinstance(source, _SOURCE_TYPES):
                raise InvalidArgumentError(
                    "source", f"expected an image source, got {type(source).__name__}"
                )
            self._state = Unresolved(source=source)

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs) -> "ImagePipeline":
        """Create a pipeline from an encoded byte stream."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidArgumentError("data", f"expected bytes, got {type(data).__name__}")
        return cls(source=RawBytesSource(bytes(data)), **kwargs)

    @classmethod
    def from_data_url(cls, data_url: str, **kwargs) -> "ImagePipeline":
        """Create a pipeline from a base64 data URL."""
        if not isinstance(data_url, str):
            raise InvalidArgumentError("data_url", f"expected str, got {type(data_url).__name__}")
        return cls(source=DataUrlSource(data_url), **kwargs)

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike], **kwargs) -> "ImagePipeline":
        """Create a pipeline from an image file path."""
        if not isinstance(path, (str, os.PathLike)):
            raise InvalidArgumentError("path", f"expected str or Path, got {type(path).__name__}")
        return cls(source=FilePathSource(Path(path)), **kwargs)

    @classmethod
    def from_image(cls, image: Union[RawImage, np.ndarray], **kwargs) -> "ImagePipeline":
        """Create a pipeline from an already-decoded image."""
        if image is None:
            raise InvalidArgumentError("image", "image is required")
        return cls(image, **kwargs)

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def is_resolved(self) -> bool:
        """Whether the source has been decoded."""
        return isinstance(self._state, Resolved)

    @property
    def metadata(self) -> Optional[MetadataSnapshot]:
        """Cached metadata snapshot, None until cache_metadata() runs."""
        return self._metadata

    @property
    def output_config(self) -> Optional[OutputConfig]:
        return self._output

    def __repr__(self) -> str:
        if self._state is None:
            state = "empty"
        elif isinstance(self._state, Resolved):
            state = str(self._state.image)
        else:
            state = type(self._state.source).__name__
        return f"ImagePipeline({state}, output={self._output})"

    # =========================================================================
    # Source resolution
    # =========================================================================

    def resolve(self) -> RawImage:
        """
        Decode the source if needed and return the owned image.

        Idempotent: once resolved, the codec is not called again.

        Raises:
            NotInitializedError: If the pipeline has no image source
            UnsupportedFormatError: If a file's content has no decoder
            DecodeFailedError: If the decoder rejects the data
            FileNotFoundError: If a file source does not exist
        """
        if isinstance(self._state, Resolved):
            return self._state.image
        if self._state is None:
            raise NotInitializedError()

        step = PipelineStep.DECODE.value
        self._log.step_start(step)
        try:
            image, origin_path = self._decode(self._state.source)
        except Exception as e:
            self._log.step_error(step, e)
            raise

        self._state = Resolved(image=image, origin_path=origin_path)
        self._log.step_end(step, detail=str(image))
        return image

    def _decode(self, source: ImageSource) -> Tuple[RawImage, Optional[Path]]:
        if isinstance(source, RawBytesSource):
            return self.codec.decode(source.data), None

        if isinstance(source, DataUrlSource):
            _, payload = parse_data_url(source.data_url)
            return self.codec.decode(payload), None

        data = source.path.read_bytes()
        mime = self.codec.probe_mime(data)
        if not self.codec.supports(mime):
            raise UnsupportedFormatError(mime)
        return self.codec.decode(data, mime), source.path

    # =========================================================================
    # Metadata
    # =========================================================================

    def cache_metadata(self) -> "ImagePipeline":
        """
        Read and cache the embedded metadata of the original source.

        Unreadable metadata yields an empty snapshot. Once cached, the
        snapshot never changes.

        Raises:
            NotInitializedError: If there is no source, or the original
                bytes/text were already discarded by decoding
        """
        if self._metadata is not None:
            return self

        if self._state is None:
            raise NotInitializedError()
        if isinstance(self._state, Resolved) and self._state.origin_path is None:
            raise NotInitializedError(
                "Original image source was discarded by decoding; metadata is no longer available"
            )

        step = PipelineStep.METADATA.value
        self._log.step_start(step)
        tags = {}
        with ErrorHandler(
            logger,
            context="metadata",
            suppress=(MetadataReadError,),
            log_level=logging.DEBUG
        ) as handler:
            tags = self.metadata_reader.read_metadata(self._metadata_source())

        self._metadata = MetadataSnapshot.from_tags(tags)
        self._log.step_end(
            step,
            success=not handler.has_error,
            detail=f"{len(self._metadata)} tags, orientation={self._metadata.orientation}",
        )
        return self

    def _metadata_source(self) -> Union[bytes, Path]:
        """Original encoded input, as bytes or a file path."""
        if isinstance(self._state, Resolved):
            return self._state.origin_path

        source = self._state.source
        if isinstance(source, RawBytesSource):
            return source.data
        if isinstance(source, DataUrlSource):
            try:
                _, payload = parse_data_url(source.data_url)
            except DecodeFailedError as e:
                raise MetadataReadError(f"Unreadable data URL: {e.message}") from e
            return payload
        return source.path

    # =========================================================================
    # Transforms
    # =========================================================================

    def rotate_from_metadata(self) -> "ImagePipeline":
        """
        Re-orient the image according to its EXIF orientation tag.

        Missing, invalid or out-of-range orientation leaves the image
        untouched and does not force a decode.
        """
        self.cache_metadata()

        step = PipelineStep.ROTATE.value
        orientation = self._metadata.orientation
        if orientation is None:
            self._log.step_skipped(step, "no orientation tag")
            return self

        image = self.resolve()
        self._log.step_start(step)
        pixels = rotate_from_orientation(image.pixels, orientation)
        self._replace_pixels(pixels)
        self._log.step_end(step, detail=f"orientation={orientation}")
        return self

    def downscale(self, max_width: int, max_height: Optional[int] = None) -> "ImagePipeline":
        """
        Shrink the image to fit the bounds, preserving aspect ratio.

        Never upscales. Landscape images are fitted to max_width, portrait
        and square images to max_height.

        Args:
            max_width: Width bound
            max_height: Height bound (default: max_width)

        Raises:
            InvalidArgumentError: If a bound is not a positive integer
        """
        if max_height is None:
            max_height = max_width

        for name, value in (("max_width", max_width), ("max_height", max_height)):
            is_valid, error = validate_dimension(value, name)
            if not is_valid:
                raise InvalidArgumentError(name, error)

        image = self.resolve()
        step = PipelineStep.DOWNSCALE.value
        size = compute_downscaled_size(image.width, image.height, max_width, max_height)
        if size is None:
            self._log.step_skipped(step, f"{image.width}x{image.height} within {max_width}x{max_height}")
            return self

        self._log.step_start(step)
        pixels, scale = resize_image(image.pixels, size, self._interpolation)
        self._replace_pixels(pixels)
        self._log.step_end(step, detail=f"{size[0]}x{size[1]}, scale={scale:.3f}")
        return self

    def _replace_pixels(self, pixels: np.ndarray) -> None:
        self._state = Resolved(
            image=RawImage(pixels=np.ascontiguousarray(pixels)),
            origin_path=self._state.origin_path,
        )

    # =========================================================================
    # Output
    # =========================================================================

    def set_output(
        self,
        fmt: Union[ImageFormat, str],
        quality: Optional[int] = None
    ) -> "ImagePipeline":
        """
        Configure the output encoding, replacing any previous setting.

        Args:
            fmt: ImageFormat, short name, MIME type or extension
            quality: Format-specific quality (None = encoder default)

        Raises:
            InvalidArgumentError: If the format is unknown or quality is
                not an integer
        """
        try:
            image_format = ImageFormat.parse(fmt)
        except ValueError as e:
            raise InvalidArgumentError("format", str(e)) from e

        is_valid, error = validate_quality(quality)
        if not is_valid:
            raise InvalidArgumentError("quality", error)

        self._output = OutputConfig(format=image_format, quality=quality)
        return self

    def to_bytes(self) -> bytes:
        """
        Encode the image with the configured output settings.

        Raises:
            OutputNotConfiguredError: If set_output() was not called
            EncodeFailedError: If the encoder rejects the image or quality
        """
        output = self._require_output()
        image = self.resolve()

        step = PipelineStep.ENCODE.value
        self._log.step_start(step)
        try:
            encoded = self.codec.encode(image, output.format, output.quality)
        except Exception as e:
            self._log.step_error(step, e)
            raise

        self._log.step_end(step, detail=f"{output.format.name}, {len(encoded)} bytes")
        return encoded

    def to_data_url(self) -> str:
        """Encode the image as a base64 data URL."""
        output = self._require_output()
        return build_data_url(self.to_bytes(), output.mime)

    def to_file(self, path: Optional[Union[str, os.PathLike]] = None) -> Path:
        """
        Encode the image and write it to a file.

        Args:
            path: Destination; defaults to the input file for file sources

        Returns:
            The written path

        Raises:
            InvalidArgumentError: If no path is given and the input did not
                come from a file, or the path is unusable
        """
        self._require_output()

        if path is None:
            if self._state is None:
                raise NotInitializedError()
            path = self._origin_path()
            if path is None:
                raise InvalidArgumentError(
                    "path", "no output path given and the input did not come from a file"
                )

        is_valid, error = validate_output_path(path)
        if not is_valid:
            raise InvalidArgumentError("path", error)

        target = Path(path)
        encoded = self.to_bytes()
        target.write_bytes(encoded)
        logger.info(f"Wrote {len(encoded)} bytes to {target}")
        return target

    def _require_output(self) -> OutputConfig:
        if self._output is None:
            raise OutputNotConfiguredError()
        return self._output

    def _origin_path(self) -> Optional[Path]:
        if isinstance(self._state, Resolved):
            return self._state.origin_path
        if isinstance(self._state, Unresolved) and isinstance(self._state.source, FilePathSource):
            return self._state.source.path
        return None

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _coerce_image(image: Union[RawImage, np.ndarray]) -> RawImage:
        if isinstance(image, RawImage):
            return image
        if isinstance(image, np.ndarray):
            try:
                return RawImage.from_array(image)
            except ValueError as e:
                raise InvalidArgumentError("image", str(e)) from e
        raise InvalidArgumentError(
            "image", f"expected RawImage or numpy array, got {type(image).__name__}"
        )
