"""
Pipeline coordinators that turn source files into game-ready sprites.

The picture pipeline trims and resizes a texture (or a set of numbered
variants assembled into a sprite sheet), optionally processes its shadow, and
suggests placement offsets. The icon pipeline builds a multi-resolution icon
atlas for each input file independently.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from contextlib import contextmanager

from .buffer import PixelBuffer
from .config import ToolConfig
from .errors import SpritePipelineError, DimensionMismatchError, MissingResourceError
from .processing.alignment import AlignmentSuggestion, suggest_alignment
from .processing.icon import IconAtlas, IconAtlasComposer
from .processing.resizer import AspectResizer, ResizeSpec
from .processing.shadow import ShadowSpec
from .processing.spritesheet import SpriteSheet, SpriteSheetComposer
from .processing.trimmer import AlphaTrimmer
from .utils.image import ImageUtils


logger = logging.getLogger(__name__)

Anchor = Tuple[float, float]


@dataclass
class ProcessingReport:
    """Human-readable progress notes collected while processing."""
    messages: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def note(self, message: str) -> None:
        logger.debug(message)
        self.messages.append(message)


@dataclass(frozen=True)
class PictureRequest:
    """Inputs for one run of the picture pipeline."""
    textures: Tuple[Path, ...]
    shadow: Optional[Path] = None
    infer_shadow: bool = False
    variants: int = 1
    scale: float = 1.0
    alignment: Anchor = (0.0, 0.0)
    write_frame_map: bool = False


@dataclass
class ResolvedInputs:
    """Concrete files a picture request refers to."""
    textures: List[Path]
    shadow: Optional[Path] = None


@dataclass
class PictureResult:
    """Outputs of the picture pipeline."""
    image: PixelBuffer
    suggestion: AlignmentSuggestion
    output_path: Path
    shadow: Optional[PixelBuffer] = None
    shadow_output_path: Optional[Path] = None
    sheet: Optional[SpriteSheet] = None
    frame_map_path: Optional[Path] = None
    report: ProcessingReport = field(default_factory=ProcessingReport)


@dataclass
class IconFileResult:
    """Outcome of building the icon atlas for one file."""
    texture: Path
    output_path: Optional[Path] = None
    atlas: Optional[IconAtlas] = None
    error: Optional[Exception] = None
    report: ProcessingReport = field(default_factory=ProcessingReport)

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class IconBatchResult:
    """Outcome of an icon batch."""
    results: List[IconFileResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[IconFileResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[IconFileResult]:
        return [r for r in self.results if not r.success]


@contextmanager
def source_context(path: Path) -> Iterator[None]:
    """Attach ``path`` to pipeline errors raised while processing it."""
    try:
        yield
    except SpritePipelineError as e:
        if e.path is None:
            e.path = path
        raise


def output_path_for(path: Path, config: ToolConfig) -> Path:
    """``dir/name.ext`` -> ``dir/name<suffix>.png`` (or the configured format)."""
    extension = '.' + config.output_format.lower()
    return path.with_name(f"{path.stem}{config.output_suffix}{extension}")


def infer_shadow_path(texture: Path) -> Path:
    """Shadow companion of a texture: ``tree-variant.png`` -> ``tree-shadow.png``."""
    base_name = texture.stem.replace("-variant", "").replace("variant", "")
    return texture.with_name(f"{base_name}-shadow{texture.suffix}")


def expand_variants(texture: Path, variants: int) -> List[Path]:
    """Numbered variant files: ``tree.png``, 3 -> ``tree-variant1.png`` .. ``tree-variant3.png``."""
    base_name = texture.stem
    if "-variant" not in base_name:
        base_name += "-variant"
    return [texture.with_name(f"{base_name}{i}{texture.suffix}") for i in range(1, variants + 1)]


def resolve_picture_inputs(request: PictureRequest) -> ResolvedInputs:
    """
    Work out which files a picture request needs and check they exist.

    Raises:
        ValueError: If the request is inconsistent
        MissingResourceError: If a texture, variant or shadow file is missing
    """
    if not request.textures:
        raise ValueError("At least one texture is required")
    if request.variants < 1:
        raise ValueError(f"variants must be at least 1, got {request.variants}")
    if request.variants > 1 and len(request.textures) != 1:
        raise ValueError("Exactly one texture must be given when variants is greater than 1")

    textures = [Path(t) for t in request.textures]

    shadow = Path(request.shadow) if request.shadow is not None else None
    if shadow is None and request.infer_shadow:
        shadow = infer_shadow_path(textures[0])
        if not shadow.exists():
            raise MissingResourceError("Shadow file not found", shadow)
    elif shadow is not None and not shadow.exists():
        raise MissingResourceError("Shadow file not found", shadow)

    if request.variants > 1:
        textures = expand_variants(textures[0], request.variants)
        for variant in textures:
            if not variant.exists():
                raise MissingResourceError("Variant file not found", variant)
    else:
        for texture in textures:
            if not texture.exists():
                raise MissingResourceError("Texture file not found", texture)

    return ResolvedInputs(textures, shadow)


class _OutputWriter:
    """Encodes buffers using the configured format."""

    def __init__(self, config: ToolConfig):
        self.config = config

    def save(self, buffer: PixelBuffer, path: Path) -> None:
        kwargs = {}
        if self.config.output_format.upper() == 'PNG':
            kwargs['compress_level'] = self.config.compression_level
        ImageUtils.save_buffer(buffer, path, self.config.output_format.upper(), **kwargs)
        logger.info(f"Saved {buffer.width}x{buffer.height} image to {path}")


class PicturePipeline:
    """Processes pictures and sprite sheets for in-game placement."""

    def __init__(self, config: Optional[ToolConfig] = None):
        self.config = config or ToolConfig()
        self.resizer = AspectResizer()
        self.composer = SpriteSheetComposer()
        self.writer = _OutputWriter(self.config)

    def run(self, request: PictureRequest) -> PictureResult:
        """
        Resolve inputs and process them.

        A single texture becomes a single processed picture; several
        textures (or variants) become one sprite sheet.
        """
        inputs = resolve_picture_inputs(request)
        if len(inputs.textures) == 1:
            return self.process_single(inputs.textures[0], inputs.shadow, request.scale, request.alignment)
        return self.process_multiple(inputs.textures, inputs.shadow, request.scale, request.alignment,
                                     write_frame_map=request.write_frame_map)

    def _load(self, path: Path, label: str, report: ProcessingReport) -> PixelBuffer:
        with source_context(path):
            buffer = ImageUtils.load_buffer(path)
        report.note(f"Loaded {label}: {path} ({buffer.width}x{buffer.height})")
        return buffer

    def _fit(self, image: PixelBuffer, target_size: float, scale: float) -> PixelBuffer:
        return self.resizer.resize(image, ResizeSpec(target_size, scale))

    def _process_shadow(self, shadow_path: Path, image_scale: float, scale: float,
                        report: ProcessingReport) -> PixelBuffer:
        """Trim the shadow and scale it by the same factor as its image."""
        shadow = self._load(shadow_path, "shadow", report)
        with source_context(shadow_path):
            shadow = AlphaTrimmer.trim(shadow)
            report.note(f"Trimmed whitespace, cropped shadow to: {shadow.width}x{shadow.height}")
            target_size = max(shadow.width, shadow.height) * image_scale
            shadow = self._fit(shadow, target_size, scale)
        report.note(f"Resized shadow to: {shadow.width}x{shadow.height}")
        return shadow

    def _suggest(self, image: PixelBuffer, shadow: Optional[PixelBuffer], alignment: Anchor,
                 report: ProcessingReport) -> AlignmentSuggestion:
        suggestion = suggest_alignment(image, shadow, alignment, self.config.tile_size)
        for line in suggestion.describe():
            report.note(line)
        return suggestion

    def process_single(self, texture: Path, shadow_path: Optional[Path] = None, scale: float = 1.0,
                       alignment: Anchor = (0.0, 0.0)) -> PictureResult:
        """Trim, resize and save one texture (and its shadow)."""
        report = ProcessingReport()
        image = self._load(texture, "image", report)

        with source_context(texture):
            image = AlphaTrimmer.trim(image)
            image_scale = self.config.tile_size / max(image.width, image.height)
            report.note(f"Trimmed whitespace, cropped image to: {image.width}x{image.height}")

            image = self._fit(image, self.config.tile_size, scale)
            report.note(f"Resized image to: {image.width}x{image.height}")

        shadow = None
        if shadow_path is not None:
            shadow = self._process_shadow(shadow_path, image_scale, scale, report)

        suggestion = self._suggest(image, shadow, alignment, report)

        result = PictureResult(image, suggestion, output_path_for(texture, self.config), report=report)
        self.writer.save(image, result.output_path)
        if shadow is not None:
            result.shadow = shadow
            result.shadow_output_path = output_path_for(shadow_path, self.config)
            self.writer.save(shadow, result.shadow_output_path)
        return result

    def process_multiple(self, textures: Sequence[Path], shadow_path: Optional[Path] = None,
                         scale: float = 1.0, alignment: Anchor = (0.0, 0.0),
                         write_frame_map: bool = False) -> PictureResult:
        """Trim and resize every frame, assemble them into a sprite sheet and save it."""
        report = ProcessingReport()
        frames = [self._load(path, "image", report) for path in textures]

        # Raw frames must agree before trimming changes their sizes.
        for index, (path, frame) in enumerate(zip(textures, frames), start=1):
            if frame.size != frames[0].size:
                raise DimensionMismatchError(
                    f"Image {index} is {frame.width}x{frame.height} but image 1 is "
                    f"{frames[0].width}x{frames[0].height}; all textures must have the same dimensions",
                    frames[0].size, frame.size, path, index
                )

        resized = []
        image_scale = 1.0
        for index, (path, frame) in enumerate(zip(textures, frames), start=1):
            with source_context(path):
                frame = AlphaTrimmer.trim(frame)
                if index == 1:
                    image_scale = self.config.tile_size / max(frame.width, frame.height)
                report.note(f"Trimmed whitespace, cropped image {index} to: {frame.width}x{frame.height}")
                frame = self._fit(frame, self.config.tile_size, scale)
                report.note(f"Resized image {index} to: {frame.width}x{frame.height}")
            resized.append(frame)

        try:
            sheet = self.composer.compose_sheet(resized)
        except DimensionMismatchError as e:
            if e.path is None and e.index is not None:
                e.path = textures[e.index - 1]
            raise

        shadow = None
        if shadow_path is not None:
            shadow = self._process_shadow(shadow_path, image_scale, scale, report)

        for line in sheet.describe():
            report.note(line)
        report.note(f"Shadow repeat: {sheet.frame_count}")
        suggestion = self._suggest(resized[0], shadow, alignment, report)

        result = PictureResult(sheet.sheet, suggestion, output_path_for(textures[0], self.config),
                               sheet=sheet, report=report)
        self.writer.save(sheet.sheet, result.output_path)
        if write_frame_map:
            result.frame_map_path = result.output_path.with_suffix('.json')
            sheet.save_frame_map(result.frame_map_path)
        if shadow is not None:
            result.shadow = shadow
            result.shadow_output_path = output_path_for(shadow_path, self.config)
            self.writer.save(shadow, result.shadow_output_path)
        return result


class IconPipeline:
    """Builds icon atlases, one independent unit of work per source file."""

    def __init__(self, config: Optional[ToolConfig] = None):
        self.config = config or ToolConfig()
        shadow = ShadowSpec(self.config.shadow_offset, self.config.shadow_blur_radius, self.config.shadow_color)
        self.composer = IconAtlasComposer(shadow, self.config.square_tolerance)
        self.writer = _OutputWriter(self.config)

    def process(self, texture: Path) -> IconFileResult:
        """
        Build and save the atlas for one file.

        Raises:
            MissingResourceError: If the file does not exist
            SpritePipelineError: If the image cannot be processed
        """
        texture = Path(texture)
        if not texture.exists():
            raise MissingResourceError("Texture file not found", texture)

        result = IconFileResult(texture)
        source = ImageUtils.load_buffer(texture)
        result.report.note(f"Loaded image: {texture} ({source.width}x{source.height})")

        with source_context(texture):
            atlas = self.composer.compose(source)
        for line in atlas.describe():
            result.report.note(line)
        result.report.warnings.extend(atlas.warnings)

        result.atlas = atlas
        result.output_path = output_path_for(texture, self.config)
        self.writer.save(atlas.atlas, result.output_path)
        return result

    def run(self, textures: Sequence[Path]) -> IconBatchResult:
        """
        Process every file; a failure is recorded and does not stop the batch.
        """
        batch = IconBatchResult()
        for texture in textures:
            try:
                batch.results.append(self.process(Path(texture)))
            except (SpritePipelineError, ValueError, OSError) as e:
                logger.error(f"Failed to build icon for {texture}: {e}")
                batch.results.append(IconFileResult(Path(texture), error=e))
        return batch
