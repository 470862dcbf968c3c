"""
pptx_slides.py — Assemble Slide records from a .pptx package.

    from pptslides.core.extract import extract_slides

    result = extract_slides(Path("deck.pptx"))
    for slide in result.slides:
        print(slide.ordinal, slide.title)
    result.warnings        # skipped slides, dropped images, ...

Per-slide failures never abort the batch: assemble() returns a SlideResult
that either carries a Slide or the reason it was skipped. Only ArchiveCorrupt
(from opening the package) reaches the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterator, Optional, Union

from pptslides.core.extract.errors import EntryMissing, PptxError, UnsupportedImageType
from pptslides.core.extract.models import Extraction, Slide, SlidePartRef, SlideResult
from pptslides.core.extract.pptx_archive import Package, PackageSource, open_package
from pptslides.core.extract.pptx_normalize import normalize_paragraphs
from pptslides.core.extract.pptx_parts import locate_slide_parts
from pptslides.core.extract.pptx_rels import resolve
from pptslides.core.extract.pptx_shapes import TitleStrategy, extract

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTENSIONS: frozenset[str] = frozenset({"png", "jpeg", "jpg"})


@dataclass(frozen=True)
class ExtractOptions:
    """Batch-wide extraction settings."""

    title_strategy: TitleStrategy = TitleStrategy.PLACEHOLDER
    image_extensions: frozenset[str] = DEFAULT_IMAGE_EXTENSIONS
    capitalize: bool = True
    merge: bool = True
    # drop image references whose media part is absent from the package
    check_media: bool = True


def image_extension(path: str) -> str:
    return PurePosixPath(path).suffix.lower().lstrip(".")


def _slide_images(
    package: Package,
    ref: SlidePartRef,
    options: ExtractOptions,
    warnings: list[str],
) -> list[str]:
    if ref.rels_path is None:
        return []

    try:
        rels_xml = package.read_bytes(ref.rels_path)
        targets = resolve(rels_xml, base_dir=ref.slide_path.rpartition("/")[0], part=ref.rels_path)
    except PptxError as exc:
        # text is still usable without the relationship part
        msg = f"slide {ref.ordinal}: images dropped: {exc}"
        logger.warning(msg)
        warnings.append(msg)
        return []

    images: list[str] = []
    for rid, path in targets.items():
        if path in images:
            continue
        ext = image_extension(path)
        if ext not in options.image_extensions:
            msg = f"slide {ref.ordinal}: {rid}: {UnsupportedImageType(path, ext)}"
            logger.warning(msg)
            warnings.append(msg)
            continue
        if options.check_media and not package.has(path):
            msg = f"slide {ref.ordinal}: {rid}: {EntryMissing(path)}"
            logger.warning(msg)
            warnings.append(msg)
            continue
        images.append(path)
    return images


def assemble(
    package: Package,
    ref: SlidePartRef,
    *,
    options: Optional[ExtractOptions] = None,
) -> SlideResult:
    """Build one Slide from its slide part (and rels part, when present)."""
    opts = options or ExtractOptions()
    warnings: list[str] = []

    try:
        slide_xml = package.read_bytes(ref.slide_path)
        title, paragraphs = extract(slide_xml, strategy=opts.title_strategy, part=ref.slide_path)
        paragraphs = normalize_paragraphs(paragraphs, capitalize=opts.capitalize, merge=opts.merge)
        images = _slide_images(package, ref, opts, warnings)
    except PptxError as exc:
        logger.warning("slide %d skipped: %s", ref.ordinal, exc)
        return SlideResult(ref.ordinal, ref.slide_path, reason=str(exc), warnings=tuple(warnings))
    except Exception as exc:
        logger.exception("slide %d skipped: unexpected error in %s", ref.ordinal, ref.slide_path)
        return SlideResult(
            ref.ordinal,
            ref.slide_path,
            reason=f"{type(exc).__name__}: {exc}",
            warnings=tuple(warnings),
        )

    slide = Slide(
        ordinal=ref.ordinal,
        title=title,
        paragraphs=tuple(paragraphs),
        images=tuple(images),
        source=ref.slide_path,
    )
    logger.debug(
        "slide %d: title=%r paragraphs=%d images=%d",
        slide.ordinal,
        slide.title,
        len(slide.paragraphs),
        len(slide.images),
    )
    return SlideResult(ref.ordinal, ref.slide_path, slide=slide, warnings=tuple(warnings))


def iter_slide_results(
    package: Package,
    *,
    options: Optional[ExtractOptions] = None,
) -> Iterator[SlideResult]:
    """Yield one SlideResult per located slide part, in ordinal order.

    Stopping the iteration early is always safe; nothing is written.
    """
    refs, _ = locate_slide_parts(package)
    for ref in refs:
        yield assemble(package, ref, options=options)


def extract_slides(
    source: Union[Package, PackageSource],
    *,
    options: Optional[ExtractOptions] = None,
) -> Extraction:
    """Extract every slide of a package. Raises ArchiveCorrupt only."""
    opts = options or ExtractOptions()
    owns = not isinstance(source, Package)
    package = open_package(source) if owns else source

    try:
        refs, warnings = locate_slide_parts(package)
        slides: list[Slide] = []
        for ref in refs:
            result = assemble(package, ref, options=opts)
            warnings.extend(result.warnings)
            if result.slide is None:
                warnings.append(f"slide {ref.ordinal} skipped: {result.reason}")
                continue
            slides.append(result.slide)
    finally:
        if owns:
            package.close()

    logger.info(
        "extracted %d of %d slide(s) from %s",
        len(slides),
        len(refs),
        package.origin,
    )
    return Extraction(slides=tuple(slides), warnings=tuple(warnings))
