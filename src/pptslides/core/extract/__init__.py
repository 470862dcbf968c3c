"""
pptslides.core.extract — .pptx package -> normalized slide records.

Public API:

    extract_slides(source, *, options) -> Extraction        # batch driver
    assemble(package, ref, *, options) -> SlideResult        # one slide
    iter_slide_results(package, *, options) -> Iterator[SlideResult]
    open_package(source) -> Package
    locate_slide_parts(package) -> (list[SlidePartRef], warnings)
    resolve(rels_xml, *, base_dir) -> {rId: package path}   # image rels only
    extract(slide_xml, *, strategy) -> (title, paragraphs)
    capitalize_lead(paragraphs) / merge_adjacent(paragraphs)
"""
from pptslides.core.extract.errors import (
    ArchiveCorrupt,
    EntryMissing,
    PptxError,
    SlideParseError,
    UnsupportedImageType,
)
from pptslides.core.extract.models import (
    Extraction,
    Paragraph,
    Relationship,
    Run,
    Slide,
    SlidePartRef,
    SlideResult,
)
from pptslides.core.extract.pptx_archive import Package, open_package
from pptslides.core.extract.pptx_normalize import capitalize_lead, merge_adjacent, normalize_paragraphs
from pptslides.core.extract.pptx_parts import locate_slide_parts
from pptslides.core.extract.pptx_rels import resolve
from pptslides.core.extract.pptx_shapes import TitleStrategy, extract
from pptslides.core.extract.pptx_slides import (
    ExtractOptions,
    assemble,
    extract_slides,
    iter_slide_results,
)

__all__ = [
    "ArchiveCorrupt",
    "EntryMissing",
    "PptxError",
    "SlideParseError",
    "UnsupportedImageType",
    "Extraction",
    "Paragraph",
    "Relationship",
    "Run",
    "Slide",
    "SlidePartRef",
    "SlideResult",
    "Package",
    "open_package",
    "capitalize_lead",
    "merge_adjacent",
    "normalize_paragraphs",
    "locate_slide_parts",
    "resolve",
    "TitleStrategy",
    "extract",
    "ExtractOptions",
    "assemble",
    "extract_slides",
    "iter_slide_results",
]
