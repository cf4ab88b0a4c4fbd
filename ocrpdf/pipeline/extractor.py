"""Extraction entry points.

``extract_and_filter`` is the core operation: parallel OCR over an ordered
list of page images, page-order restoration, line filtering and a final
document filter. ``extract_pdf`` wraps it with rasterization into a
temporary directory that is always removed afterwards.
"""

import tempfile
from collections.abc import Sequence
from pathlib import Path

from ocrpdf.filters.pipeline import compose
from ocrpdf.filters.rules import RuleSet
from ocrpdf.ocr.rasterizer import Rasterizer
from ocrpdf.ocr.tesseract_engine import TesseractEngine
from ocrpdf.utils.config import AppConfig
from ocrpdf.utils.logger import get_logger

from .assembler import OutputAssembler
from .models import PageJob
from .reorder import ReorderBuffer, reorder
from .worker_pool import OCRFunc, WorkerPool

logger = get_logger(__name__)


def extract_and_filter(
    image_paths: Sequence[Path],
    language: str,
    rules: RuleSet | None = None,
    workers: int | None = None,
    ocr: OCRFunc | None = None,
    first_page: int = 1,
) -> str:
    """Recognize page images in parallel and return the filtered text.

    Args:
        image_paths: Page images in page order.
        language: OCR language code.
        rules: Compiled filter rules. ``None`` means no filtering.
        workers: Worker thread count. Defaults to the CPU count.
        ocr: OCR callable ``(image_path, language) -> text``. Defaults to
            a ``TesseractEngine``.
        first_page: Page number of the first image, for error messages.

    Returns:
        Final document text after the document filter.

    Raises:
        PageOCRError: For the first page, in page order, that failed.
        ReorderInvariantError: If results could not be put back in order.
    """
    rules = rules or RuleSet()
    if ocr is None:
        ocr = TesseractEngine(default_lang=language).recognize

    jobs = [PageJob(index, Path(path)) for index, path in enumerate(image_paths)]
    assembler = OutputAssembler(compose(rules.line_rules), compose(rules.document_rules))
    pool = WorkerPool(ocr, language=language, workers=workers, first_page=first_page)
    buffer = ReorderBuffer()

    results = pool.run(jobs)
    try:
        for result in reorder(results, buffer):
            assembler.add_page(result)
    except Exception:
        pool.stop()
        logger.info(
            "Extraction aborted after %d of %d pages", assembler.pages, len(jobs)
        )
        raise
    finally:
        results.close()

    text = assembler.finish()
    logger.info("Extracted %d pages, %d characters", assembler.pages, len(text))
    return text


def extract_pdf(
    pdf_path: Path, config: AppConfig, rules: RuleSet | None = None
) -> str:
    """Rasterize a PDF into a temporary directory and extract its text.

    The temporary directory is removed on success, on error and on
    interrupt.

    Raises:
        RasterizationError: If the PDF yields no page images.
        PageOCRError: For the first page that failed recognition.
    """
    engine = TesseractEngine(
        tesseract_cmd=config.ocr.tesseract_cmd,
        default_lang=config.ocr.language,
        psm=config.ocr.psm,
    )
    rasterizer = Rasterizer(config.raster)

    with tempfile.TemporaryDirectory(prefix="ocr-") as tmp:
        logger.debug("Rendering pages into %s", tmp)
        images = rasterizer.rasterize(pdf_path, Path(tmp))
        return extract_and_filter(
            images,
            config.ocr.language,
            rules,
            workers=config.ocr.workers,
            ocr=engine.recognize,
            first_page=config.raster.first_page,
        )
