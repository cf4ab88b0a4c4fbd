"""PDF page rasterization for OCR processing.

Renders a page range of a PDF into one image file per page inside a
working directory, using pdf2image (poppler). The OCR stage then picks the
images up from that directory in page order.
"""

from pathlib import Path

from pdf2image import convert_from_path
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)

from ocrpdf.exceptions import RasterizationError
from ocrpdf.utils.config import RasterConfig
from ocrpdf.utils.logger import get_logger

logger = get_logger(__name__)

_IMAGE_SUFFIXES = (".tif", ".tiff", ".png", ".jpg", ".jpeg", ".ppm", ".pgm", ".pbm")

_PDF2IMAGE_ERRORS = (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)


def list_page_images(directory: Path) -> list[Path]:
    """List the page images in a directory, sorted by file name.

    Rendered file names carry a zero-padded page number, so name order
    is page order.
    """
    return sorted(
        p
        for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in _IMAGE_SUFFIXES
    )


class Rasterizer:
    """Renders PDF pages to image files.

    Args:
        config: Rasterization settings (page bounds, resolution, format).
    """

    def __init__(self, config: RasterConfig | None = None) -> None:
        self.config = config or RasterConfig()

    def rasterize(self, pdf_path: Path, output_dir: Path) -> list[Path]:
        """Render the configured page range of a PDF into ``output_dir``.

        A ``last_page`` lower than ``first_page`` is ignored, so the range
        runs to the end of the document.

        Args:
            pdf_path: Path to the source PDF.
            output_dir: Existing directory receiving one image per page.

        Returns:
            Page image paths in page order.

        Raises:
            RasterizationError: If the PDF cannot be rendered or produces
                no images.
        """
        if not pdf_path.exists():
            raise RasterizationError(f"PDF file not found: {pdf_path}")

        cfg = self.config
        last_page = cfg.last_page
        if last_page is not None and last_page < cfg.first_page:
            last_page = None

        try:
            convert_from_path(
                str(pdf_path),
                dpi=cfg.dpi,
                output_folder=str(output_dir),
                first_page=cfg.first_page,
                last_page=last_page,
                fmt=cfg.image_format,
                paths_only=True,
                poppler_path=cfg.poppler_path,
            )
        except _PDF2IMAGE_ERRORS as exc:
            raise RasterizationError(str(exc).strip() or type(exc).__name__) from exc

        images = list_page_images(output_dir)
        if not images:
            raise RasterizationError(f"No images found in file {pdf_path}")

        logger.info(
            "Rendered %d page images from %s at %d DPI", len(images), pdf_path, cfg.dpi
        )
        return images
