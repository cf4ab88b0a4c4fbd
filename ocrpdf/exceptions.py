"""
Exception classes for ocrpdf.

User-facing failures inherit from OcrPdfError, so the command line can
report any of them with a single handler. ReorderInvariantError is kept
outside that hierarchy: it marks a defect in the extraction engine, not
bad input.
"""


class OcrPdfError(Exception):
    """Base exception for all user-facing ocrpdf errors."""


class ConfigurationError(OcrPdfError):
    """Raised when the configuration file is unreadable or invalid."""


class RasterizationError(OcrPdfError):
    """
    Raised when the source document yields no usable page images.

    The message is the rasterizer's own diagnostic text when it has one.
    """


class OCREngineError(OcrPdfError):
    """Raised by the OCR engine for a single image.

    Carries only the first line of the engine diagnostic; the worker pool
    turns it into a PageOCRError with the page number attached.
    """


class PageOCRError(OcrPdfError):
    """
    Raised when the OCR engine fails on a single page.

    Example:
        >>> str(PageOCRError(3, "Error opening data file"))
        '(page 3) Error opening data file'
    """

    def __init__(self, page_number: int, message: str) -> None:
        self.page_number = page_number
        self.message = message
        super().__init__(f"(page {page_number}) {message}")


class RuleSpecError(OcrPdfError):
    """Raised when a rule specification source cannot be read or parsed."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")


class OutputWriteError(OcrPdfError):
    """Raised when the extracted text cannot be written to its destination."""


class ReorderInvariantError(RuntimeError):
    """Raised when page results cannot be put back into a contiguous order."""
