"""Tesseract OCR engine wrapper.

Recognizes the text of one page image per call. Calls are blocking and
independent of each other, so a single engine instance can be shared by
every worker thread.
"""

from pathlib import Path

import pytesseract
from PIL import Image, UnidentifiedImageError

from ocrpdf.exceptions import OCREngineError
from ocrpdf.utils.logger import get_logger

logger = get_logger(__name__)


def first_line(message: str) -> str:
    """Return the first line of a diagnostic message, stripped."""
    return message.split("\n", 1)[0].strip()


class TesseractEngine:
    """Wrapper around Tesseract OCR for page text extraction.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Default OCR language code.
        psm: Tesseract page segmentation mode, or ``None`` for the
            engine's own default.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "eng",
        psm: int | None = None,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang
        self.psm = psm

    def recognize(self, image_path: Path, lang: str | None = None) -> str:
        """Extract the text of a single page image.

        Args:
            image_path: Path to the page image.
            lang: OCR language code. Defaults to the engine default.

        Returns:
            Recognized text, as produced by Tesseract.

        Raises:
            OCREngineError: If the image cannot be read or Tesseract fails.
                The message holds the first line of the diagnostic only.
        """
        lang = lang or self.default_lang
        config = f"--psm {self.psm}" if self.psm is not None else ""

        try:
            with Image.open(image_path) as image:
                text = pytesseract.image_to_string(image, lang=lang, config=config)
        except pytesseract.TesseractError as exc:
            raise OCREngineError(first_line(exc.message)) from exc
        except pytesseract.TesseractNotFoundError as exc:
            raise OCREngineError(first_line(str(exc))) from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise OCREngineError(first_line(str(exc))) from exc

        logger.debug("OCR extracted %d characters from %s", len(text), image_path)
        return text
