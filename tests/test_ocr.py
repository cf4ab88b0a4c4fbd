"""Tests for the Tesseract engine wrapper."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import pytesseract

from ocrpdf.exceptions import OCREngineError
from ocrpdf.ocr.tesseract_engine import TesseractEngine, first_line


class TestFirstLine:
    """Tests for diagnostic truncation."""

    def test_multi_line(self) -> None:
        assert first_line("  Error opening data file \nPlease make sure\n") == (
            "Error opening data file"
        )

    def test_single_line(self) -> None:
        assert first_line("oops") == "oops"


class TestTesseractEngine:
    """Tests for the TesseractEngine class (mocked)."""

    @patch("ocrpdf.ocr.tesseract_engine.pytesseract.image_to_string")
    def test_recognize(self, mock_to_string: MagicMock, page_image: Path) -> None:
        mock_to_string.return_value = "Hello World\nTest\n\f"

        engine = TesseractEngine(default_lang="eng")
        text = engine.recognize(page_image)

        assert text == "Hello World\nTest\n\f"
        _, kwargs = mock_to_string.call_args
        assert kwargs == {"lang": "eng", "config": ""}

    @patch("ocrpdf.ocr.tesseract_engine.pytesseract.image_to_string")
    def test_recognize_custom_lang_and_psm(
        self, mock_to_string: MagicMock, page_image: Path
    ) -> None:
        mock_to_string.return_value = "Bonjour"

        engine = TesseractEngine(default_lang="eng", psm=6)
        assert engine.recognize(page_image, lang="fra") == "Bonjour"

        _, kwargs = mock_to_string.call_args
        assert kwargs == {"lang": "fra", "config": "--psm 6"}

    @patch("ocrpdf.ocr.tesseract_engine.pytesseract.image_to_string")
    def test_tesseract_error_keeps_first_line(
        self, mock_to_string: MagicMock, page_image: Path
    ) -> None:
        mock_to_string.side_effect = pytesseract.TesseractError(
            1,
            "Error opening data file /usr/share/tessdata/xxx.traineddata\n"
            "Please make sure the TESSDATA_PREFIX environment variable is set",
        )

        with pytest.raises(OCREngineError) as exc_info:
            TesseractEngine().recognize(page_image, lang="xxx")
        assert str(exc_info.value) == (
            "Error opening data file /usr/share/tessdata/xxx.traineddata"
        )

    @patch("ocrpdf.ocr.tesseract_engine.pytesseract.image_to_string")
    def test_tesseract_not_installed(
        self, mock_to_string: MagicMock, page_image: Path
    ) -> None:
        mock_to_string.side_effect = pytesseract.TesseractNotFoundError()
        with pytest.raises(OCREngineError, match="not installed"):
            TesseractEngine().recognize(page_image)

    def test_missing_image(self, tmp_path: Path) -> None:
        with pytest.raises(OCREngineError):
            TesseractEngine().recognize(tmp_path / "missing.tif")

    def test_unreadable_image(self, tmp_path: Path) -> None:
        bogus = tmp_path / "bogus.tif"
        bogus.write_bytes(b"not an image")
        with pytest.raises(OCREngineError):
            TesseractEngine().recognize(bogus)

    def test_custom_tesseract_cmd(self) -> None:
        with patch("ocrpdf.ocr.tesseract_engine.pytesseract") as mock_pt:
            TesseractEngine(tesseract_cmd="/usr/bin/tesseract")
            assert mock_pt.pytesseract.tesseract_cmd == "/usr/bin/tesseract"
