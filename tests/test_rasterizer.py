"""Tests for PDF rasterization (pdf2image mocked)."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from pdf2image.exceptions import PDFInfoNotInstalledError, PDFPageCountError

from ocrpdf.exceptions import RasterizationError
from ocrpdf.ocr.rasterizer import Rasterizer, list_page_images
from ocrpdf.utils.config import RasterConfig


def _render(count: int):
    """Side effect writing ``count`` page images into the output folder."""

    def _convert(pdf_path: str, **kwargs) -> list[str]:
        folder = Path(kwargs["output_folder"])
        paths = []
        for page in range(count, 0, -1):
            path = folder / f"abc-{page:02d}.tif"
            path.touch()
            paths.append(str(path))
        return paths

    return _convert


@pytest.fixture
def pdf_file(tmp_path: Path) -> Path:
    path = tmp_path / "scan.pdf"
    path.write_bytes(b"%PDF-1.4 fake content")
    return path


class TestListPageImages:
    """Tests for page image enumeration."""

    def test_sorted_and_filtered(self, tmp_path: Path) -> None:
        for name in ("x-10.tif", "x-02.tif", "x-01.TIF", "notes.txt"):
            (tmp_path / name).touch()
        (tmp_path / "sub.tif").mkdir()

        names = [p.name for p in list_page_images(tmp_path)]
        assert names == ["x-01.TIF", "x-02.tif", "x-10.tif"]


class TestRasterizer:
    """Tests for the Rasterizer class."""

    def test_default_config(self) -> None:
        assert Rasterizer().config == RasterConfig()

    @patch("ocrpdf.ocr.rasterizer.convert_from_path")
    def test_rasterize(
        self, mock_convert: MagicMock, pdf_file: Path, tmp_path: Path
    ) -> None:
        mock_convert.side_effect = _render(3)
        out = tmp_path / "out"
        out.mkdir()

        images = Rasterizer(RasterConfig(first_page=2, last_page=4, dpi=150)).rasterize(
            pdf_file, out
        )

        assert [p.name for p in images] == ["abc-01.tif", "abc-02.tif", "abc-03.tif"]
        mock_convert.assert_called_once_with(
            str(pdf_file),
            dpi=150,
            output_folder=str(out),
            first_page=2,
            last_page=4,
            fmt="tiff",
            paths_only=True,
            poppler_path=None,
        )

    @patch("ocrpdf.ocr.rasterizer.convert_from_path")
    def test_last_page_before_first_is_ignored(
        self, mock_convert: MagicMock, pdf_file: Path, tmp_path: Path
    ) -> None:
        mock_convert.side_effect = _render(1)
        Rasterizer(RasterConfig(first_page=5, last_page=2)).rasterize(pdf_file, tmp_path)
        assert mock_convert.call_args.kwargs["last_page"] is None

    def test_missing_pdf(self, tmp_path: Path) -> None:
        with pytest.raises(RasterizationError, match="not found"):
            Rasterizer().rasterize(tmp_path / "missing.pdf", tmp_path)

    @patch("ocrpdf.ocr.rasterizer.convert_from_path")
    def test_tool_diagnostic_surfaced(
        self, mock_convert: MagicMock, pdf_file: Path, tmp_path: Path
    ) -> None:
        mock_convert.side_effect = PDFPageCountError(
            "Unable to get page count.\nSyntax Error: Couldn't find trailer dictionary\n"
        )
        with pytest.raises(RasterizationError, match="Unable to get page count"):
            Rasterizer().rasterize(pdf_file, tmp_path)

    @patch("ocrpdf.ocr.rasterizer.convert_from_path")
    def test_poppler_missing(
        self, mock_convert: MagicMock, pdf_file: Path, tmp_path: Path
    ) -> None:
        mock_convert.side_effect = PDFInfoNotInstalledError(
            "Unable to get page count. Is poppler installed and in PATH?"
        )
        with pytest.raises(RasterizationError, match="poppler"):
            Rasterizer().rasterize(pdf_file, tmp_path)

    @patch("ocrpdf.ocr.rasterizer.convert_from_path")
    def test_no_images(
        self, mock_convert: MagicMock, pdf_file: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "out"
        out.mkdir()
        mock_convert.return_value = []
        with pytest.raises(RasterizationError, match="No images found"):
            Rasterizer().rasterize(pdf_file, out)
