"""Shared test fixtures for the ocrpdf test suite."""

from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from ocrpdf.exceptions import OCREngineError


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"


@pytest.fixture
def page_image(tmp_path: Path) -> Path:
    """Write a small blank TIFF page image."""
    path = tmp_path / "page-1.tif"
    Image.new("L", (200, 100), color=255).save(path, format="TIFF")
    return path


@pytest.fixture
def write_rules(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing a YAML rule file under tmp_path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_ocr() -> Callable[..., Callable[[Path, str], str]]:
    """Return a factory for OCR callables that look text up by file name."""

    def _factory(
        pages: dict[str, str], failing: dict[str, str] | None = None
    ) -> Callable[[Path, str], str]:
        failing = failing or {}

        def _ocr(image_path: Path, language: str) -> str:
            name = Path(image_path).name
            if name in failing:
                raise OCREngineError(failing[name])
            return pages[name]

        return _ocr

    return _factory
