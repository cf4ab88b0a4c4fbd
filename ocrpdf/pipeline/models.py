"""Units of work and their results for the parallel OCR stage."""

from dataclasses import dataclass
from pathlib import Path

from ocrpdf.exceptions import PageOCRError


@dataclass(frozen=True)
class PageJob:
    """One page image awaiting recognition.

    ``index`` is the zero-based position of the image among the
    enumerated page images.
    """

    index: int
    image_path: Path


@dataclass(frozen=True)
class PageResult:
    """Outcome of one PageJob, tagged with the job's index."""

    index: int
    text: str = ""
    error: PageOCRError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
