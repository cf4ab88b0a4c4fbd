"""Builds the filtered document text from page results in page order."""

from collections.abc import Callable

from ocrpdf.utils.logger import get_logger

from .models import PageResult

logger = get_logger(__name__)

Transform = Callable[[str], str]


def _identity(text: str) -> str:
    return text


class OutputAssembler:
    """Accumulates filtered lines and applies the document filter once.

    Args:
        line_filter: Transform applied to every line, after trailing
            whitespace is trimmed. Lines it empties are dropped.
        document_filter: Transform applied to the full text by ``finish``.
    """

    def __init__(
        self,
        line_filter: Transform = _identity,
        document_filter: Transform = _identity,
    ) -> None:
        self.line_filter = line_filter
        self.document_filter = document_filter
        self.pages = 0
        self._parts: list[str] = []
        self._finished = False

    def add_page(self, result: PageResult) -> None:
        """Split a page's text into lines, filter them and append the kept ones."""
        if self._finished:
            raise RuntimeError("OutputAssembler.finish() was already called")

        kept = 0
        for line in result.text.split("\n"):
            line = self.line_filter(line.rstrip())
            if line:
                self._parts.append(line)
                self._parts.append("\n")
                kept += 1

        self.pages += 1
        logger.debug("Page index %d contributed %d lines", result.index, kept)

    def finish(self) -> str:
        """Apply the document filter to the accumulated text and return it."""
        if self._finished:
            raise RuntimeError("OutputAssembler.finish() was already called")
        self._finished = True
        return self.document_filter("".join(self._parts))
