"""Fixed-size pool of OCR worker threads.

All jobs are queued up front. Each worker takes one job at a time, runs
the OCR callable on it and puts exactly one PageResult on the result
queue. A closer thread waits for every worker to exit and then puts the
end-of-stream marker, so the consumer can tell "more results pending"
from "extraction complete".
"""

import os
import queue
import threading
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

from ocrpdf.exceptions import OCREngineError, PageOCRError
from ocrpdf.ocr.tesseract_engine import first_line
from ocrpdf.utils.logger import get_logger

from .models import PageJob, PageResult

logger = get_logger(__name__)

OCRFunc = Callable[[Path, str], str]

_END = object()


def default_workers() -> int:
    """Number of worker threads to use when none is configured."""
    return os.cpu_count() or 1


class WorkerPool:
    """Runs OCR for page jobs on a fixed number of threads.

    Args:
        ocr: Callable taking an image path and a language code and
            returning the recognized text.
        language: Language code passed to every OCR call.
        workers: Number of worker threads. Defaults to the CPU count.
        first_page: Page number of the job with index 0, used in error
            messages.
    """

    def __init__(
        self,
        ocr: OCRFunc,
        language: str = "eng",
        workers: int | None = None,
        first_page: int = 1,
    ) -> None:
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        self.ocr = ocr
        self.language = language
        self.workers = workers or default_workers()
        self.first_page = first_page
        self._jobs: queue.Queue[PageJob] = queue.Queue()
        self._results: queue.Queue[object] = queue.Queue()
        self._stop = threading.Event()
        self._started = False

    def run(self, jobs: Sequence[PageJob]) -> Iterator[PageResult]:
        """Start the workers and yield results in completion order.

        The iterator ends once every worker has exhausted the job queue.
        """
        if self._started:
            raise RuntimeError("WorkerPool.run() may only be called once")
        self._started = True

        for job in jobs:
            self._jobs.put(job)

        count = min(self.workers, len(jobs)) or 1
        logger.info("Starting %d OCR workers for %d pages", count, len(jobs))

        threads = [
            threading.Thread(target=self._work, name=f"ocr-worker-{i}", daemon=True)
            for i in range(count)
        ]
        for t in threads:
            t.start()

        closer = threading.Thread(
            target=self._close_when_done, args=(threads,), name="ocr-closer", daemon=True
        )
        closer.start()

        while True:
            item = self._results.get()
            if item is _END:
                return
            yield item

    def stop(self) -> None:
        """Stop handing out queued jobs.

        Jobs already being recognized run to completion; their results
        are left unconsumed.
        """
        if not self._stop.is_set():
            logger.debug("Abandoning %d queued OCR jobs", self._jobs.qsize())
        self._stop.set()

    def _work(self) -> None:
        while not self._stop.is_set():
            try:
                job = self._jobs.get_nowait()
            except queue.Empty:
                return
            self._results.put(self._process(job))

    def _process(self, job: PageJob) -> PageResult:
        page_number = job.index + self.first_page
        try:
            text = self.ocr(job.image_path, self.language)
        except OCREngineError as exc:
            return PageResult(job.index, error=PageOCRError(page_number, str(exc)))
        except Exception as exc:
            logger.debug("OCR of %s raised", job.image_path, exc_info=True)
            return PageResult(
                job.index, error=PageOCRError(page_number, first_line(str(exc)))
            )
        logger.debug("Page %d recognized", page_number)
        return PageResult(job.index, text=text)

    def _close_when_done(self, threads: list[threading.Thread]) -> None:
        for t in threads:
            t.join()
        self._results.put(_END)
