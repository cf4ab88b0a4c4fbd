"""Restores page order for results arriving from parallel workers.

Results are held in a min-heap keyed by page index and released only when
the smallest held index equals the next expected one. Memory use is bounded
by how far arrivals run ahead of the slowest outstanding page.
"""

import heapq
from collections.abc import Iterable, Iterator

from ocrpdf.exceptions import ReorderInvariantError
from ocrpdf.utils.logger import get_logger

from .models import PageResult

logger = get_logger(__name__)


class ReorderBuffer:
    """Min-heap of page results plus the next index due for release."""

    def __init__(self) -> None:
        self.next_expected = 0
        self._heap: list[tuple[int, PageResult]] = []
        self._held: set[int] = set()

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, result: PageResult) -> list[PageResult]:
        """Add a result and return every result now releasable, in order.

        Raises:
            ReorderInvariantError: If the index was already released or is
                already held.
        """
        index = result.index
        if index < self.next_expected or index in self._held:
            raise ReorderInvariantError(f"Duplicate result for page index {index}")

        heapq.heappush(self._heap, (index, result))
        self._held.add(index)

        released: list[PageResult] = []
        while self._heap and self._heap[0][0] == self.next_expected:
            _, ready = heapq.heappop(self._heap)
            self._held.discard(ready.index)
            released.append(ready)
            self.next_expected += 1
        return released

    def close(self) -> None:
        """Check that nothing is left once the result stream has ended.

        Raises:
            ReorderInvariantError: If results are still held, meaning an
                index below them never arrived.
        """
        if self._heap:
            raise ReorderInvariantError(
                f"Reorder buffer still has {len(self._heap)} results "
                f"(waiting for page index {self.next_expected}, "
                f"holding {sorted(self._held)})"
            )


def reorder(
    results: Iterable[PageResult], buffer: ReorderBuffer | None = None
) -> Iterator[PageResult]:
    """Yield results in ascending index order, starting at index 0.

    Stops at the first released result carrying an error and raises that
    error; later results are not consumed.

    Args:
        results: Results in arbitrary completion order.
        buffer: Buffer to use, so callers can inspect it afterwards.

    Raises:
        PageOCRError: The error of the first failed page in page order.
        ReorderInvariantError: If the stream ends with an index gap or
            delivers an index twice.
    """
    if buffer is None:
        buffer = ReorderBuffer()

    for result in results:
        for ready in buffer.push(result):
            if ready.error is not None:
                raise ready.error
            yield ready

    buffer.close()
    logger.debug("Released %d results in page order", buffer.next_expected)
