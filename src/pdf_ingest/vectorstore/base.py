"""Abstract base class for vector-index backends.

Adding a new backend only requires subclassing :class:`VectorIndexBase`
and implementing the two abstract methods.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pdf_ingest.ingestion.models import VectorRecord


class VectorIndexBase(ABC):
    """Backend-agnostic vector-index interface.

    Parameters
    ----------
    index_name:
        Logical name of the index / collection.
    """

    def __init__(self, index_name: str) -> None:
        self.index_name = index_name

    @abstractmethod
    async def upsert(
        self,
        records: Sequence[VectorRecord],
        *,
        namespace: str,
        batch_size: int = 10,
    ) -> int:
        """Insert-or-overwrite *records* by id under *namespace*.

        Writes happen in batches of *batch_size*. Implementations must
        only return once every batch has been acknowledged, and must
        raise :class:`~pdf_ingest.errors.UpsertError` on the first
        failed batch.

        Returns
        -------
        int
            Number of records written.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...


def iter_batches(records: Sequence[VectorRecord], batch_size: int) -> list[Sequence[VectorRecord]]:
    """Split *records* into consecutive batches of at most *batch_size*."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    return [records[start : start + batch_size] for start in range(0, len(records), batch_size)]
