from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

Row = Dict[str, Any]


class TableStore(Protocol):
    """Minimal keyed-record interface of the remote table store.

    Filters are equality conjunctions over named columns. Every call is a single
    round trip; results are never cached. Implementations raise the
    ``StoreError`` family (``NotReachable``, ``Rejected``, ``NotFound``).
    """

    def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[Row]:
        raise NotImplementedError

    def insert(self, table: str, values: Mapping[str, Any]) -> Row:
        raise NotImplementedError

    def update(self, table: str, row_id: int, values: Mapping[str, Any]) -> Row:
        """Update one row by id. Raises ``NotFound`` if the id is absent."""

        raise NotImplementedError

    def delete(self, table: str, row_id: int) -> None:
        raise NotImplementedError

    def upsert(self, table: str, values: Mapping[str, Any], *, conflict: Sequence[str]) -> Row:
        """Insert, or replace the non-key columns of the row sharing ``conflict`` values.

        Relies on a uniqueness constraint over ``conflict`` enforced by the store,
        so it is a single atomic conditional write.
        """

        raise NotImplementedError
