from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

import requests

from ..core.constants import DEFAULT_REST_TIMEOUT_SECONDS
from ..core.exceptions import NotFound, NotReachable, Rejected
from .table_store import Row, TableStore

logger = logging.getLogger(__name__)


def _wire(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class RestTableStore(TableStore):
    """TableStore for a hosted PostgREST-style API (``/rest/v1/<table>``).

    Every request carries a timeout; connection failures, timeouts and 5xx
    responses surface as ``NotReachable``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_REST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("REST_URL is not configured")
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def _headers(self, prefer: Optional[str] = None) -> dict:
        h = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if prefer:
            h["Prefer"] = prefer
        return h

    def _request(
        self,
        method: str,
        table: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> list[Row]:
        url = f"{self._base_url}/rest/v1/{table}"
        try:
            r = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(prefer),
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error("Store request failed: %s %s: %s", method, table, e.__class__.__name__)
            raise NotReachable(f"Store unreachable: {e.__class__.__name__}", table=table) from e

        if r.status_code >= 400:
            detail = _error_detail(r)
            logger.error("Store responded %s for %s %s: %s", r.status_code, method, table, detail)
            if r.status_code == 404:
                raise NotFound(detail, table=table)
            if r.status_code >= 500:
                raise NotReachable(detail, table=table)
            raise Rejected(detail, table=table)

        if not r.content:
            return []
        data = r.json()
        if isinstance(data, list):
            return data
        return [data]

    def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[Row]:
        params = {"select": "*"}
        for col, value in (filters or {}).items():
            params[col] = f"eq.{_wire(value)}"
        if order_by:
            direction = "desc" if descending else "asc"
            params["order"] = f"{order_by}.{direction},id.{direction}"
        else:
            params["order"] = "id.asc"
        return self._request("GET", table, params=params)

    def insert(self, table: str, values: Mapping[str, Any]) -> Row:
        rows = self._request(
            "POST",
            table,
            json=[{k: _wire(v) for k, v in values.items()}],
            prefer="return=representation",
        )
        if not rows:
            raise Rejected("Insert returned no representation", table=table)
        return rows[0]

    def update(self, table: str, row_id: int, values: Mapping[str, Any]) -> Row:
        rows = self._request(
            "PATCH",
            table,
            params={"id": f"eq.{int(row_id)}"},
            json={k: _wire(v) for k, v in values.items()},
            prefer="return=representation",
        )
        if not rows:
            raise NotFound(f"{table} row {row_id} not found", table=table)
        return rows[0]

    def delete(self, table: str, row_id: int) -> None:
        rows = self._request(
            "DELETE",
            table,
            params={"id": f"eq.{int(row_id)}"},
            prefer="return=representation",
        )
        if not rows:
            raise NotFound(f"{table} row {row_id} not found", table=table)

    def upsert(self, table: str, values: Mapping[str, Any], *, conflict: Sequence[str]) -> Row:
        rows = self._request(
            "POST",
            table,
            params={"on_conflict": ",".join(conflict)},
            json=[{k: _wire(v) for k, v in values.items()}],
            prefer="resolution=merge-duplicates,return=representation",
        )
        if not rows:
            raise Rejected("Upsert returned no representation", table=table)
        return rows[0]


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)
