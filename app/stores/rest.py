"""
Repository over a PostgREST-style HTTPS API.

Only five capabilities of the backend are used: fetch-by-filter, insert,
update-by-id, delete-by-id, and (through the local ChangeFeed) subscribe /
unsubscribe by filter.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from app.errors import Conflict, TransportError
from app.stores.base import Filters, R, Repository

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RestClient:
    def __init__(self, base_url: str, api_key: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def request(
        self,
        method: str,
        table: str,
        filters: Optional[Filters] = None,
        payload: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {"select": "*"}
        for key, value in (filters or {}).items():
            params[key] = f"eq.{_encode(value)}"
        if order:
            params["order"] = order
        headers = {}
        if method != "GET":
            headers["Prefer"] = "return=representation"

        url = f"{self.base_url}/rest/v1/{table}"
        try:
            async with self._get_session().request(method, url, params=params, json=payload, headers=headers) as resp:
                body = await resp.text()
                if resp.status >= 400:
                    raise self._error(resp.status, body, table)
                if not body:
                    return []
                data = json.loads(body)
                return data if isinstance(data, list) else [data]
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Backend request %s %s failed: %s", method, table, e)
            raise TransportError("Backend is unreachable")

    def _error(self, status: int, body: str, table: str):
        code = None
        message = body
        try:
            detail = json.loads(body) if body else {}
            code = detail.get("code")
            message = detail.get("message") or body
        except (ValueError, AttributeError):
            pass
        if status == 409 or code == UNIQUE_VIOLATION:
            return Conflict(f"Duplicate row in {table}")
        logger.error("Backend error %s on %s: %s", status, table, message)
        return TransportError(f"Backend error ({status})")

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()


class RestRepository(Repository[R]):
    def __init__(self, *args, client: RestClient, **kwargs):
        super().__init__(*args, **kwargs)
        self.client = client

    def _to_record(self, row: Dict[str, Any]) -> R:
        return self.model.model_validate(row)

    async def list(self, filters: Optional[Filters] = None) -> List[R]:
        rows = await self.client.request("GET", self.table, filters=filters, order="created_at.asc")
        return [self._to_record(row) for row in rows]

    async def get_by_id(self, record_id: str) -> Optional[R]:
        rows = await self.client.request("GET", self.table, filters={"id": record_id})
        return self._to_record(rows[0]) if rows else None

    async def _insert(self, record: R) -> R:
        rows = await self.client.request("POST", self.table, payload=record.model_dump(mode="json"))
        return self._to_record(rows[0]) if rows else record

    async def _update(self, record_id: str, record: R, changes: Dict[str, Any]) -> R:
        payload = record.model_dump(mode="json", include=set(changes))
        rows = await self.client.request("PATCH", self.table, filters={"id": record_id}, payload=payload)
        return self._to_record(rows[0]) if rows else record

    async def _remove(self, record_id: str) -> Optional[R]:
        rows = await self.client.request("DELETE", self.table, filters={"id": record_id})
        return self._to_record(rows[0]) if rows else None

    async def close(self) -> None:
        await self.client.close()
