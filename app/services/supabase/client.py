from typing import Any

import httpx

from app.core.base_client import BaseClient
from app.core.config import settings
from app.core.exceptions import DataAccessError


def in_list(values: list[str]) -> str:
    """Format values for a PostgREST ``in.(...)`` filter, quoting each one."""
    quoted = []
    for value in values:
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        quoted.append(f'"{escaped}"')
    return f"({','.join(quoted)})"


class SupabaseClient(BaseClient):
    """
    Thin PostgREST client for the Supabase database.

    Reads are issued once: a failed read is reported, never retried.
    Every transport, HTTP or decoding failure surfaces as DataAccessError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        api_key = api_key or settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_ANON_KEY or ""
        root = (base_url or settings.SUPABASE_URL).rstrip("/")
        super().__init__(
            base_url=f"{root}/rest/v1",
            timeout=settings.SUPABASE_TIMEOUT_SECONDS,
            max_retries=1,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
                "User-Agent": "DealGenie/Picks",
            },
            transport=transport,
        )

    async def select(self, table: str, params: list[tuple[str, str]]) -> list[dict[str, Any]]:
        """Run a filtered select and return the rows."""
        try:
            data = await self.get(f"/{table}", params=params)
        except (httpx.HTTPError, ValueError) as e:
            raise DataAccessError(table, str(e)) from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise DataAccessError(table, f"Unexpected response shape: {type(data).__name__}")
        return data

    async def insert(self, table: str, rows: dict[str, Any] | list[dict[str, Any]], returning: str | None = None):
        """
        Insert one or more rows.

        With *returning* (a select list, e.g. ``"id"``) the inserted rows are
        returned; otherwise nothing is.
        """
        headers = {"Prefer": "return=representation" if returning else "return=minimal"}
        params = {"select": returning} if returning else None
        try:
            return await self.post(f"/{table}", json=rows, params=params, headers=headers)
        except (httpx.HTTPError, ValueError) as e:
            raise DataAccessError(table, str(e)) from e

    async def rpc(self, function: str, payload: dict[str, Any]) -> Any:
        """Call a Postgres function exposed through PostgREST."""
        try:
            return await self.post(f"/rpc/{function}", json=payload)
        except (httpx.HTTPError, ValueError) as e:
            raise DataAccessError(f"rpc/{function}", str(e)) from e
