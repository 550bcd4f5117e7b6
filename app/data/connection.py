from __future__ import annotations

import logging
from typing import Any, Optional

import pandas as pd
from supabase import Client, create_client

from config import AppConfig
from data.queries import RpcCall, TableQuery


logger = logging.getLogger(__name__)


class BackendAuthError(RuntimeError):
    pass


class BackendQueryError(RuntimeError):
    pass


class SupabaseClient:
    """
    Thin wrapper over the Supabase query client.

    Reads return pandas DataFrames; writes return the affected rows.
    Every failure is raised as BackendQueryError so the service layer can decide
    whether to fall back to mock data.
    """

    def __init__(self, cfg: AppConfig, use_service_role: bool = False):
        self.cfg = cfg
        self.use_service_role = use_service_role
        self._client: Optional[Client] = None

    def _key(self) -> Optional[str]:
        if self.use_service_role and self.cfg.supabase_service_key:
            return self.cfg.supabase_service_key
        return self.cfg.supabase_anon_key

    @property
    def client(self) -> Client:
        if self._client is None:
            key = self._key()
            if not self.cfg.supabase_url or not key:
                raise BackendAuthError(
                    "Missing SUPABASE_URL / SUPABASE_ANON_KEY for the backend. "
                    "Set them in .env, or enable mock data."
                )
            try:
                self._client = create_client(self.cfg.supabase_url, key)
            except Exception as e:
                logger.warning("Could not create the backend client: %s", e)
                raise BackendAuthError(f"Could not connect to {self.cfg.supabase_url}: {e}") from e
        return self._client

    def fetch(self, query: TableQuery) -> pd.DataFrame:
        req = self.client.table(query.table).select(query.select)
        for col, value in query.eq.items():
            req = req.eq(col, value)
        for col, values in query.in_.items():
            req = req.in_(col, list(values))
        for col, value in query.gte.items():
            req = req.gte(col, value)
        for col, value in query.lte.items():
            req = req.lte(col, value)
        if query.order_by:
            req = req.order(query.order_by, desc=query.descending)
        if query.limit:
            req = req.limit(query.limit)

        try:
            resp = req.execute()
        except Exception as e:
            logger.warning("Query on %s failed: %s", query.table, e)
            raise BackendQueryError(f"Query on {query.table} failed: {e}") from e

        rows = resp.data or []
        logger.debug("Fetched %d rows from %s (eq=%s)", len(rows), query.table, query.eq)
        if not rows:
            return pd.DataFrame(columns=list(query.columns))
        return pd.DataFrame(rows)

    def rpc(self, call: RpcCall) -> Any:
        try:
            resp = self.client.rpc(call.name, call.params).execute()
        except Exception as e:
            logger.warning("RPC %s failed: %s", call.name, e)
            raise BackendQueryError(f"RPC {call.name} failed: {e}") from e
        logger.debug("RPC %s returned %s", call.name, type(resp.data).__name__)
        return resp.data

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = self.client.table(table).insert(row).execute()
        except Exception as e:
            logger.warning("Insert into %s failed: %s", table, e)
            raise BackendQueryError(f"Insert into {table} failed: {e}") from e
        logger.info("Inserted row into %s", table)
        return (resp.data or [{}])[0]

    def update(self, table: str, values: dict[str, Any], match: dict[str, Any]) -> list[dict[str, Any]]:
        req = self.client.table(table).update(values)
        for col, value in match.items():
            req = req.eq(col, value)
        try:
            resp = req.execute()
        except Exception as e:
            logger.warning("Update on %s failed: %s", table, e)
            raise BackendQueryError(f"Update on {table} failed: {e}") from e
        logger.info("Updated %d row(s) in %s", len(resp.data or []), table)
        return resp.data or []


def get_backend_client(cfg: AppConfig, admin: bool = False) -> SupabaseClient:
    return SupabaseClient(cfg=cfg, use_service_role=admin)
