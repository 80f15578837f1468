"""
services/resource_service.py
----------------------------
Entry point for the admin layer: resolves a table name coming from a
request to its repository and serves paginated listings.
"""

import math
from typing import Any, Iterable, Mapping, Optional

from db.connection import init_pool
from db.factory import get_store
from db.store import PostgresStore, Store
from models.resource import TableDescriptor
from models.tables import SITE_TABLES
from query.errors import ValidationError
from query.identifiers import validate_table
from query.paging import normalize_page
from repositories.resource_repo import ResourceRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ResourceRegistry:
    """One ResourceRepository per declared table, all sharing a store."""

    def __init__(self, descriptors: Iterable[TableDescriptor], store: Store):
        self.store = store
        self._repos: dict[str, ResourceRepository] = {}
        for descriptor in descriptors:
            name = validate_table(descriptor)
            if name in self._repos:
                raise ValidationError(f"Table declared twice: {name}")
            self._repos[name] = ResourceRepository(descriptor, store)
        logger.info(f"Resource registry ready ({store.engine}): {', '.join(self.names())}")

    def names(self) -> list[str]:
        return sorted(self._repos)

    def get(self, name: Any) -> ResourceRepository:
        """Repository for `name`; anything not declared raises ValidationError."""
        repo = self._repos.get(name) if isinstance(name, str) else None
        if repo is None:
            logger.warning(f"Rejected table {name!r}")
            raise ValidationError(f"Unknown table: {name!r}")
        return repo

    def list_page(
        self,
        name: str,
        filters: Optional[Mapping[str, Any]] = None,
        sort: Optional[Mapping[str, Any]] = None,
        page: Optional[Mapping[str, Any]] = None,
        timeout_ms: Optional[int] = None,
    ) -> dict:
        """
        One page of records plus pagination totals.

        Runs two statements (find, then count); they are not atomic with
        respect to concurrent writers.

        Returns:
            Dict with keys 'records', 'total', 'limit', 'offset', 'pages'.
        """
        repo = self.get(name)
        page_spec = normalize_page(page)
        page_request = {"limit": page_spec.limit, "offset": page_spec.offset}
        records = repo.find(filters, sort, page_request, timeout_ms=timeout_ms)
        total = repo.count(filters, timeout_ms=timeout_ms)
        pages = math.ceil(total / page_spec.limit) if page_spec.limit else 0
        return {
            "records": records,
            "total": total,
            "limit": page_spec.limit,
            "offset": page_spec.offset,
            "pages": pages,
        }


def build_registry(store: Optional[Store] = None) -> ResourceRegistry:
    """
    Registry over the site tables.

    Without an explicit store, uses the one selected by DB_ENGINE and makes
    sure the PostgreSQL pool is up when that store needs it.
    """
    if store is None:
        store = get_store()
        if isinstance(store, PostgresStore):
            init_pool()
    return ResourceRegistry(SITE_TABLES, store)
