"""Row store adapters for advocate search."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Iterable, Protocol

import asyncpg

from advocates_api.domain.advocates import models
from advocates_api.domain.advocates.filters import AdvocateFilterSet, AdvocateQuery, SqlPredicate
from advocates_api.infra.postgres import get_pool
from advocates_api.settings import settings

logger = logging.getLogger(__name__)

_PROJECTION = """
	a.id,
	a.first_name,
	a.last_name,
	a.city,
	a.degree,
	a.specialties,
	a.years_of_experience,
	a.phone_number,
	a.created_at
"""

_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)

# Largest value Postgres accepts for OFFSET (int8).
_MAX_OFFSET = 2**63 - 1


class AdvocateStoreError(Exception):
	"""The row store could not answer a read."""


class AdvocateStore(Protocol):
	def compile(self, filters: AdvocateFilterSet) -> Any:
		"""Build the predicate shared by :meth:`fetch_page` and :meth:`count`."""

	async def fetch_page(self, predicate: Any, query: AdvocateQuery) -> list[models.Advocate]:
		...

	async def count(self, predicate: Any) -> int:
		...


def _advocate_from_record(record: Any) -> models.Advocate:
	row = dict(record)
	raw = row.get("specialties")
	# asyncpg hands jsonb back as its text encoding
	if isinstance(raw, str):
		row["specialties"] = json.loads(raw)
	return models.Advocate.from_row(row)


class PostgresAdvocateStore:
	def __init__(self, pool_provider: Callable[[], Awaitable[asyncpg.Pool]] = get_pool) -> None:
		self._pool_provider = pool_provider

	def compile(self, filters: AdvocateFilterSet) -> SqlPredicate:
		return filters.compile()

	async def _pool(self) -> asyncpg.Pool:
		try:
			return await self._pool_provider()
		except _STORE_ERRORS as exc:
			raise AdvocateStoreError("postgres pool unavailable") from exc

	async def fetch_page(self, predicate: SqlPredicate, query: AdvocateQuery) -> list[models.Advocate]:
		if query.offset() > _MAX_OFFSET:
			return []
		params: list[Any] = list(predicate.params)
		sql = [f"SELECT {_PROJECTION}", "FROM advocates a"]
		if predicate.clause:
			sql.append(f"WHERE {predicate.clause}")
		sql.append(f"ORDER BY {query.order_by()}")
		params.append(query.page_size)
		sql.append(f"LIMIT ${len(params)}")
		params.append(query.offset())
		sql.append(f"OFFSET ${len(params)}")
		pool = await self._pool()
		try:
			records = await pool.fetch("\n".join(sql), *params)
		except _STORE_ERRORS as exc:
			raise AdvocateStoreError("advocate page query failed") from exc
		return [_advocate_from_record(record) for record in records]

	async def count(self, predicate: SqlPredicate) -> int:
		sql = "SELECT COUNT(*) FROM advocates a"
		if predicate.clause:
			sql += f" WHERE {predicate.clause}"
		pool = await self._pool()
		try:
			value = await pool.fetchval(sql, *predicate.params)
		except _STORE_ERRORS as exc:
			raise AdvocateStoreError("advocate count query failed") from exc
		return int(value or 0)


class MemoryAdvocateStore:
	def __init__(self) -> None:
		self._lock = asyncio.Lock()
		self.advocates: dict[int, models.MemoryAdvocate] = {}

	async def reset(self) -> None:
		async with self._lock:
			self.advocates.clear()

	async def seed(self, advocates: Iterable[models.MemoryAdvocate] | None = None) -> None:
		async with self._lock:
			self.advocates = {advocate.id: advocate for advocate in advocates or []}

	async def _snapshot(self) -> list[models.Advocate]:
		async with self._lock:
			rows = [advocate.as_row() for advocate in self.advocates.values()]
		return [models.Advocate.from_row(row) for row in rows]

	def compile(self, filters: AdvocateFilterSet) -> Callable[[models.Advocate], bool]:
		return filters.matches

	async def fetch_page(
		self,
		predicate: Callable[[models.Advocate], bool],
		query: AdvocateQuery,
	) -> list[models.Advocate]:
		matched = [advocate for advocate in await self._snapshot() if predicate(advocate)]
		matched.sort(key=query.sort_key, reverse=query.descending())
		start = query.offset()
		return matched[start : start + query.page_size]

	async def count(self, predicate: Callable[[models.Advocate], bool]) -> int:
		return sum(1 for advocate in await self._snapshot() if predicate(advocate))


_MEMORY = MemoryAdvocateStore()


def resolve_store() -> AdvocateStore:
	if settings.uses_memory_store():
		return _MEMORY
	return PostgresAdvocateStore()


async def seed_memory_store(advocates: Iterable[models.MemoryAdvocate] | None = None) -> None:
	await _MEMORY.seed(advocates)


async def reset_memory_state() -> None:
	await _MEMORY.reset()
