"""Service layer for advocate search."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from advocates_api.domain.advocates import models, schemas
from advocates_api.domain.advocates import store as store_module
from advocates_api.domain.advocates.errors import SearchUnavailableError
from advocates_api.domain.advocates.filters import AdvocateQuery
from advocates_api.domain.advocates.store import AdvocateStore, AdvocateStoreError
from advocates_api.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def _to_result(advocate: models.Advocate) -> schemas.AdvocateResult:
	return schemas.AdvocateResult(
		id=advocate.id,
		first_name=advocate.first_name,
		last_name=advocate.last_name,
		city=advocate.city,
		degree=advocate.degree,
		specialties=list(advocate.specialties),
		years_of_experience=advocate.years_of_experience,
		phone_number=advocate.phone_number,
		created_at=advocate.created_at,
	)


class AdvocateSearchService:
	def __init__(self, store: Optional[AdvocateStore] = None) -> None:
		self._store = store

	def _resolve_store(self) -> AdvocateStore:
		if self._store is not None:
			return self._store
		return store_module.resolve_store()

	async def search(self, query: schemas.AdvocateSearchQuery) -> schemas.AdvocatePage:
		"""Fetch one page of matching advocates plus the total match count.

		The predicate is compiled once and shared by the page read and the
		count read, which run concurrently.
		"""

		start = time.perf_counter()
		try:
			store = self._resolve_store()
			plan = AdvocateQuery.from_search(query)
			predicate = store.compile(plan.filters)
			try:
				rows, total = await asyncio.gather(
					store.fetch_page(predicate, plan),
					store.count(predicate),
				)
			except AdvocateStoreError as exc:
				obs_metrics.inc_search_query("error")
				logger.exception(
					"advocates.search failed filters=%s page=%d page_size=%d",
					",".join(plan.filters.active()) or "-",
					plan.page,
					plan.page_size,
				)
				raise SearchUnavailableError() from exc

			response = schemas.AdvocatePage(
				data=[_to_result(advocate) for advocate in rows],
				page=plan.page,
				page_size=plan.page_size,
				total=total,
			)
			obs_metrics.inc_search_query("ok")
			obs_metrics.observe_search_results(len(response.data))
			logger.info(
				"advocates.search filters=%s sort=%s order=%s page=%d results=%d total=%d",
				",".join(plan.filters.active()) or "-",
				plan.sort_field.value,
				plan.order.value,
				plan.page,
				len(response.data),
				total,
			)
			return response
		finally:
			obs_metrics.observe_search_latency(time.perf_counter() - start)
