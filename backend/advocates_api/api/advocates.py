"""REST endpoint for the advocate directory search."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, Response

from advocates_api.domain.advocates import schemas
from advocates_api.domain.advocates.service import AdvocateSearchService
from advocates_api.domain.advocates.validation import parse_search_params
from advocates_api.settings import settings

router = APIRouter(tags=["advocates"])

_service = AdvocateSearchService()


# Parameters stay raw strings here; parse_search_params coerces and range-checks them.
@router.get("/api/advocates", response_model=schemas.AdvocatePage)
async def search_advocates_endpoint(
	response: Response,
	q: Optional[str] = Query(default=None, description="Fragment of first or last name"),
	city: Optional[str] = Query(default=None, description="Fragment of the city"),
	degree: Optional[str] = Query(default=None, description="Exact degree"),
	specialty: Optional[str] = Query(default=None, description="Fragment of any specialty"),
	page: Optional[str] = Query(default=None, description="1-based page number"),
	page_size: Optional[str] = Query(default=None, alias="pageSize", description="Rows per page, 1..100"),
	sort: Optional[str] = Query(default=None, description="created_at | last_name | years_of_experience"),
	order: Optional[str] = Query(default=None, description="asc | desc"),
) -> schemas.AdvocatePage:
	raw = {
		"q": q,
		"city": city,
		"degree": degree,
		"specialty": specialty,
		"page": page,
		"pageSize": page_size,
		"sort": sort,
		"order": order,
	}
	query = parse_search_params({key: value for key, value in raw.items() if value is not None})
	result = await _service.search(query)
	response.headers["Cache-Control"] = settings.advocates_cache_control
	return result
