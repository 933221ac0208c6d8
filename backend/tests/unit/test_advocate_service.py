import logging

import pytest

from advocates_api.domain.advocates.errors import SearchUnavailableError
from advocates_api.domain.advocates.service import AdvocateSearchService
from advocates_api.domain.advocates.store import AdvocateStoreError, MemoryAdvocateStore, seed_memory_store
from advocates_api.domain.advocates.validation import parse_search_params


async def _search(**params):
	service = AdvocateSearchService()
	return await service.search(parse_search_params({key: str(value) for key, value in params.items()}))


def _ids(page):
	return [item.id for item in page.data]


@pytest.mark.asyncio
async def test_city_and_specialty_scenario(advocate_factory):
	await seed_memory_store(
		[
			advocate_factory(1, "Ann", "Lee", "Boston", "MD", ["trauma"], 5),
			advocate_factory(2, "Bo", "Han", "Boston", "PhD", ["coaching", "trauma"], 10),
		]
	)

	page = await _search(q="", city="Boston", specialty="trauma", page=1, pageSize=5, sort="created_at", order="desc")

	assert page.total == 2
	assert _ids(page) == [2, 1]
	assert page.page == 1
	assert page.page_size == 5
	assert page.data[1].specialties == ["trauma"]


@pytest.mark.asyncio
async def test_no_filters_returns_everything_newest_first(directory):
	await seed_memory_store(directory)

	page = await _search()

	assert page.total == 6
	assert _ids(page) == [6, 5, 4, 3, 2, 1]


@pytest.mark.asyncio
async def test_name_filter_matches_first_or_last_name(directory):
	await seed_memory_store(directory)

	by_an = await _search(q="an")
	by_lee = await _search(q="LEE")

	assert sorted(_ids(by_an)) == [1, 2, 3, 6]
	assert _ids(by_lee) == [1]


@pytest.mark.asyncio
async def test_degree_filter_is_exact(directory):
	await seed_memory_store(directory)

	assert sorted(_ids(await _search(degree="MD"))) == [1, 4, 6]
	assert (await _search(degree="M")).total == 0
	assert (await _search(degree="md")).total == 0


@pytest.mark.asyncio
async def test_specialty_filter_normalises_bare_strings(directory):
	await seed_memory_store(directory)

	trauma = await _search(specialty="trauma")
	adhd = await _search(specialty="adhd")

	assert sorted(_ids(trauma)) == [1, 2, 3]
	assert sorted(_ids(adhd)) == [4, 5]
	bare = next(item for item in adhd.data if item.id == 5)
	assert bare.specialties == ["ADHD"]


@pytest.mark.asyncio
async def test_adding_filters_only_narrows_results(directory):
	await seed_memory_store(directory)
	steps = [
		{},
		{"city": "boston"},
		{"city": "boston", "specialty": "trauma"},
		{"city": "boston", "specialty": "trauma", "q": "an"},
		{"city": "boston", "specialty": "trauma", "q": "an", "degree": "PhD"},
	]

	previous: set[int] | None = None
	for params in steps:
		current = set(_ids(await _search(pageSize=100, **params)))
		if previous is not None:
			assert current <= previous
		previous = current
	assert previous == {2}


@pytest.mark.asyncio
async def test_pages_partition_the_result_set(directory):
	await seed_memory_store(directory)

	first = await _search(page=1, pageSize=4)
	second = await _search(page=2, pageSize=4)
	beyond = await _search(page=3, pageSize=4)
	far_beyond = await _search(page=999, pageSize=4)

	assert len(first.data) == 4
	assert len(second.data) == 2
	assert beyond.data == []
	assert far_beyond.data == []
	assert {first.total, second.total, beyond.total, far_beyond.total} == {6}
	assert set(_ids(first)).isdisjoint(_ids(second))
	assert sorted(_ids(first) + _ids(second)) == [1, 2, 3, 4, 5, 6]


@pytest.mark.asyncio
@pytest.mark.parametrize("page_size", [1, 2, 5, 6, 100])
async def test_page_never_exceeds_page_size(directory, page_size):
	await seed_memory_store(directory)

	page = await _search(pageSize=page_size)

	assert 0 <= len(page.data) <= page_size
	assert page.total == 6


@pytest.mark.asyncio
async def test_total_counts_unpaginated_matches(directory):
	await seed_memory_store(directory)

	paged = await _search(city="o", pageSize=1)
	everything = await _search(city="o", pageSize=100)

	assert paged.total == len(everything.data) == everything.total
	assert len(paged.data) == 1


@pytest.mark.asyncio
async def test_sort_by_years_ascending_is_non_decreasing(directory):
	await seed_memory_store(directory)

	page = await _search(sort="years_of_experience", order="asc")
	years = [item.years_of_experience for item in page.data]

	assert years == sorted(years)
	# equal years fall back to creation order
	assert _ids(page) == [3, 1, 5, 2, 6, 4]


@pytest.mark.asyncio
async def test_sort_by_last_name(directory):
	await seed_memory_store(directory)

	ascending = await _search(sort="last_name", order="asc")
	descending = await _search(sort="last_name", order="desc")

	assert [item.last_name for item in ascending.data] == ["Adams", "Annandale", "Brown", "Han", "Lee", "Patel"]
	assert _ids(descending) == list(reversed(_ids(ascending)))


@pytest.mark.asyncio
async def test_empty_result_is_not_an_error(directory):
	await seed_memory_store(directory)

	page = await _search(q="zzz")

	assert page.data == []
	assert page.total == 0


class _RecordingStore:
	def __init__(self):
		self.compiled = []
		self.page_predicates = []
		self.count_predicates = []

	def compile(self, filters):
		predicate = object()
		self.compiled.append((filters, predicate))
		return predicate

	async def fetch_page(self, predicate, query):
		self.page_predicates.append(predicate)
		return []

	async def count(self, predicate):
		self.count_predicates.append(predicate)
		return 0


@pytest.mark.asyncio
async def test_page_and_count_share_one_predicate():
	store = _RecordingStore()
	service = AdvocateSearchService(store=store)

	await service.search(parse_search_params({"q": "ann", "city": "Boston"}))

	assert len(store.compiled) == 1
	predicate = store.compiled[0][1]
	assert store.page_predicates == [predicate]
	assert store.count_predicates == [predicate]


class _FailingStore(MemoryAdvocateStore):
	async def count(self, predicate):
		raise AdvocateStoreError("advocate count query failed") from ConnectionRefusedError(
			"could not connect to server: secret-host:5432"
		)


@pytest.mark.asyncio
async def test_store_failure_is_translated_and_logged(caplog):
	service = AdvocateSearchService(store=_FailingStore())

	with caplog.at_level(logging.ERROR):
		with pytest.raises(SearchUnavailableError) as excinfo:
			await service.search(parse_search_params({}))

	assert excinfo.value.status_code == 500
	assert excinfo.value.detail == "Internal error"
	assert "secret-host" not in excinfo.value.detail
	assert any("advocates.search failed" in record.getMessage() for record in caplog.records)
	assert any(record.exc_info for record in caplog.records)
