"""Parse untrusted query-string parameters into a search descriptor."""

from __future__ import annotations

from typing import Mapping

from pydantic import ValidationError

from advocates_api.domain.advocates.errors import FieldError, SearchValidationError
from advocates_api.domain.advocates.schemas import AdvocateSearchQuery

# Wire names accepted from the query string; anything else is ignored.
SEARCH_PARAMS = ("q", "city", "degree", "specialty", "page", "pageSize", "sort", "order")


def _field_errors(exc: ValidationError) -> list[FieldError]:
	errors: list[FieldError] = []
	for error in exc.errors(include_url=False):
		field = ".".join(str(part) for part in error.get("loc", ())) or "query"
		errors.append(FieldError(field=field, reason=error.get("msg", "invalid")))
	return errors


def parse_search_params(params: Mapping[str, str]) -> AdvocateSearchQuery:
	"""Build an :class:`AdvocateSearchQuery` or raise :class:`SearchValidationError`.

	``params`` is single valued. Strings are trimmed and blanks treated as
	absent; ``page``/``pageSize`` are coerced to integers; ``sort`` and
	``order`` must come from their fixed vocabularies.
	"""

	payload = {key: params[key] for key in SEARCH_PARAMS if key in params}
	try:
		return AdvocateSearchQuery.model_validate(payload)
	except ValidationError as exc:
		raise SearchValidationError(_field_errors(exc)) from exc
