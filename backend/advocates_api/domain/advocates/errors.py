"""Error types raised by the advocate search domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(slots=True, frozen=True)
class FieldError:
	"""One rejected request parameter, keyed by its wire name."""

	field: str
	reason: str

	def as_dict(self) -> dict[str, str]:
		return {"field": self.field, "reason": self.reason}


@dataclass(slots=True)
class AdvocateSearchError(Exception):
	detail: str
	status_code: int = 400

	def __str__(self) -> str:  # pragma: no cover - debugging aid
		return self.detail


class SearchValidationError(AdvocateSearchError):
	"""Request parameters failed validation; nothing was executed."""

	def __init__(self, errors: Iterable[FieldError]) -> None:
		super().__init__(detail="validation_error", status_code=400)
		self.errors = list(errors)

	def error_payload(self) -> list[dict[str, str]]:
		return [error.as_dict() for error in self.errors]


class SearchUnavailableError(AdvocateSearchError):
	"""The row store failed; the cause stays in server logs."""

	def __init__(self) -> None:
		super().__init__(detail="Internal error", status_code=500)
