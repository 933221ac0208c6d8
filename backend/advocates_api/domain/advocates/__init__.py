"""Advocate search domain exports."""

from .errors import AdvocateSearchError, FieldError, SearchUnavailableError, SearchValidationError
from .service import AdvocateSearchService
from .store import reset_memory_state, seed_memory_store
from .validation import parse_search_params

__all__ = [
	"AdvocateSearchError",
	"AdvocateSearchService",
	"FieldError",
	"SearchUnavailableError",
	"SearchValidationError",
	"parse_search_params",
	"reset_memory_state",
	"seed_memory_store",
]
