"""Pydantic schemas for the advocate search API."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class SortKey(str, Enum):
	CREATED_AT = "created_at"
	LAST_NAME = "last_name"
	YEARS_OF_EXPERIENCE = "years_of_experience"


class SortOrder(str, Enum):
	ASC = "asc"
	DESC = "desc"


class AdvocateSearchQuery(BaseModel):
	"""Validated, immutable search descriptor for one request."""

	model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

	q: Optional[str] = Field(default=None, description="Fragment of first or last name")
	city: Optional[str] = Field(default=None, description="Fragment of the city")
	degree: Optional[str] = Field(default=None, description="Exact degree, e.g. MD")
	specialty: Optional[str] = Field(default=None, description="Fragment of any specialty")
	page: int = Field(default=DEFAULT_PAGE, ge=1)
	page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize")
	sort: SortKey = SortKey.CREATED_AT
	order: SortOrder = SortOrder.DESC

	@field_validator("q", "city", "degree", "specialty", mode="before")
	@classmethod
	def _blank_to_none(cls, value):
		if isinstance(value, str):
			value = value.strip()
			return value or None
		return value


class AdvocateResult(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

	id: int
	first_name: str
	last_name: str
	city: str
	degree: str
	specialties: list[str]
	years_of_experience: int = Field(..., ge=0)
	phone_number: int
	created_at: datetime


class AdvocatePage(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

	data: list[AdvocateResult]
	page: int
	page_size: int
	total: int = Field(..., ge=0)
