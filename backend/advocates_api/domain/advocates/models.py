"""Domain models backing advocate search results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Union

SpecialtiesValue = Union[str, list[str], None]


def normalize_specialties(value: Any) -> list[str]:
	"""Collapse the stored specialties shape into a list of strings.

	Rows written by older imports hold a bare string instead of an array;
	a bare string is treated as a one-element list.
	"""

	if value is None:
		return []
	if isinstance(value, str):
		return [value]
	if isinstance(value, (list, tuple)):
		return [str(item) for item in value if item is not None]
	return [str(value)]


@dataclass(slots=True)
class Advocate:
	"""Normalized representation of an advocate returned from the store layer."""

	id: int
	first_name: str
	last_name: str
	city: str
	degree: str
	specialties: list[str]
	years_of_experience: int
	phone_number: int
	created_at: datetime

	@classmethod
	def from_row(cls, row: Mapping[str, Any]) -> "Advocate":
		return cls(
			id=int(row["id"]),
			first_name=row["first_name"],
			last_name=row["last_name"],
			city=row["city"],
			degree=row["degree"],
			specialties=normalize_specialties(row["specialties"]),
			years_of_experience=int(row["years_of_experience"]),
			phone_number=int(row["phone_number"]),
			created_at=row["created_at"],
		)


@dataclass(slots=True)
class MemoryAdvocate:
	"""In-memory seed structure; specialties keep their raw stored shape."""

	id: int
	first_name: str
	last_name: str
	city: str
	degree: str
	created_at: datetime
	specialties: SpecialtiesValue = field(default_factory=list)
	years_of_experience: int = 0
	phone_number: int = 0

	def as_row(self) -> dict[str, Any]:
		return {
			"id": self.id,
			"first_name": self.first_name,
			"last_name": self.last_name,
			"city": self.city,
			"degree": self.degree,
			"specialties": self.specialties,
			"years_of_experience": self.years_of_experience,
			"phone_number": self.phone_number,
			"created_at": self.created_at,
		}
