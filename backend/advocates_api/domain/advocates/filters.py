"""Query building for advocate directory searches."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import Advocate
from .schemas import AdvocateSearchQuery, SortKey, SortOrder

_SORT_COLUMN_MAP = {
    SortKey.CREATED_AT: "a.created_at",
    SortKey.LAST_NAME: "a.last_name",
    SortKey.YEARS_OF_EXPERIENCE: "a.years_of_experience",
}

_SORT_ATTRIBUTE_MAP = {
    SortKey.CREATED_AT: "created_at",
    SortKey.LAST_NAME: "last_name",
    SortKey.YEARS_OF_EXPERIENCE: "years_of_experience",
}

# specialties is jsonb holding either an array of strings or one bare string
_SPECIALTY_CLAUSE = """EXISTS (
    SELECT 1
    FROM jsonb_array_elements_text(
        CASE
            WHEN jsonb_typeof(a.specialties) = 'array' THEN a.specialties
            ELSE jsonb_build_array(a.specialties)
        END
    ) AS s(val)
    WHERE s.val ILIKE ${idx}
)"""


def escape_like(value: str) -> str:
    """Escape LIKE metacharacters so ``value`` matches literally."""

    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(fragment: str) -> str:
    return f"%{escape_like(fragment)}%"


@dataclass(slots=True, frozen=True)
class SqlPredicate:
    """A compiled WHERE clause and its positional parameters."""

    clause: str = ""
    params: tuple[Any, ...] = ()


@dataclass(slots=True, frozen=True)
class AdvocateFilterSet:
    """Filter inputs for the advocate search endpoint."""

    name: str | None = None
    city: str | None = None
    degree: str | None = None
    specialty: str | None = None

    @classmethod
    def from_query(cls, query: AdvocateSearchQuery) -> "AdvocateFilterSet":
        return cls(name=query.q, city=query.city, degree=query.degree, specialty=query.specialty)

    def active(self) -> list[str]:
        return [
            key
            for key, value in (
                ("name", self.name),
                ("city", self.city),
                ("degree", self.degree),
                ("specialty", self.specialty),
            )
            if value
        ]

    def where_clause(self, params: list[object]) -> str:
        clauses: list[str] = []
        if self.name:
            params.append(_contains(self.name))
            idx = len(params)
            clauses.append(f"(a.first_name ILIKE ${idx} OR a.last_name ILIKE ${idx})")
        if self.city:
            params.append(_contains(self.city))
            clauses.append(f"a.city ILIKE ${len(params)}")
        if self.degree:
            # controlled vocabulary: exact, case-sensitive
            params.append(self.degree)
            clauses.append(f"a.degree = ${len(params)}")
        if self.specialty:
            params.append(_contains(self.specialty))
            clauses.append(_SPECIALTY_CLAUSE.format(idx=len(params)))
        return " AND ".join(clauses)

    def compile(self) -> SqlPredicate:
        params: list[object] = []
        clause = self.where_clause(params)
        return SqlPredicate(clause=clause, params=tuple(params))

    def matches(self, advocate: Advocate) -> bool:
        """Evaluate the same predicate as :meth:`where_clause` in process."""

        if self.name:
            needle = self.name.lower()
            if needle not in advocate.first_name.lower() and needle not in advocate.last_name.lower():
                return False
        if self.city and self.city.lower() not in advocate.city.lower():
            return False
        if self.degree and advocate.degree != self.degree:
            return False
        if self.specialty:
            needle = self.specialty.lower()
            if not any(needle in specialty.lower() for specialty in advocate.specialties):
                return False
        return True


@dataclass(slots=True, frozen=True)
class AdvocateQuery:
    filters: AdvocateFilterSet = field(default_factory=AdvocateFilterSet)
    sort_field: SortKey = SortKey.CREATED_AT
    order: SortOrder = SortOrder.DESC
    page: int = 1
    page_size: int = 20

    @classmethod
    def from_search(cls, query: AdvocateSearchQuery) -> "AdvocateQuery":
        return cls(
            filters=AdvocateFilterSet.from_query(query),
            sort_field=query.sort,
            order=query.order,
            page=query.page,
            page_size=query.page_size,
        )

    def column(self) -> str:
        return _SORT_COLUMN_MAP[self.sort_field]

    def descending(self) -> bool:
        return self.order is SortOrder.DESC

    def order_by(self) -> str:
        direction = "DESC" if self.descending() else "ASC"
        columns = [self.column()]
        if self.sort_field is not SortKey.CREATED_AT:
            columns.append("a.created_at")
        columns.append("a.id")
        return ", ".join(f"{column} {direction}" for column in columns)

    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def sort_key(self, advocate: Advocate) -> tuple[Any, ...]:
        """In-process equivalent of :meth:`order_by` for ``sorted``."""

        return (getattr(advocate, _SORT_ATTRIBUTE_MAP[self.sort_field]), advocate.created_at, advocate.id)
