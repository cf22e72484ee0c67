from dataclasses import dataclass, field
from typing import List
from pnctool.helpers.validator import Validator, permitted_value

MAX_PAGE = 10_000_000
MAX_PAGE_SIZE = 100

@dataclass
class Filter:
    column: str
    type: str  # ieq (exact, any case) or ilike (substring, any case)
    value: str

@dataclass
class OrderBy:
    column: str
    order: str  # asc, desc

@dataclass
class Filters:
    page: int = 1
    page_size: int = 20
    sort: str = "id"
    sort_safelist: List[str] = field(default_factory=list)

    def sort_column(self) -> str:
        """Column named by the sort value, without the descending prefix.

        Raises ValueError for a value outside the safelist so that an
        unvalidated sort can never reach the SQL ORDER BY clause.
        """
        if self.sort not in self.sort_safelist:
            raise ValueError(f"unsafe sort parameter: {self.sort}")
        return self.sort.lstrip("-")

    def sort_direction(self) -> str:
        return "desc" if self.sort.startswith("-") else "asc"

    def limit(self) -> int:
        return self.page_size

    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def validate_filters(v: Validator, f: Filters):
    v.check(f.page > 0, "page", "must be greater than zero")
    v.check(f.page <= MAX_PAGE, "page", "must be a maximum of 10 million")
    v.check(f.page_size > 0, "page_size", "must be greater than zero")
    v.check(f.page_size <= MAX_PAGE_SIZE, "page_size", f"must be a maximum of {MAX_PAGE_SIZE}")
    v.check(permitted_value(f.sort, *f.sort_safelist), "sort", "invalid sort value")
