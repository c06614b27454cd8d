"""Paging primitives: sort orders, page requests and result pages."""

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Self, TypeVar

T = TypeVar("T")


class Direction(Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Order:
    """Sort order on a single document field."""

    property_name: str
    direction: Direction = Direction.ASC

    def to_clause(self) -> dict[str, Any]:
        return {self.property_name: {"order": self.direction.value}}


@dataclass(frozen=True)
class Sort:
    """Ordered list of sort orders, applied left to right."""

    orders: tuple[Order, ...] = ()

    @classmethod
    def by(cls, *properties: str, direction: Direction = Direction.ASC) -> Self:
        """Sort by one or more fields in the same direction."""
        return cls(orders=tuple(Order(property_name=p, direction=direction) for p in properties))

    def and_then(self, other: "Sort") -> "Sort":
        """Return a new sort with the orders of ``other`` appended."""
        return Sort(orders=(*self.orders, *other.orders))

    def to_clauses(self) -> list[dict[str, Any]]:
        return [order.to_clause() for order in self.orders]

    def __iter__(self) -> Iterator[Order]:
        return iter(self.orders)

    def __bool__(self) -> bool:
        return bool(self.orders)


@dataclass(frozen=True)
class PageRequest:
    """Request for ``size`` items starting at page ``page``."""

    page: int = 0
    size: int = 10
    sort: Sort = field(default_factory=Sort)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page index must not be less than zero")
        if self.size < 1:
            raise ValueError("Page size must not be less than one")

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next(self) -> "PageRequest":
        return PageRequest(page=self.page + 1, size=self.size, sort=self.sort)


DEFAULT_PAGE = PageRequest(page=0, size=10)


@dataclass(frozen=True)
class Page(Generic[T]):
    """A bounded slice of a result set with the total number of matches.

    A page built without a ``pageable`` holds the whole result set.
    """

    content: list[T] = field(default_factory=list)
    total_elements: int = 0
    pageable: PageRequest | None = None

    @property
    def number(self) -> int:
        return self.pageable.page if self.pageable else 0

    @property
    def size(self) -> int:
        return self.pageable.size if self.pageable else len(self.content)

    @property
    def total_pages(self) -> int:
        if self.pageable is None:
            return 1
        return math.ceil(self.total_elements / self.pageable.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    def is_empty(self) -> bool:
        return not self.content

    def __iter__(self) -> Iterator[T]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)
