"""
paging.py

페이징과 정렬 요청/결과 타입.

- Sort / Order / Direction : 정렬 조건
- PageRequest              : 페이지 번호(0부터 시작) + 크기 + 정렬
- Page                     : 전체 개수(count 쿼리 결과)를 포함하는 페이징 결과
- Slice                    : count 쿼리 없이 다음 페이지 존재 여부만 아는 결과
                             (limit + 1 로 조회해서 판단, "더보기" 화면용)

정렬 속성은 apply_sort()에서 모델의 컬럼으로 변환되며,
존재하지 않는 속성이면 PropertyReferenceError가 발생한다.

"""

import math
from enum import Enum
from typing import Callable, Generic, Iterable, Iterator, Sequence, TypeVar

from sqlalchemy import Select, inspect

from app.core.exceptions import PropertyReferenceError

T = TypeVar("T")
R = TypeVar("R")


class Direction(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        try:
            return cls(value.upper())
        except ValueError:
            raise ValueError(f"Invalid sort direction: {value!r} (use 'asc' or 'desc')") from None


class Order:
    def __init__(self, prop: str, direction: Direction = Direction.ASC):
        self.property = prop
        self.direction = direction

    @property
    def is_ascending(self) -> bool:
        return self.direction == Direction.ASC

    def __eq__(self, other) -> bool:
        return isinstance(other, Order) and (self.property, self.direction) == (other.property, other.direction)

    def __repr__(self) -> str:
        return f"{self.property},{self.direction.value.lower()}"


class Sort:
    def __init__(self, orders: Iterable[Order] = ()):
        self.orders: list[Order] = list(orders)

    @classmethod
    def by(cls, *props: str, direction: Direction = Direction.ASC) -> "Sort":
        return cls(Order(p, direction) for p in props)

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls()

    @classmethod
    def parse(cls, values: Iterable[str]) -> "Sort":
        """
        "username,desc" 형태의 문자열 목록을 Sort로 변환한다.

        - "username"            -> username ASC
        - "username,desc"       -> username DESC
        - "age,username,desc"   -> age DESC, username DESC (마지막 토큰이 방향이면 전체에 적용)
        """
        orders: list[Order] = []
        for value in values:
            tokens = [t.strip() for t in value.split(",") if t.strip()]
            if not tokens:
                continue
            direction = Direction.ASC
            if tokens[-1].upper() in (Direction.ASC.value, Direction.DESC.value):
                direction = Direction.from_string(tokens.pop())
            orders.extend(Order(t, direction) for t in tokens)
        return cls(orders)

    def and_(self, other: "Sort") -> "Sort":
        return Sort([*self.orders, *other.orders])

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(self.orders)

    def __eq__(self, other) -> bool:
        return isinstance(other, Sort) and self.orders == other.orders

    def __repr__(self) -> str:
        return "; ".join(repr(o) for o in self.orders) or "UNSORTED"


class PageRequest:
    def __init__(self, page: int, size: int, sort: Sort | None = None):
        if page < 0:
            raise ValueError("Page index must not be less than zero")
        if size < 1:
            raise ValueError("Page size must not be less than one")
        self.page = page
        self.size = size
        self.sort = sort or Sort.unsorted()

    @classmethod
    def of(cls, page: int, size: int, sort: Sort | None = None) -> "PageRequest":
        return cls(page, size, sort)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next(self) -> "PageRequest":
        return PageRequest(self.page + 1, self.size, self.sort)

    def previous_or_first(self) -> "PageRequest":
        return PageRequest(self.page - 1, self.size, self.sort) if self.page > 0 else self

    def __eq__(self, other) -> bool:
        return isinstance(other, PageRequest) and (self.page, self.size, self.sort) == (other.page, other.size, other.sort)

    def __repr__(self) -> str:
        return f"PageRequest(page={self.page}, size={self.size}, sort={self.sort!r})"


class Slice(Generic[T]):
    def __init__(self, content: Sequence[T], pageable: PageRequest, has_next: bool):
        self.content: list[T] = list(content)
        self.pageable = pageable
        self._has_next = has_next

    @property
    def number(self) -> int:
        return self.pageable.page

    @property
    def size(self) -> int:
        return self.pageable.size

    @property
    def sort(self) -> Sort:
        return self.pageable.sort

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def has_next(self) -> bool:
        return self._has_next

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    @property
    def is_empty(self) -> bool:
        return not self.content

    def map(self, fn: Callable[[T], R]) -> "Slice[R]":
        return Slice([fn(c) for c in self.content], self.pageable, self._has_next)

    def __iter__(self) -> Iterator[T]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)


class Page(Slice[T]):
    def __init__(self, content: Sequence[T], pageable: PageRequest, total: int):
        super().__init__(content, pageable, has_next=False)
        self.total_elements = total

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    def map(self, fn: Callable[[T], R]) -> "Page[R]":
        return Page([fn(c) for c in self.content], self.pageable, self.total_elements)

    def __repr__(self) -> str:
        return f"Page {self.number + 1} of {self.total_pages} containing {self.number_of_elements} elements"


def build_page(content: Sequence[T], pageable: PageRequest, count_fn: Callable[[], int]) -> Page[T]:
    """
    count 쿼리를 꼭 필요할 때만 실행해서 Page를 만든다.

    - 첫 페이지인데 조회 결과가 size보다 적으면 전체 개수 = 조회 개수
    - 마지막 페이지(결과가 있고 size보다 적음)면 전체 개수 = offset + 조회 개수
    - 그 외에는 count_fn() 실행

    """
    content = list(content)
    if pageable.offset == 0 and len(content) < pageable.size:
        return Page(content, pageable, len(content))
    if content and len(content) < pageable.size:
        return Page(content, pageable, pageable.offset + len(content))
    return Page(content, pageable, count_fn())


def apply_sort(stmt: Select, model, sort: Sort, aliases: dict | None = None) -> Select:
    """
    Sort를 ORDER BY 절로 변환한다.

    aliases 로 모델 컬럼이 아닌 정렬 키(예: 조인한 테이블 컬럼)를 추가로 허용할 수 있다.
    """
    if not sort.is_sorted:
        return stmt
    columns = {attr.key: attr.class_attribute for attr in inspect(model).column_attrs}
    if aliases:
        columns.update(aliases)
    for order in sort:
        column = columns.get(order.property)
        if column is None:
            raise PropertyReferenceError(order.property, model.__name__)
        stmt = stmt.order_by(column.asc() if order.is_ascending else column.desc())
    return stmt


def apply_paging(stmt: Select, model, pageable: PageRequest, aliases: dict | None = None) -> Select:
    stmt = apply_sort(stmt, model, pageable.sort, aliases)
    return stmt.offset(pageable.offset).limit(pageable.size)
