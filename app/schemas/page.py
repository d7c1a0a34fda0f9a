from typing import Callable, Generic, TypeVar

from pydantic import BaseModel

from app.repositories.paging import Page

T = TypeVar("T")


# Page 응답 (page 번호는 요청과 같은 기준으로 돌려준다)
class PageResponse(BaseModel, Generic[T]):
    content: list[T]
    number: int
    size: int
    total_elements: int
    total_pages: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool
    sort: list[str]

    @classmethod
    def from_page(cls, page: Page, mapper: Callable | None = None, *, one_indexed: bool = False) -> "PageResponse[T]":
        content = [mapper(c) for c in page.content] if mapper else list(page.content)
        return cls(
            content=content,
            number=page.number + 1 if one_indexed else page.number,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            number_of_elements=page.number_of_elements,
            first=page.is_first,
            last=page.is_last,
            empty=page.is_empty,
            sort=[repr(o) for o in page.sort],
        )
