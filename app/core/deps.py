from typing import Generator

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import SessionLocal
from app.repositories.member_repository import MemberRepository
from app.repositories.paging import PageRequest, Sort
from app.repositories.team_repository import TeamRepository


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_member_repository(db: Session = Depends(get_db)) -> MemberRepository:
    return MemberRepository(db)


def get_team_repository(db: Session = Depends(get_db)) -> TeamRepository:
    return TeamRepository(db)


# ?page=0&size=20&sort=username,desc&sort=age 형태의 쿼리 파라미터를 PageRequest로 변환
# 잘못된 page / size 는 에러 대신 기본값으로 보정하고, size는 MAX_PAGE_SIZE를 넘지 않는다
def get_pageable(
    page: str | None = Query(default=None, description="페이지 번호 (기본 0부터)"),
    size: str | None = Query(default=None, description=f"페이지 크기 (기본 {settings.DEFAULT_PAGE_SIZE})"),
    sort: list[str] = Query(default=[], description="예: username,desc"),
) -> PageRequest:
    first_page = 1 if settings.PAGE_ONE_INDEXED else 0
    page_number = _parse_int(page, first_page) - first_page
    if page_number < 0:
        page_number = 0

    page_size = _parse_int(size, settings.DEFAULT_PAGE_SIZE)
    if page_size < 1:
        page_size = settings.DEFAULT_PAGE_SIZE
    page_size = min(page_size, settings.MAX_PAGE_SIZE)

    return PageRequest.of(page_number, page_size, Sort.parse(sort))


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default
