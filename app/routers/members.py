"""
members.py

회원(Member) 조회 API 모음.

주요 기능:
- 회원 단건 조회 (id)
- 회원 username 조회 (경로 변수 id를 바로 회원으로 변환해서 사용)
- 회원 목록 페이징 조회 (page / size / sort 쿼리 파라미터)

설계 원칙:
- 엔티티를 그대로 노출하지 않고 응답 스키마(MemberResponse / MemberDto)로 변환
- 조회 로직은 MemberRepository에 위임
- 조회 결과가 없으면 EntityNotFoundError -> app.main 핸들러가 404로 변환

관련 파일:
- app.repositories.member_repository : 회원 조회 쿼리
- app.core.deps                      : get_pageable (페이징 파라미터 변환)
- app.schemas.member / page          : 응답 스키마

"""

from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.deps import get_member_repository, get_pageable
from app.models.member import Member
from app.repositories.member_repository import MemberRepository
from app.repositories.paging import PageRequest
from app.schemas.member import MemberDto, MemberResponse
from app.schemas.page import PageResponse

router = APIRouter(tags=["members"])


def get_member_path(
    id: int,
    repo: MemberRepository = Depends(get_member_repository),
) -> Member:
    return repo.get_by_id(id)


"""
회원 단건 조회 API

- id로 회원 조회, 없으면 404

"""
@router.get("/members/{id}", response_model=MemberResponse)
def find_member(
    id: int,
    repo: MemberRepository = Depends(get_member_repository),
):
    return MemberResponse.model_validate(repo.get_by_id(id))


"""
회원 username 조회 API

- 경로 변수 id를 의존성(get_member_path)에서 바로 Member로 변환
- 조회 전용으로만 사용한다 (변환된 엔티티를 수정하지 않음)

"""
@router.get("/members2/{id}")
def find_member2(member: Member = Depends(get_member_path)) -> str | None:
    return member.username


"""
회원 목록 페이징 조회 API

- 예: /members?page=2&size=20&sort=id,desc
- size 미지정 시 기본 5개
- 엔티티 Page를 MemberDto Page로 변환해서 반환

"""
@router.get("/members", response_model=PageResponse[MemberDto])
def find_members(
    pageable: PageRequest = Depends(get_pageable),
    repo: MemberRepository = Depends(get_member_repository),
):
    page = repo.find_all_paged(pageable)
    return PageResponse[MemberDto].from_page(page, MemberDto.from_member, one_indexed=settings.PAGE_ONE_INDEXED)
