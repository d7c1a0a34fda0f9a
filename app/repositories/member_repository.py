"""
member_repository.py

회원(Member) 리포지토리.

공통 CRUD(JpaRepository)에 회원 전용 조회 쿼리를 더한 리포지토리이다.
쿼리는 메서드 이름 그대로의 조건을 select() 로 명시적으로 작성한다.

주요 기능:
- 조건 조회 (username, username + age, 상위 3명, IN 절)
- 값 / DTO 조회 (username 목록, MemberDto)
- 페이징(Page) / 슬라이스(Slice) 조회, count 쿼리 분리
- 벌크 수정 (나이 일괄 +1)
- 페치 조인 / 엔티티 그래프 (N+1 문제 해결)
- 읽기 전용 조회, 비관적 락(SELECT ... FOR UPDATE)
- Projection 조회 (필요한 컬럼만 / 중첩 projection)
- 네이티브 SQL 조회

설계 원칙:
- HTTP 의존성 없음
- commit은 호출 측에서 수행
- 벌크 쿼리 실행 후에는 영속성 컨텍스트를 비워서 DB와 상태를 맞춘다

관련 파일:
- app.repositories.base                     : 공통 CRUD
- app.repositories.member_repository_custom : 직접 구현한 쿼리
- app.schemas.member                        : DTO / Projection

"""

from typing import TypeVar

from pydantic import BaseModel
from sqlalchemy import func, inspect, select, text, update
from sqlalchemy.orm import contains_eager, joinedload

from app.core.exceptions import IncorrectResultSizeError, PropertyReferenceError
from app.core.logging import get_logger
from app.models.member import Member
from app.models.team import Team
from app.repositories.base import JpaRepository
from app.repositories.member_repository_custom import MemberRepositoryCustom
from app.repositories.paging import Page, PageRequest, Slice, Sort, apply_paging, apply_sort, build_page
from app.schemas.member import MemberDto, MemberProjection

P = TypeVar("P", bound=BaseModel)

logger = get_logger(__name__)

_NATIVE_PROJECTION_SQL = (
    "select m.member_id as id, m.username as username, t.name as team_name"
    " from member m"
    " left join team t on m.team_no = t.team_no"
)
_NATIVE_PROJECTION_COUNT_SQL = "select count(*) from member"
_NATIVE_PROJECTION_SORT = {
    "id": "m.member_id",
    "username": "m.username",
    "team_name": "t.name",
}


class MemberRepository(JpaRepository[Member, int], MemberRepositoryCustom):
    model = Member

    def find_by_username(self, username: str) -> list[Member]:
        return list(self.db.scalars(select(Member).where(Member.username == username)).all())

    def find_by_username_and_age_greater_than(self, username: str, age: int) -> list[Member]:
        stmt = select(Member).where(Member.username == username, Member.age > age)
        return list(self.db.scalars(stmt).all())

    def find_top3_by_order_by_age_desc(self) -> list[Member]:
        stmt = select(Member).order_by(Member.age.desc()).limit(3)
        return list(self.db.scalars(stmt).all())

    def find_member(self, username: str, age: int) -> list[Member]:
        stmt = select(Member).where(Member.username == username, Member.age == age)
        return list(self.db.scalars(stmt).all())

    def find_usernames(self) -> list[str]:
        return list(self.db.scalars(select(Member.username)).all())

    def find_member_dto_by_team_name(self, team_name: str) -> list[MemberDto]:
        stmt = (
            select(Member.id, Member.username, Team.name.label("team_name"))
            .outerjoin(Member.team)
            .where(Team.name == team_name)
        )
        return [MemberDto(id=r.id, username=r.username, team_name=r.team_name) for r in self.db.execute(stmt)]

    def find_by_names(self, names) -> list[Member]:
        stmt = select(Member).where(Member.username.in_(list(names)))
        return list(self.db.scalars(stmt).all())

    """
    단건 조회

    - 결과가 없으면 None
    - 결과가 2건 이상이면 IncorrectResultSizeError

    """
    def find_member_by_username(self, username: str) -> Member | None:
        return self._single(select(Member).where(Member.username == username))

    """
    나이로 페이징 조회

    - 컨텐츠 쿼리는 team을 left join
    - count 쿼리는 join 없이 member만 센다 (조인이 많아질수록 count 쿼리를 분리하는 게 유리)
    - page 번호는 0부터 시작

    """
    def find_by_age(self, age: int, pageable: PageRequest) -> Page[Member]:
        stmt = select(Member).outerjoin(Member.team).where(Member.age == age)
        stmt = apply_paging(stmt, Member, pageable, aliases={"team_name": Team.name})
        content = self.db.scalars(stmt).all()

        def count() -> int:
            return self.db.scalar(select(func.count(Member.id)).where(Member.age == age)) or 0

        return build_page(content, pageable, count)

    # count 쿼리 없이 size + 1 개를 조회해서 다음 페이지 존재 여부만 판단
    def find_slice_by_age(self, age: int, pageable: PageRequest) -> Slice[Member]:
        stmt = apply_sort(select(Member).where(Member.age == age), Member, pageable.sort)
        rows = self.db.scalars(stmt.offset(pageable.offset).limit(pageable.size + 1)).all()
        return Slice(rows[: pageable.size], pageable, has_next=len(rows) > pageable.size)

    """
    벌크 수정: age 이상인 회원의 나이를 1 증가

    - 실행 전에 flush 해서 아직 반영되지 않은 변경을 먼저 DB에 보낸다
    - 벌크 쿼리는 영속성 컨텍스트를 거치지 않고 DB에 바로 나가기 때문에
      세션에 있는 객체는 변경을 모른다 -> clear_automatically면 세션을 비운다
    - 반환값: 변경된 row 수

    """
    def bulk_age_plus(self, age: int, *, clear_automatically: bool = True) -> int:
        self.db.flush()
        stmt = (
            update(Member)
            .where(Member.age >= age)
            .values(age=Member.age + 1)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if clear_automatically:
            self.db.expunge_all()
        logger.debug("bulk_age_plus(age>=%d) updated %d rows", age, result.rowcount)
        return result.rowcount

    # 페치 조인: member를 조회할 때 연관된 team까지 한 번의 쿼리로 가져온다 (left outer join)
    def find_member_fetch_join(self) -> list[Member]:
        stmt = select(Member).outerjoin(Member.team).options(contains_eager(Member.team))
        return list(self.db.scalars(stmt).all())

    # 엔티티 그래프: 쿼리를 직접 작성하지 않고 team을 함께 로딩
    def find_all(self, sort: Sort | None = None) -> list[Member]:
        stmt = select(Member).options(joinedload(Member.team))
        if sort is not None:
            stmt = apply_sort(stmt, Member, sort)
        return list(self.db.scalars(stmt).all())

    def find_member_with_entity_graph(self) -> list[Member]:
        return list(self.db.scalars(select(Member).options(joinedload(Member.team))).all())

    def find_entity_graph_by_username(self, username: str) -> list[Member]:
        stmt = select(Member).options(joinedload(Member.team)).where(Member.username == username)
        return list(self.db.scalars(stmt).all())

    """
    읽기 전용 조회

    - 새로 로딩한 객체는 조회 직후 세션에서 분리(expunge)해서 변경 감지 대상에서 제외한다
    - 반환된 객체를 수정해도 flush / commit 시 UPDATE가 나가지 않는다
    - 분리된 객체이므로 지연 로딩(member.team)은 사용할 수 없다
    - 이미 세션이 관리하던 객체(identity map)는 그대로 돌려준다
      (분리하면 아직 flush 되지 않은 변경이 사라진다)

    """
    def find_read_only_by_username(self, username: str) -> Member | None:
        managed = set(self.db.identity_map.keys())
        member = self._single(select(Member).where(Member.username == username))
        if member is not None and inspect(member).key not in managed:
            self.db.expunge(member)
        return member

    """
    비관적 락 조회

    - SELECT ... FOR UPDATE 로 row에 락을 건다 (트랜잭션 종료 시 해제)
    - row 락을 지원하지 않는 DB(SQLite)에서는 FOR UPDATE 없이 실행된다

    """
    def find_lock_by_username(self, username: str) -> list[Member]:
        stmt = select(Member).where(Member.username == username).with_for_update()
        return list(self.db.scalars(stmt).all())

    """
    Projection 조회

    - projection 필드가 모두 Member 컬럼이면 그 컬럼만 SELECT
    - 중첩 projection(team 등)이 있으면 member + team을 조인해서 조회한 뒤 필요한 값만 노출
    - Member 컬럼도 연관관계도 아닌 필드가 있으면 PropertyReferenceError

    """
    def find_projections_by_username(self, username: str, projection: type[P]) -> list[P]:
        columns = _projection_columns(projection)
        if columns is not None:
            rows = self.db.execute(select(*columns).where(Member.username == username)).mappings().all()
            return [projection.model_validate(dict(row)) for row in rows]

        stmt = (
            select(Member)
            .outerjoin(Member.team)
            .options(contains_eager(Member.team))
            .where(Member.username == username)
        )
        return [projection.model_validate(m) for m in self.db.scalars(stmt).all()]

    def find_by_native_query(self, username: str) -> Member | None:
        stmt = select(Member).from_statement(text("select * from member where username = :username"))
        rows = self.db.scalars(stmt, {"username": username}).all()
        if len(rows) > 1:
            raise IncorrectResultSizeError(1, len(rows))
        return rows[0] if rows else None

    # 네이티브 SQL + 별도 count SQL 로 Projection 페이징
    def find_by_native_projection(self, pageable: PageRequest) -> Page[MemberProjection]:
        sql = _NATIVE_PROJECTION_SQL
        orders = []
        for order in pageable.sort:
            column = _NATIVE_PROJECTION_SORT.get(order.property)
            if column is None:
                raise PropertyReferenceError(order.property, MemberProjection.__name__)
            orders.append(f"{column} {'asc' if order.is_ascending else 'desc'}")
        if orders:
            sql += " order by " + ", ".join(orders)
        sql += " limit :limit offset :offset"

        rows = self.db.execute(text(sql), {"limit": pageable.size, "offset": pageable.offset}).mappings().all()
        content = [MemberProjection.model_validate(dict(row)) for row in rows]
        return build_page(content, pageable, lambda: self.db.scalar(text(_NATIVE_PROJECTION_COUNT_SQL)) or 0)

    def _single(self, stmt) -> Member | None:
        rows = self.db.scalars(stmt).all()
        if len(rows) > 1:
            raise IncorrectResultSizeError(1, len(rows))
        return rows[0] if rows else None


# 컬럼만 있으면 SELECT 할 컬럼 목록, 연관관계(team)가 섞여 있으면 None
def _projection_columns(projection: type[BaseModel]):
    mapper = inspect(Member)
    attrs = mapper.column_attrs
    keys = set(attrs.keys())
    relationships = set(mapper.relationships.keys())
    columns = []
    nested = False
    for name in projection.model_fields:
        if name in keys:
            columns.append(attrs[name].class_attribute.label(name))
        elif name in relationships:
            nested = True
        else:
            raise PropertyReferenceError(name, Member.__name__)
    return None if nested else columns
