"""

MemberRepository 통합 테스트.
- 저장/조회/삭제 기본 동작과 같은 세션 내 동일성(identity map)
- 조건 조회, 값/DTO 조회, IN 절, 단건 조회 반환 타입
- Page / Slice 페이징, count 쿼리
- 벌크 수정 후 영속성 컨텍스트 초기화
- 지연 로딩 vs 페치 조인 / 엔티티 그래프 (실행 쿼리 수로 확인)
- 읽기 전용 조회, 비관적 락
- Projection, 네이티브 쿼리

"""

import pytest

from app.core.exceptions import IncorrectResultSizeError, PropertyReferenceError
from app.models.member import Member
from app.repositories.member_repository import MemberRepository
from app.repositories.paging import Direction, PageRequest, Sort
from app.schemas.member import MemberDto, MemberProjection, NestedClosedProjection, UsernameOnly
from tests.helpers import capture_sql, save_members, save_team_with_members, setup_two_teams


def test_save_and_find_returns_same_instance(db):
    repo = MemberRepository(db)

    saved = repo.save(Member(username="memberA"))
    found = repo.find_by_id(saved.id)

    assert found.id == saved.id
    assert found.username == saved.username
    assert found is saved


def test_crud(db):
    repo = MemberRepository(db)
    member1, member2 = save_members(db, ("member1", 0), ("member2", 0))

    assert repo.find_by_id(member1.id) is member1
    assert repo.find_by_id(member2.id) is member2

    assert len(repo.find_all()) == 2
    assert repo.count() == 2

    repo.delete(member1)
    repo.delete(member2)

    assert repo.count() == 0
    assert repo.find_by_id(member1.id) is None


def test_find_by_username_and_age_greater_than(db):
    save_members(db, ("member1", 20), ("member1", 10), ("member1", 18))

    members = MemberRepository(db).find_by_username_and_age_greater_than("member1", 15)

    assert len(members) == 2
    assert {m.age for m in members} == {20, 18}
    assert members[0].username == "member1"


def test_find_top3_by_order_by_age_desc(db):
    save_members(db, ("member1", 20), ("member2", 10), ("member3", 18), ("member4", 30))

    top3 = MemberRepository(db).find_top3_by_order_by_age_desc()

    assert [m.age for m in top3] == [30, 20, 18]


def test_find_member_with_explicit_query(db):
    member1, _, _ = save_members(db, ("member1", 20), ("member2", 10), ("member3", 18))

    members = MemberRepository(db).find_member("member1", 20)

    assert members == [member1]


def test_find_usernames(db):
    save_members(db, ("member1", 20), ("member2", 10), ("member3", 18))

    assert sorted(MemberRepository(db).find_usernames()) == ["member1", "member2", "member3"]


def test_find_member_dto_by_team_name(db):
    save_team_with_members(db, "TeamA", ("member1", 20), ("member2", 30))
    save_team_with_members(db, "TeamB", ("member3", 40))

    dtos = MemberRepository(db).find_member_dto_by_team_name("TeamA")

    assert len(dtos) == 2
    assert all(isinstance(d, MemberDto) for d in dtos)
    assert sorted(d.username for d in dtos) == ["member1", "member2"]
    assert {d.team_name for d in dtos} == {"TeamA"}
    assert all(d.id is not None for d in dtos)


def test_find_by_names(db):
    save_members(db, ("member1", 20), ("member2", 30), ("member3", 20), ("member4", 30))
    repo = MemberRepository(db)

    members = repo.find_by_names(["member1", "member2"])
    assert sorted(m.username for m in members) == ["member1", "member2"]

    assert repo.find_by_names([]) == []


def test_return_types(db):
    member1, *_ = save_members(db, ("member1", 20), ("member2", 30))
    repo = MemberRepository(db)

    # 컬렉션: 결과가 없어도 빈 리스트
    assert repo.find_by_username("member1") == [member1]
    assert repo.find_by_username("nobody") == []

    # 단건: 결과가 없으면 None
    assert repo.find_member_by_username("member1") is member1
    assert repo.find_member_by_username("nobody") is None


def test_single_result_with_duplicates_raises(db):
    save_members(db, ("member1", 20), ("member1", 30))

    with pytest.raises(IncorrectResultSizeError):
        MemberRepository(db).find_member_by_username("member1")


def test_paging(db):
    save_members(
        db,
        ("member1", 18),
        ("member2", 10),
        ("member3", 10),
        ("member4", 10),
        ("member5", 10),
        ("member6", 20),
    )
    repo = MemberRepository(db)

    # 페이지는 0부터 시작
    page_request = PageRequest.of(0, 3, Sort.by("username", direction=Direction.DESC))

    page = repo.find_by_age(10, page_request)

    assert [m.username for m in page.content] == ["member5", "member4", "member3"]
    assert len(page.content) == 3
    assert page.total_elements == 4
    assert page.number == 0
    assert page.total_pages == 2
    assert page.is_first
    assert page.has_next
    assert not page.is_last

    dto_page = page.map(MemberDto.from_member)
    assert [d.team_name for d in dto_page] == ["", "", ""]
    assert dto_page.total_elements == 4

    last = repo.find_by_age(10, page_request.next())
    assert [m.username for m in last.content] == ["member2"]
    assert last.total_elements == 4
    assert last.is_last
    assert not last.has_next
    assert last.has_previous


def test_paging_unknown_sort_property(db):
    with pytest.raises(PropertyReferenceError):
        MemberRepository(db).find_by_age(10, PageRequest.of(0, 3, Sort.by("nickname")))


def test_slice_has_no_total_but_knows_next(db):
    save_members(db, ("member1", 10), ("member2", 10), ("member3", 10), ("member4", 10))
    repo = MemberRepository(db)

    page_request = PageRequest.of(0, 3, Sort.by("username"))
    first = repo.find_slice_by_age(10, page_request)

    assert [m.username for m in first] == ["member1", "member2", "member3"]
    assert first.has_next
    assert not hasattr(first, "total_elements")

    second = repo.find_slice_by_age(10, page_request.next())
    assert [m.username for m in second] == ["member4"]
    assert not second.has_next


def test_bulk_update_clears_session(db):
    save_members(
        db,
        ("member1", 10),
        ("member2", 15),
        ("member3", 20),
        ("member4", 25),
        ("member5", 30),
        ("member6", 35),
    )
    repo = MemberRepository(db)

    result = repo.bulk_age_plus(20)

    assert result == 4
    member5 = repo.find_member_by_username("member5")
    assert member5.age == 31


def test_bulk_update_without_clear_leaves_stale_state(db):
    (member,) = save_members(db, ("member5", 30))
    repo = MemberRepository(db)

    result = repo.bulk_age_plus(20, clear_automatically=False)

    assert result == 1
    # 영속성 컨텍스트는 벌크 수정을 모른다
    assert repo.find_member_by_username("member5").age == 30

    db.refresh(member)
    assert member.age == 31


def test_lazy_loading_issues_query_per_team(db):
    setup_two_teams(db)
    repo = MemberRepository(db)

    with capture_sql(db) as statements:
        members = repo.find_member_custom()
        names = sorted(m.team.name for m in members)

    assert names == ["teamA", "teamB"]
    # member 조회 1번 + team 지연 로딩 2번 (N+1)
    assert len(statements) == 3


def test_fetch_join_loads_team_in_one_query(db):
    setup_two_teams(db)
    repo = MemberRepository(db)

    with capture_sql(db) as statements:
        members = repo.find_member_fetch_join()
        names = sorted(m.team.name for m in members)

    assert names == ["teamA", "teamB"]
    assert len(statements) == 1


@pytest.mark.parametrize(
    "finder",
    [
        lambda repo: repo.find_all(),
        lambda repo: repo.find_member_with_entity_graph(),
        lambda repo: repo.find_entity_graph_by_username("member1") + repo.find_entity_graph_by_username("member2"),
    ],
)
def test_entity_graph_loads_team_eagerly(db, finder):
    setup_two_teams(db)
    repo = MemberRepository(db)

    members = finder(repo)

    with capture_sql(db) as statements:
        names = sorted(m.team.name for m in members)

    assert names == ["teamA", "teamB"]
    assert statements == []


def test_read_only_query_is_not_flushed(db):
    save_members(db, ("member2", 35))
    db.flush()
    db.expunge_all()
    repo = MemberRepository(db)

    member = repo.find_read_only_by_username("member2")
    member.change_username("member123123")
    db.flush()

    assert member not in db
    assert repo.find_by_username("member123123") == []
    assert repo.find_member_by_username("member2").username == "member2"


def test_read_only_query_keeps_pending_changes_of_managed_member(db, session_factory):
    (member,) = save_members(db, ("member1", 10))
    repo = MemberRepository(db)

    # flush 하지 않은 변경이 있는 상태에서 읽기 전용 조회
    member.age = 99
    found = repo.find_read_only_by_username("member1")

    assert found is member
    assert member in db
    db.commit()

    other = session_factory()
    try:
        assert MemberRepository(other).find_member_by_username("member1").age == 99
    finally:
        other.close()


def test_lock(db):
    save_members(db, ("member2", 35))
    db.flush()
    db.expunge_all()
    repo = MemberRepository(db)

    with capture_sql(db) as statements:
        members = repo.find_lock_by_username("member2")

    assert len(members) == 1
    assert members[0].age == 35
    if db.get_bind().dialect.name != "sqlite":
        assert "FOR UPDATE" in statements[0].upper()


def test_projection_selects_only_needed_columns(db):
    save_team_with_members(db, "teamA")
    save_members(db, ("userA", 10), ("userB", 10))
    db.flush()
    db.expunge_all()
    repo = MemberRepository(db)

    with capture_sql(db) as statements:
        result = repo.find_projections_by_username("userA", UsernameOnly)

    assert result == [UsernameOnly(username="userA")]
    assert len(statements) == 1
    assert "username" in statements[0]
    assert "age" not in statements[0]


def test_nested_projection(db):
    save_team_with_members(db, "teamA", ("userA", 10))
    save_members(db, ("userB", 10))
    db.flush()
    db.expunge_all()

    result = MemberRepository(db).find_projections_by_username("userA", NestedClosedProjection)

    assert len(result) == 1
    assert result[0].username == "userA"
    assert result[0].team.name == "teamA"


def test_nested_projection_without_team(db):
    save_members(db, ("userB", 10))

    result = MemberRepository(db).find_projections_by_username("userB", NestedClosedProjection)

    assert result[0].username == "userB"
    assert result[0].team is None


def test_projection_with_unknown_field(db):
    save_members(db, ("userA", 10))

    # team_name은 Member 컬럼도 연관관계도 아니다
    with pytest.raises(PropertyReferenceError) as exc:
        MemberRepository(db).find_projections_by_username("userA", MemberProjection)
    assert exc.value.prop == "team_name"


def test_native_query(db):
    member1, _ = save_members(db, ("member1", 10), ("member2", 20))
    repo = MemberRepository(db)

    found = repo.find_by_native_query("member1")

    assert found is member1
    assert repo.find_by_native_query("nobody") is None


def test_native_projection_paging(db):
    save_team_with_members(db, "teamA", ("member1", 10), ("member2", 20))
    save_members(db, ("member3", 30))
    repo = MemberRepository(db)

    page = repo.find_by_native_projection(PageRequest.of(0, 2, Sort.by("username")))

    assert [p.username for p in page.content] == ["member1", "member2"]
    assert [p.team_name for p in page.content] == ["teamA", "teamA"]
    assert page.total_elements == 3
    assert page.total_pages == 2

    last = repo.find_by_native_projection(PageRequest.of(1, 2, Sort.by("username")))
    assert [(p.username, p.team_name) for p in last.content] == [("member3", None)]

    with pytest.raises(PropertyReferenceError):
        repo.find_by_native_projection(PageRequest.of(0, 2, Sort.by("age")))


def test_find_member_custom(db):
    save_members(db, ("member1", 10), ("member2", 20))

    members = MemberRepository(db).find_member_custom()

    assert sorted(m.username for m in members) == ["member1", "member2"]
