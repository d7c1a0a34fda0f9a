"""

Member / Team 엔티티 테스트.
- 지연 로딩: member만 조회한 시점에는 team이 로딩되지 않고, 접근할 때 조회된다.
- 양방향 연관관계: change_team 시 team.members 에도 반영된다.
- 감사 필드(생성/수정 시각, 생성/수정자) 자동 기록과 version 증가를 확인한다.

"""

import os
import subprocess
import sys
import textwrap
import uuid
from pathlib import Path

from sqlalchemy import inspect, select

from app.db.auditing import auditor_context
from app.models.member import Member
from app.models.team import Team
from app.repositories.member_repository import MemberRepository

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def test_entity_team_is_lazy_loaded(db):
    team_a = Team("TeamA")
    team_b = Team("TeamB")
    db.add_all([team_a, team_b])

    db.add(Member(username="memberA", age=10, team=team_a))
    db.add(Member(username="memberB", age=20, team=team_b))

    db.flush()
    db.expunge_all()

    members = db.scalars(select(Member).order_by(Member.username)).all()
    assert [m.username for m in members] == ["memberA", "memberB"]

    for m in members:
        assert "team" in inspect(m).unloaded

    assert [m.team.name for m in members] == ["TeamA", "TeamB"]
    assert all("team" not in inspect(m).unloaded for m in members)


def test_change_team_updates_inverse_collection(db):
    team_a = Team("TeamA")
    team_b = Team("TeamB")
    member = Member(username="memberA", age=10, team=team_a)
    db.add_all([team_a, team_b, member])
    db.flush()

    member.change_team(team_b)
    db.flush()

    assert member.team is team_b
    assert member in team_b.members
    assert member not in team_a.members
    assert member.team_id == team_b.id


def test_member_without_team(db):
    member = MemberRepository(db).save(Member(username="memberA"))

    assert member.team is None
    assert member.age == 0


def test_repr_does_not_include_association(db):
    team = Team("TeamA")
    member = Member(username="memberA", age=10, team=team)
    db.add_all([team, member])
    db.flush()

    assert repr(member) == f"Member(id={member.id!r}, username='memberA', age=10)"
    assert repr(team) == f"Team(id={team.id!r}, name='TeamA')"


def test_auditing_fields_on_insert_and_update(db):
    repo = MemberRepository(db)

    with auditor_context("alice"):
        member = repo.save(Member(username="memberA", age=20))

    assert member.created_by == "alice"
    assert member.last_modified_by == "alice"
    assert member.created_date is not None
    assert member.created_date == member.last_modified_date
    created_date = member.created_date

    with auditor_context("bob"):
        member.change_username("memberAAA")
        db.flush()

    assert member.created_by == "alice"
    assert member.last_modified_by == "bob"
    assert member.created_date == created_date
    assert member.last_modified_date >= created_date

    db.expunge_all()
    found = repo.find_by_id(member.id)
    assert found.username == "memberAAA"
    assert found.last_modified_by == "bob"


def test_auditor_defaults_to_random_uuid(db):
    member = MemberRepository(db).save(Member(username="memberA"))

    uuid.UUID(member.created_by)


def test_version_increases_on_update(db):
    member = MemberRepository(db).save(Member(username="memberA", age=10))
    assert member.version == 1

    member.change_username("memberB")
    db.flush()

    assert member.version == 2


def test_auditing_listener_registered_with_models():
    # 새 인터프리터에서 모델/리포지토리만 import 해도 감사 필드가 채워져야 한다
    code = textwrap.dedent(
        """
        from sqlalchemy import create_engine
        from sqlalchemy.orm import Session

        from app.db.base import Base
        from app.models.member import Member
        from app.repositories.member_repository import MemberRepository

        engine = create_engine("sqlite://")
        Base.metadata.create_all(engine)
        with Session(engine) as db:
            member = MemberRepository(db).save(Member(username="memberA"))
            print(member.created_date is not None, member.created_by is not None)
        """
    )
    env = {**os.environ, "PYTHONPATH": str(PROJECT_ROOT)}
    result = subprocess.run(
        [sys.executable, "-c", code],
        cwd=PROJECT_ROOT,
        env=env,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.split() == ["True", "True"]
