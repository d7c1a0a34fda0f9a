# tests/helpers.py
from contextlib import contextmanager

from sqlalchemy import event
from sqlalchemy.orm import Session

from app.models.member import Member
from app.models.team import Team
from app.repositories.member_repository import MemberRepository
from app.repositories.team_repository import TeamRepository


def save_members(db: Session, *members: tuple[str, int]) -> list[Member]:
    """(username, age) 목록으로 팀 없는 회원 여러 명 저장"""
    repo = MemberRepository(db)
    return [repo.save(Member(username=username, age=age)) for username, age in members]


def save_team_with_members(db: Session, team_name: str, *members: tuple[str, int]) -> Team:
    team = TeamRepository(db).save(Team(name=team_name))
    repo = MemberRepository(db)
    for username, age in members:
        repo.save(Member(username=username, age=age, team=team))
    return team


def setup_two_teams(db: Session) -> None:
    """teamA(member1, 30) / teamB(member2, 35) 저장 후 영속성 컨텍스트 초기화"""
    save_team_with_members(db, "teamA", ("member1", 30))
    save_team_with_members(db, "teamB", ("member2", 35))
    db.flush()
    db.expunge_all()


@contextmanager
def capture_sql(db: Session):
    """블록 안에서 실행된 SQL 문자열 목록을 모은다 (N+1 쿼리 확인용)"""
    statements: list[str] = []

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    bind = db.get_bind()
    event.listen(bind, "before_cursor_execute", _before_cursor_execute)
    try:
        yield statements
    finally:
        event.remove(bind, "before_cursor_execute", _before_cursor_execute)
