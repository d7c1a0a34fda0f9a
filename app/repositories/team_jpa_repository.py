"""
team_jpa_repository.py

세션만 사용해서 직접 작성한 팀 리포지토리.
수정은 변경 감지(dirty checking)로 처리되므로 update 메서드는 없다.

"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.team import Team


class TeamJpaRepository:

    def __init__(self, db: Session) -> None:
        self.db = db

    def save(self, team: Team) -> Team:
        self.db.add(team)
        self.db.flush()
        return team

    def delete(self, team: Team) -> None:
        self.db.delete(team)
        self.db.flush()

    def find_by_id(self, team_id: int) -> Team | None:
        return self.db.get(Team, team_id)

    def find_all(self) -> list[Team]:
        return list(self.db.scalars(select(Team)).all())

    def count(self) -> int:
        return self.db.scalar(select(func.count(Team.id))) or 0
