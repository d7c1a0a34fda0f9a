"""
member.py

회원(Member) 모델 정의 파일.

- team 은 다대일(N:1) 지연 로딩(lazy="select") 연관관계이며 연관관계의 주인이다.
  Member 조회 시점에는 Team을 가져오지 않고, member.team 에 처음 접근할 때 조회한다.
- version 컬럼으로 낙관적 락(Optimistic Lock)을 적용한다.
  다른 트랜잭션이 먼저 수정한 row를 수정하려 하면 flush 시 StaleDataError가 발생한다.
- 생성/수정 시각과 생성/수정자는 BaseEntity 감사 필드로 자동 기록된다.

"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.base_entity import BaseEntity
from app.models.team import Team


class Member(BaseEntity, Base):
    __tablename__ = "member"

    id: Mapped[int] = mapped_column("member_id", primary_key=True, autoincrement=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    team_id: Mapped[int | None] = mapped_column("team_no", ForeignKey("team.team_no"), nullable=True)
    team: Mapped[Team | None] = relationship(back_populates="members", lazy="select")

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __init__(self, username: str | None = None, age: int = 0, team: Team | None = None):
        self.username = username
        self.age = age
        if team is not None:
            self.team = team

    def change_username(self, username: str) -> None:
        self.username = username

    # back_populates 덕분에 team.members 에도 자동으로 추가된다
    def change_team(self, team: Team) -> None:
        self.team = team

    # 연관관계 필드(team)는 출력하지 않는다 (지연 로딩 / 순환 참조 방지)
    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, username={self.username!r}, age={self.age!r})"
