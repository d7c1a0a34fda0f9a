"""
team.py

팀(Team) 모델 정의 파일.

members는 연관관계의 주인이 아닌 반대편(inverse side)이다.
외래 키(team_no)는 member 테이블이 가지고 있고,
이 컬렉션은 Member.team 변경을 통해서만 채워진다.

"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.member import Member


class Team(Base):
    __tablename__ = "team"

    id: Mapped[int] = mapped_column("team_no", primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    members: Mapped[list["Member"]] = relationship(back_populates="team")

    def __init__(self, name: str | None = None):
        self.name = name

    # 연관관계 필드(members)는 출력하지 않는다 (순환 참조 방지)
    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, name={self.name!r})"
