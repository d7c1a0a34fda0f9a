"""
item.py

식별자를 직접 할당하는 Item 모델.

id가 자동 생성되지 않기 때문에 "id가 비어 있으면 새 엔티티"라는
기본 판단을 쓸 수 없다. 대신 created_date가 비어 있는지로 새 엔티티를 판단한다.
(JpaRepository.save 가 is_new()를 보고 insert / merge를 결정)

"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.base_entity import BaseTimeEntity


class Item(BaseTimeEntity, Base):
    __tablename__ = "item"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    def __init__(self, id: str):
        self.id = id

    def is_new(self) -> bool:
        return self.created_date is None

    def __repr__(self) -> str:
        return f"Item(id={self.id!r})"
