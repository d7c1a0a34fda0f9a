"""
base_entity.py

감사(Auditing) 필드를 제공하는 공통 매핑 믹스인.

- BaseTimeEntity : 생성 시각 / 최종 수정 시각
- BaseEntity     : BaseTimeEntity + 생성자 / 최종 수정자

값은 직접 넣지 않고 app.db.auditing의 before_flush 리스너가 채운다.
리스너는 이 모듈이 import 될 때 함께 등록된다.

"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column


class BaseTimeEntity:
    created_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_modified_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class BaseEntity(BaseTimeEntity):
    created_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    last_modified_by: Mapped[str | None] = mapped_column(String(64), nullable=True)


# 믹스인을 쓰는 모델을 import 하면 감사 필드 리스너도 함께 등록된다
import app.db.auditing  # noqa: E402,F401
