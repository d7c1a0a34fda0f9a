"""
base.py

모든 ORM 모델(Member, Team, Item)이 상속받는 Base 클래스.

테이블 메타데이터는 이 Base 하나로 관리되며,
테스트 스키마 생성(create_all)과 alembic 마이그레이션이 같은 이름 규칙을 쓰도록
제약조건 / 인덱스 이름 규칙(naming_convention)을 여기서 정한다.

    ix_member_username, fk_member_team_no_team, pk_member ...

"""

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))
