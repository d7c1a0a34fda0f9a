"""
member_repository_custom.py

MemberRepository에 직접 구현한 쿼리를 붙이기 위한 사용자 정의 리포지토리.

공통 리포지토리(JpaRepository)가 제공하지 않는 쿼리를
세션을 직접 사용해서 구현하고 싶을 때 여기에 추가한다.
MemberRepository는 이 클래스를 함께 상속받는다.

"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.member import Member


class MemberRepositoryCustom:
    db: Session

    def find_member_custom(self) -> list[Member]:
        return list(self.db.scalars(select(Member)).all())
