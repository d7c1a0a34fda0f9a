"""
member_jpa_repository.py

세션만 사용해서 직접 작성한 회원 리포지토리.

공통 리포지토리(JpaRepository) 없이 같은 기능을 손으로 구현하면
어떤 코드가 반복되는지 비교하기 위한 구현이다.
수정은 변경 감지(dirty checking)로 처리되므로 update 메서드는 없다.

"""

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.models.member import Member


class MemberJpaRepository:

    def __init__(self, db: Session) -> None:
        self.db = db

    def save(self, member: Member) -> Member:
        self.db.add(member)
        self.db.flush()
        return member

    def delete(self, member: Member) -> None:
        self.db.delete(member)
        self.db.flush()

    def find_all(self) -> list[Member]:
        return list(self.db.scalars(select(Member)).all())

    def find_by_id(self, member_id: int) -> Member | None:
        return self.db.get(Member, member_id)

    def count(self) -> int:
        return self.db.scalar(select(func.count(Member.id))) or 0

    def find(self, member_id: int) -> Member | None:
        return self.db.get(Member, member_id)

    def find_by_username_and_age_greater_than(self, username: str, age: int) -> list[Member]:
        return list(
            self.db.scalars(select(Member).where(Member.username == username, Member.age > age)).all()
        )

    # offset / limit 을 직접 받는 페이징 (username 내림차순)
    def find_by_page(self, age: int, offset: int, limit: int) -> list[Member]:
        stmt = (
            select(Member)
            .where(Member.age == age)
            .order_by(Member.username.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.scalars(stmt).all())

    def total_count(self, age: int) -> int:
        return self.db.scalar(select(func.count(Member.id)).where(Member.age == age)) or 0

    def bulk_age_plus(self, age: int) -> int:
        self.db.flush()
        result = self.db.execute(
            update(Member)
            .where(Member.age >= age)
            .values(age=Member.age + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
