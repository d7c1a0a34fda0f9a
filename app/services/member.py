"""
services/member.py

회원(Member) 관련 서비스 함수 모음.

주요 기능:
- 샘플 회원 데이터 생성 (페이징 API 확인용)

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어(commit)는 호출 측에서 수행

관련 파일:
- app.main                : INIT_MEMBERS 설정 시 기동 시점에 호출
- scripts/init_members.py : 수동 실행 스크립트

"""

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.member import Member
from app.repositories.member_repository import MemberRepository

logger = get_logger(__name__)


"""
샘플 회원 생성

- member0 ~ member{count-1}, 나이는 순번과 동일
- 생성된 회원 수 반환

NOTE:
- db.commit()은 호출 측에서 수행

"""
def init_members(db: Session, count: int = 100) -> int:
    repo = MemberRepository(db)
    repo.save_all(Member(username=f"member{i}", age=i) for i in range(count))
    logger.info("initialized %d sample members", count)
    return count
