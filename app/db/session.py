"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

이 파일은 SQLAlchemy Engine과 SessionLocal을 생성하여
애플리케이션 전반에서 공통으로 사용하는 DB 연결을 관리한다.

FastAPI 의존성(get_db)을 통해
요청 단위로 세션(= 영속성 컨텍스트)을 생성/종료하는 구조를 지원한다.

설계 원칙:
- DB 연결 설정은 한 곳에서만 정의
- 세션 생성/종료 책임을 명확히 분리
- pool_pre_ping=True로 유휴 연결 오류 방지
- autoflush=False: flush 시점은 리포지토리가 명시적으로 결정

관련 파일:
- app.core.config        : DATABASE_URL / SQL_ECHO 설정
- app.core.deps          : get_db 의존성
- app.db.auditing        : flush 직전 감사(Auditing) 필드 채우기

"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def make_engine(url: str, *, echo: bool = False):
    # SQLite는 TestClient 등 다른 스레드에서 같은 커넥션을 쓰기 때문에 check_same_thread 해제
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


# SQLAlchemy Engine 생성
engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

# 요청 단위로 사용할 세션 팩토리
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
