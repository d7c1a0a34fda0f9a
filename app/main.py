"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

이 파일은 서버 실행 시 가장 먼저 로드되며,
애플리케이션 전반의 설정과 라우터 등록을 담당한다.

주요 역할:
- 로깅 설정
- FastAPI 앱 인스턴스 생성 및 기동 시 초기화 (스키마 생성 / 샘플 데이터)
- CORS 미들웨어, 등록자/수정자(X-Auditor) 미들웨어 설정
- 리포지토리 예외 -> HTTP 상태 코드 변환
- 회원 라우터 등록
- 헬스 체크 및 DB 연결 상태 확인용 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 실제 기능은 routers / repositories / services 계층에 위임

관련 파일:
- app.core.config        : 환경 변수 및 설정 로드
- app.core.deps          : DB 세션 의존성
- app.core.exceptions    : 리포지토리 예외
- app.db.auditing        : 감사(Auditing) 필드 자동 기록
- app.routers.members    : 회원 API

"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy import text

from app.core.config import settings
from app.core.deps import get_db
from app.core.exceptions import EntityNotFoundError, IncorrectResultSizeError, PropertyReferenceError
from app.core.logging import get_logger, setup_logging
from app.db.auditing import reset_current_auditor, set_current_auditor
from app.db.base import Base
from app.models import item, member, team  # noqa: F401  (Base.metadata에 테이블 등록)
from app.db.session import SessionLocal, engine
from app.routers import members
from app.services.member import init_members

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.DB_CREATE_ALL:
        Base.metadata.create_all(bind=engine)
        logger.info("database schema created")

    if settings.INIT_MEMBERS:
        db = SessionLocal()
        try:
            init_members(db)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
    yield


app = FastAPI(title="Data JPA Study", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 요청 헤더 X-Auditor 값을 등록자/수정자로 사용 (없으면 임의의 UUID)
@app.middleware("http")
async def auditor_middleware(request: Request, call_next):
    token = set_current_auditor(request.headers.get("X-Auditor"))
    try:
        return await call_next(request)
    finally:
        reset_current_auditor(token)


@app.exception_handler(EntityNotFoundError)
def entity_not_found_handler(request: Request, exc: EntityNotFoundError):
    return JSONResponse(status_code=404, content={"detail": f"{exc.entity} not found"})


@app.exception_handler(PropertyReferenceError)
def property_reference_handler(request: Request, exc: PropertyReferenceError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(IncorrectResultSizeError)
def incorrect_result_size_handler(request: Request, exc: IncorrectResultSizeError):
    logger.error("incorrect result size on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# 낙관적 락 충돌: 다른 트랜잭션이 먼저 수정함
@app.exception_handler(StaleDataError)
def stale_data_handler(request: Request, exc: StaleDataError):
    logger.warning("optimistic lock conflict on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=409, content={"detail": "Resource was modified by another transaction"})


app.include_router(members.router)


# 프로세스 생존 확인용 (DB 연결 여부와 무관)
@app.get("/health")
def health():
    return {"status": "ok"}


"""
DB 연결 확인

- 요청마다 세션을 받아 SELECT 1 실행
- 프로세스는 살아 있지만 DB에 붙지 못하는 상황을 /health 와 구분한다

"""
@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    return {"db": "ok", "value": db.scalar(text("SELECT 1"))}
