"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

이 파일은 .env 환경 변수들을 Pydantic BaseSettings를 통해 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보 (SQL 로그 출력 여부 포함)
- 로그 레벨
- 페이징 기본값 (기본 페이지 크기, 최대 페이지 크기, 1부터 시작 여부)
- 기동 시 스키마 생성 / 샘플 회원 데이터 생성 여부
- CORS 허용 도메인 목록

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 로컬 / 테스트 / 운영 환경을 .env로 분리하여 관리
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- app.main               : CORS, 로깅, 기동 시 초기화에 사용
- app.core.deps          : 페이징 파라미터 기본값 사용
- app.db.session         : DATABASE_URL / SQL_ECHO 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


# .env 파일에 정의된 환경 변수를 로드하는 설정 클래스
# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str = "sqlite:///./datajpa.db"
    TEST_DATABASE_URL: str | None = None

    # True이면 실행되는 SQL을 로그로 출력
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # 페이징 옵션
    # - DEFAULT_PAGE_SIZE: size 파라미터가 없거나 잘못된 경우 사용
    # - MAX_PAGE_SIZE: 이보다 큰 size 요청은 잘라낸다
    # - PAGE_ONE_INDEXED: True이면 page 파라미터를 1부터 받는다
    DEFAULT_PAGE_SIZE: int = 5
    MAX_PAGE_SIZE: int = 2000
    PAGE_ONE_INDEXED: bool = False

    # 기동 옵션
    # - DB_CREATE_ALL: 앱 기동 시 테이블 생성 (로컬 SQLite 개발용, 운영은 alembic)
    # - INIT_MEMBERS: 앱 기동 시 샘플 회원 100명 생성
    DB_CREATE_ALL: bool = False
    INIT_MEMBERS: bool = False

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
# 실행 시 한 번만 생성됨
settings = Settings()
