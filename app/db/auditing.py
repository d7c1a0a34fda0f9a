"""
auditing.py

엔티티 감사(Auditing) 필드 자동 기록.

Session의 before_flush 이벤트에서
새로 추가된 엔티티에는 생성/수정 시각과 생성/수정자를,
변경된 엔티티에는 수정 시각과 수정자를 채운다.

등록자/수정자(auditor)는
- auditor_context() 또는 요청 헤더(X-Auditor)로 지정된 값
- 지정된 값이 없으면 임의의 UUID 문자열
을 사용한다.

관련 파일:
- app.models.base_entity : BaseTimeEntity / BaseEntity 필드 정의
- app.main               : X-Auditor 헤더를 읽는 미들웨어

"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.orm import Session

from app.models.base_entity import BaseEntity, BaseTimeEntity


_current_auditor: ContextVar[str | None] = ContextVar("current_auditor", default=None)


def current_auditor() -> str:
    return _current_auditor.get() or str(uuid.uuid4())


def set_current_auditor(auditor: str | None):
    return _current_auditor.set(auditor)


def reset_current_auditor(token) -> None:
    _current_auditor.reset(token)


@contextmanager
def auditor_context(auditor: str):
    token = set_current_auditor(auditor)
    try:
        yield
    finally:
        reset_current_auditor(token)


@event.listens_for(Session, "before_flush")
def _fill_audit_fields(session: Session, flush_context, instances) -> None:
    now = datetime.now(timezone.utc)

    for obj in session.new:
        if not isinstance(obj, BaseTimeEntity):
            continue
        obj.created_date = now
        obj.last_modified_date = now
        if isinstance(obj, BaseEntity):
            auditor = current_auditor()
            obj.created_by = auditor
            obj.last_modified_by = auditor

    for obj in session.dirty:
        if not isinstance(obj, BaseTimeEntity):
            continue
        # 관계 컬렉션만 바뀐 경우는 제외
        if not session.is_modified(obj, include_collections=False):
            continue
        obj.last_modified_date = now
        if isinstance(obj, BaseEntity):
            obj.last_modified_by = current_auditor()
