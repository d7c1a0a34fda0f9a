"""
repositories/base.py

공통 CRUD 리포지토리(JpaRepository).

모든 엔티티 리포지토리가 상속받는 제네릭 리포지토리로,
저장 / 단건 조회 / 목록 조회 / 페이징 / 카운트 / 삭제를 제공한다.

    class TeamRepository(JpaRepository[Team, int]):
        model = Team

설계 원칙:
- HTTP / FastAPI 의존성 없음 (예외는 app.core.exceptions 사용)
- 세션(영속성 컨텍스트)은 외부에서 주입받는다
- commit은 호출 측(라우터/서비스/테스트)에서 수행, 리포지토리는 flush까지만
- 같은 세션 안에서는 같은 식별자에 대해 항상 같은 객체를 돌려준다 (identity map)

관련 파일:
- app.repositories.paging  : PageRequest / Page / Sort
- app.repositories.*       : 엔티티별 리포지토리

"""

from typing import Generic, Iterable, TypeVar

from sqlalchemy import delete, func, inspect, select
from sqlalchemy.orm import Session

from app.core.exceptions import EntityNotFoundError
from app.core.logging import get_logger
from app.db.base import Base
from app.repositories.paging import PageRequest, Page, Sort, apply_paging, apply_sort, build_page

ModelType = TypeVar("ModelType", bound=Base)
IdType = TypeVar("IdType")

logger = get_logger(__name__)


class JpaRepository(Generic[ModelType, IdType]):
    model: type[ModelType]

    def __init__(self, db: Session) -> None:
        self.db = db

    """
    새 엔티티인지 판단

    - 엔티티가 is_new()를 제공하면 그 결과를 따른다 (식별자를 직접 할당하는 엔티티)
    - 그렇지 않으면 식별자가 비어 있을 때 새 엔티티로 본다

    """
    def is_new(self, entity: ModelType) -> bool:
        if callable(getattr(entity, "is_new", None)):
            return entity.is_new()
        return all(v is None for v in self._identity(entity))

    def _identity(self, entity: ModelType) -> tuple:
        state = inspect(entity)
        if state.identity is not None:
            return state.identity
        return tuple(inspect(self.model).primary_key_from_instance(entity))

    """
    저장

    - 새 엔티티면 세션에 추가(persist)
    - 이미 존재하는 엔티티면 merge (병합된 영속 객체를 반환)
    - 식별자 생성을 위해 바로 flush

    """
    def save(self, entity: ModelType) -> ModelType:
        if self.is_new(entity):
            self.db.add(entity)
        else:
            entity = self.db.merge(entity)
        self.db.flush()
        logger.debug("saved %r", entity)
        return entity

    def save_all(self, entities: Iterable[ModelType]) -> list[ModelType]:
        return [self.save(e) for e in entities]

    def save_and_flush(self, entity: ModelType) -> ModelType:
        entity = self.save(entity)
        self.flush()
        return entity

    def flush(self) -> None:
        self.db.flush()

    def find_by_id(self, entity_id: IdType) -> ModelType | None:
        return self.db.get(self.model, entity_id)

    # 조회 결과가 없으면 EntityNotFoundError
    def get_by_id(self, entity_id: IdType) -> ModelType:
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.model.__name__, entity_id)
        return entity

    def exists_by_id(self, entity_id: IdType) -> bool:
        return self.find_by_id(entity_id) is not None

    def find_all(self, sort: Sort | None = None) -> list[ModelType]:
        stmt = select(self.model)
        if sort is not None:
            stmt = apply_sort(stmt, self.model, sort)
        return list(self.db.scalars(stmt).all())

    def find_all_by_id(self, ids: Iterable[IdType]) -> list[ModelType]:
        ids = list(ids)
        if not ids:
            return []
        pk = inspect(self.model).primary_key[0]
        return list(self.db.scalars(select(self.model).where(pk.in_(ids))).all())

    def find_all_paged(self, pageable: PageRequest) -> Page[ModelType]:
        stmt = apply_paging(select(self.model), self.model, pageable)
        content = self.db.scalars(stmt).all()
        return build_page(content, pageable, self.count)

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(self.model)) or 0

    """
    삭제

    - 세션에 없는(준영속) 엔티티는 식별자로 다시 조회한 뒤 삭제
    - 이미 DB에서 지워진 엔티티면 아무것도 하지 않는다

    """
    def delete(self, entity: ModelType) -> None:
        if self.is_new(entity):
            return
        if entity not in self.db:
            entity = self.db.get(self.model, self._identity(entity))
            if entity is None:
                return
        self.db.delete(entity)
        self.db.flush()

    def delete_by_id(self, entity_id: IdType) -> None:
        self.delete(self.get_by_id(entity_id))

    def delete_all(self, entities: Iterable[ModelType] | None = None) -> None:
        for entity in list(entities) if entities is not None else self.find_all():
            self.delete(entity)

    """
    벌크 삭제

    - 엔티티를 하나씩 조회하지 않고 DELETE 쿼리 한 번으로 삭제
    - 영속성 컨텍스트는 DB 변경을 모르기 때문에 실행 후 세션을 비운다

    """
    def delete_all_in_batch(self) -> int:
        self.db.flush()
        result = self.db.execute(delete(self.model).execution_options(synchronize_session=False))
        self.db.expunge_all()
        logger.debug("batch deleted %d %s rows", result.rowcount, self.model.__name__)
        return result.rowcount
