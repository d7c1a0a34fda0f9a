"""
exceptions.py

데이터 접근 계층(Repository)에서 발생시키는 예외 모음.

리포지토리와 서비스는 HTTP를 모르기 때문에 HTTPException 대신
이 예외들을 던지고, HTTP 상태 코드 변환은 app.main의 예외 핸들러가 담당한다.

- EntityNotFoundError      : 식별자로 조회했는데 row가 없음 (404)
- IncorrectResultSizeError : 단건 조회인데 결과가 2건 이상 (500)
- PropertyReferenceError   : 존재하지 않는 속성으로 정렬 요청 (400)

"""


class DataAccessError(Exception):
    """리포지토리 예외의 공통 부모"""


class EntityNotFoundError(DataAccessError):
    def __init__(self, entity: str, entity_id) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: id={entity_id}")


class IncorrectResultSizeError(DataAccessError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Incorrect result size: expected {expected}, actual {actual}")


class PropertyReferenceError(DataAccessError):
    def __init__(self, prop: str, entity: str) -> None:
        self.prop = prop
        self.entity = entity
        super().__init__(f"No property '{prop}' found for type '{entity}'")
