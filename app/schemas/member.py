from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.models.member import Member


# DTO는 엔티티를 알아도 되지만, 엔티티는 DTO를 모르게 유지한다
class MemberDto(BaseModel):
    id: int | None = None
    username: str | None = None
    team_name: str | None = None

    @classmethod
    def from_member(cls, member: Member) -> "MemberDto":
        return cls(
            id=member.id,
            username=member.username,
            team_name=member.team.name if member.team is not None else "",
        )


class TeamSummary(BaseModel):
    id: int
    name: str | None

    model_config = ConfigDict(from_attributes=True)


# 단건 조회 응답 (연관된 team은 요약 정보만)
class MemberResponse(BaseModel):
    id: int
    username: str | None
    age: int
    team: TeamSummary | None = None
    created_date: datetime
    last_modified_date: datetime
    created_by: str | None = None
    last_modified_by: str | None = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Projection
# 필요한 필드만 조회하기 위한 타입. 필드가 전부 Member 컬럼이면 해당 컬럼만 SELECT 한다.
# ---------------------------------------------------------------------------

class UsernameOnly(BaseModel):
    username: str | None

    model_config = ConfigDict(from_attributes=True)


class TeamNameOnly(BaseModel):
    name: str | None

    model_config = ConfigDict(from_attributes=True)


# 중첩 projection: 루트(member)는 username만, team은 엔티티를 통째로 조회한 뒤 name만 노출
class NestedClosedProjection(BaseModel):
    username: str | None
    team: TeamNameOnly | None = None

    model_config = ConfigDict(from_attributes=True)


# 네이티브 쿼리 결과 매핑용
class MemberProjection(BaseModel):
    id: int
    username: str | None
    team_name: str | None = None
