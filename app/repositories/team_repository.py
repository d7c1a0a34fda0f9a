from app.models.team import Team
from app.repositories.base import JpaRepository


class TeamRepository(JpaRepository[Team, int]):
    model = Team
