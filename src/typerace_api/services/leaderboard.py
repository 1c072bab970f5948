from logging import getLogger

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..repositories.user import UserRepo
from ..types.common import UserInfo
from .base import ServiceRet

logger = getLogger(__name__)


class LeaderboardService:
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def get_leaderboard(self, limit: int) -> ServiceRet[list[UserInfo]]:
        """
        users with at least one game, best wpm first, ties by user id
        """
        logger.debug("limit: %s", limit)

        async with self._sessionmaker() as session:
            users = await UserRepo(session).get_leaderboard(limit=limit)
            return ServiceRet(ok=True, data=[UserInfo.from_db(u) for u in users])
