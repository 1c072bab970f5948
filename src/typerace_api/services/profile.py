from logging import getLogger

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..repositories.game_result import GameResultRepo
from ..repositories.user import UserRepo
from ..types.common import GameResultInfo, UserInfo
from .base import ServiceRet

logger = getLogger(__name__)


class ProfileService:
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def get_user(self, user_id: str, username: str) -> ServiceRet[UserInfo]:
        """
        the signed in user with lifetime statistics, registered on first visit
        """
        logger.debug("user_id: %s", user_id)

        async with self._sessionmaker() as session:
            user = await UserRepo(session).register(id=user_id, name=username)
            data = UserInfo.from_db(user)
            await session.commit()

        return ServiceRet(ok=True, data=data)

    async def history(
        self, user_id: str, size: int
    ) -> ServiceRet[list[GameResultInfo]]:
        logger.debug("user_id: %s, size: %s", user_id, size)

        async with self._sessionmaker() as session:
            results = await GameResultRepo(session).get_last_n_games(
                user_id=user_id, size=size
            )
            return ServiceRet(
                ok=True, data=[GameResultInfo.from_db(r) for r in results]
            )
