from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..orm.game_result import GameResult


class GameResultRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_last_n_games(self, user_id: str, size: int = 10) -> list[GameResult]:
        """
        Returns:
            - A list of game result ordered in descent on 'created_at'
        """
        query = (
            select(GameResult)
            .where(GameResult.user_id == user_id)
            .order_by(GameResult.created_at.desc())
            .limit(size)
        )
        ret = await self._session.scalars(query)
        return list(ret)

    async def create(
        self,
        room_id: str,
        user_id: str,
        wpm: int,
        accuracy: float,
        placement: int,
        characters_typed: int,
        errors: int,
        duration: int,
    ) -> GameResult:
        query = (
            insert(GameResult)
            .values(
                {
                    "room_id": room_id,
                    "user_id": user_id,
                    "wpm": wpm,
                    "accuracy": accuracy,
                    "placement": placement,
                    "characters_typed": characters_typed,
                    "errors": errors,
                    "duration": duration,
                }
            )
            .returning(GameResult)
        )

        ret = await self._session.scalar(query)
        assert ret
        return ret
