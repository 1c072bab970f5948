from sqlalchemy import insert, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from ..orm.base import utc_now
from ..orm.user import User


class UserRepo:

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def register(self, id: str, name: str) -> User:
        """
        Create the user on first sight, keep the display name in sync afterwards.
        """
        user = await self.get(id)
        if user is None:
            query = (
                insert(User)
                .values(
                    {
                        "id": id,
                        "name": name,
                    }
                )
                .returning(User)
            )
            user = await self._session.scalar(query)

        elif user.name != name:
            query = (
                update(User)
                .where(User.id == id)
                .values({"name": name, "updated_at": utc_now()})
                .returning(User)
            )
            user = await self._session.scalar(query)

        assert user
        return user

    async def get(self, id: str, lock: bool = False) -> User | None:
        query = select(User).where(User.id == id)
        if lock:
            query = query.with_for_update().execution_options(populate_existing=True)
        return await self._session.scalar(query)

    async def update_stats(
        self, id: str, wpm: int, accuracy: float, won: bool
    ) -> User | None:
        """
        Fold one finished game into the lifetime statistics.
        """
        user = await self.get(id, lock=True)
        if user is None:
            return None

        games_played = user.games_played + 1
        query = (
            update(User)
            .where(User.id == id)
            .values(
                {
                    "games_played": games_played,
                    "games_won": user.games_won + 1 if won else user.games_won,
                    "average_wpm": round(
                        (user.average_wpm * user.games_played + wpm) / games_played
                    ),
                    "average_accuracy": (
                        user.average_accuracy * user.games_played + accuracy
                    )
                    / games_played,
                    "best_wpm": max(user.best_wpm, wpm),
                    "updated_at": utc_now(),
                }
            )
            .returning(User)
        )
        return await self._session.scalar(query)

    async def get_leaderboard(self, limit: int = 10) -> list[User]:
        """
        Returns:
            - users that played at least once, best wpm first
        """
        query = (
            select(User)
            .where(User.games_played > 0)
            .order_by(User.best_wpm.desc(), User.id)
            .limit(limit)
        )
        ret = await self._session.scalars(query)
        return list(ret)
