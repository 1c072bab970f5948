from datetime import datetime

from sqlalchemy import and_, func, insert, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from sqlalchemy.sql import select

from ..orm.participant import Participant


class ParticipantRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, room_id: str, user_id: str) -> Participant:
        query = (
            insert(Participant)
            .values(
                {
                    "room_id": room_id,
                    "user_id": user_id,
                }
            )
            .returning(Participant)
        )

        ret = await self._session.scalar(query)
        assert ret
        return ret

    async def get(self, id: str, lock: bool = False) -> Participant | None:
        query = select(Participant).where(Participant.id == id)
        if lock:
            query = query.with_for_update().execution_options(populate_existing=True)
        return await self._session.scalar(query)

    async def get_by_room_and_user(
        self, room_id: str, user_id: str
    ) -> Participant | None:
        query = select(Participant).where(
            and_(
                Participant.room_id == room_id,
                Participant.user_id == user_id,
            )
        )
        return await self._session.scalar(query)

    async def get_room_participants(self, room_id: str) -> list[Participant]:
        """
        Returns:
            - participants with their users, ordered by progress in descent
        """
        query = (
            select(Participant)
            .options(joinedload(Participant.user))
            .where(Participant.room_id == room_id)
            .order_by(Participant.progress.desc(), Participant.joined_at)
        )
        ret = await self._session.scalars(query)
        return list(ret)

    async def update_progress(
        self,
        id: str,
        wpm: int,
        accuracy: float,
        progress: float,
        characters_typed: int,
        errors: int,
    ) -> Participant | None:
        query = (
            update(Participant)
            .where(Participant.id == id)
            .values(
                {
                    "current_wpm": wpm,
                    "current_accuracy": accuracy,
                    "progress": progress,
                    "characters_typed": characters_typed,
                    "errors": errors,
                }
            )
            .returning(Participant)
        )

        return await self._session.scalar(query)

    async def count_finished(self, room_id: str) -> int:
        query = select(func.count(Participant.id)).where(
            and_(
                Participant.room_id == room_id,
                Participant.finished.is_(True),
            )
        )

        ret = await self._session.scalar(query)
        if ret is None:
            return 0

        return ret

    async def count_unfinished(self, room_id: str) -> int:
        query = select(func.count(Participant.id)).where(
            and_(
                Participant.room_id == room_id,
                Participant.finished.is_(False),
            )
        )

        ret = await self._session.scalar(query)
        if ret is None:
            return 0

        return ret

    async def finish(
        self,
        id: str,
        final_wpm: int,
        final_accuracy: float,
        placement: int,
        finished_at: datetime,
    ) -> Participant | None:
        query = (
            update(Participant)
            .where(Participant.id == id)
            .values(
                {
                    "finished": True,
                    "final_wpm": final_wpm,
                    "final_accuracy": final_accuracy,
                    "placement": placement,
                    "finished_at": finished_at,
                }
            )
            .returning(Participant)
        )

        return await self._session.scalar(query)
