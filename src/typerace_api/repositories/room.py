from sqlalchemy import and_, insert, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload
from sqlalchemy.sql import Select, select

from ..orm.base import utc_now
from ..orm.participant import Participant
from ..orm.room import Room
from ..types.enums import Difficulty, RoomStatus


class RoomRepo:

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _with_participants(self, query: Select) -> Select:
        return query.options(
            joinedload(Room.owner),
            selectinload(Room.participants).joinedload(Participant.user),
        ).execution_options(populate_existing=True)

    async def create(
        self,
        code: str,
        name: str,
        owner_id: str,
        max_players: int,
        difficulty: Difficulty,
        duration: int,
        text_content: str,
    ) -> Room:
        query = (
            insert(Room)
            .values(
                {
                    "code": code,
                    "name": name,
                    "owner_id": owner_id,
                    "max_players": max_players,
                    "current_players": 0,
                    "status": RoomStatus.WAITING.value,
                    "difficulty": difficulty.value,
                    "duration": duration,
                    "text_content": text_content,
                }
            )
            .returning(Room)
        )

        ret = await self._session.scalar(query)
        assert ret
        return ret

    async def code_exists(self, code: str) -> bool:
        query = select(Room.id).where(Room.code == code)
        return await self._session.scalar(query) is not None

    async def get(self, id: str, lock: bool = False) -> Room | None:
        query = select(Room).where(Room.id == id)
        if lock:
            query = query.with_for_update().execution_options(populate_existing=True)
        return await self._session.scalar(query)

    async def touch(self, id: str) -> Room | None:
        """
        Bump updated_at and return the room.
        The row stays write locked until the transaction ends (on SQLite, the
        whole database).
        """
        query = (
            update(Room)
            .where(Room.id == id)
            .values({"updated_at": utc_now()})
            .returning(Room)
            .execution_options(populate_existing=True)
        )

        return await self._session.scalar(query)

    async def get_by_code(self, code: str, lock: bool = False) -> Room | None:
        query = select(Room).where(Room.code == code)
        if lock:
            query = query.with_for_update().execution_options(populate_existing=True)
        return await self._session.scalar(query)

    async def get_with_participants(self, id: str) -> Room | None:
        """
        owner, participants and each participant's user are loaded eagerly
        """
        query = self._with_participants(select(Room).where(Room.id == id))
        return await self._session.scalar(query)

    async def get_with_participants_by_code(self, code: str) -> Room | None:
        query = self._with_participants(select(Room).where(Room.code == code))
        return await self._session.scalar(query)

    async def increase_player_count(self, id: str) -> Room | None:
        """
        Returns None when the room is already full.
        """
        query = (
            update(Room)
            .where(
                and_(
                    Room.id == id,
                    Room.current_players < Room.max_players,
                )
            )
            .values(
                {
                    "current_players": Room.current_players + 1,
                    "updated_at": utc_now(),
                }
            )
            .returning(Room)
        )

        return await self._session.scalar(query)

    async def start(self, id: str) -> Room | None:
        now = utc_now()
        query = (
            update(Room)
            .where(
                and_(
                    Room.id == id,
                    Room.status == RoomStatus.WAITING.value,
                )
            )
            .values(
                {
                    "status": RoomStatus.IN_PROGRESS.value,
                    "started_at": now,
                    "updated_at": now,
                }
            )
            .returning(Room)
        )

        return await self._session.scalar(query)

    async def finish(self, id: str) -> Room | None:
        now = utc_now()
        query = (
            update(Room)
            .where(
                and_(
                    Room.id == id,
                    Room.status != RoomStatus.FINISHED.value,
                )
            )
            .values(
                {
                    "status": RoomStatus.FINISHED.value,
                    "finished_at": now,
                    "updated_at": now,
                }
            )
            .returning(Room)
        )

        return await self._session.scalar(query)
