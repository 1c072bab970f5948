from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...repositories.room import RoomRepo
from ...repositories.user import UserRepo
from ...types.enums import Difficulty, RoomStatus

import pytest
from ..helper import *

DUMMY_OWNER_ID = "owner-id"
DUMMY_CODE = "ABCDE12345"


async def prepare_room(
    sessionmaker: async_sessionmaker[AsyncSession], max_players: int = 2
) -> str:
    async with sessionmaker() as session:
        await UserRepo(session).register(id=DUMMY_OWNER_ID, name="owner")
        room = await RoomRepo(session).create(
            code=DUMMY_CODE,
            name="room",
            owner_id=DUMMY_OWNER_ID,
            max_players=max_players,
            difficulty=Difficulty.EASY,
            duration=60,
            text_content="some text",
        )
        room_id = room.id
        await session.commit()

    return room_id


@pytest.mark.asyncio
async def test_room_repo_create(sessionmaker: async_sessionmaker[AsyncSession]):
    room_id = await prepare_room(sessionmaker)

    async with sessionmaker() as session:
        repo = RoomRepo(session)
        room = await repo.get(room_id)
        assert room
        assert room.code == DUMMY_CODE
        assert room.owner_id == DUMMY_OWNER_ID
        assert room.current_players == 0
        assert room.max_players == 2
        assert room.status == RoomStatus.WAITING
        assert room.difficulty == Difficulty.EASY
        assert room.started_at is None
        assert room.finished_at is None

        assert await repo.code_exists(DUMMY_CODE)
        assert not await repo.code_exists("ZZZZZZZZZZ")

        by_code = await repo.get_by_code(DUMMY_CODE)
        assert by_code
        assert by_code.id == room_id
        assert await repo.get_by_code("ZZZZZZZZZZ") is None


@pytest.mark.asyncio
async def test_room_repo_get_with_participants(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    room_id = await prepare_room(sessionmaker)

    async with sessionmaker() as session:
        room = await RoomRepo(session).get_with_participants_by_code(DUMMY_CODE)
        assert room
        assert room.id == room_id
        assert room.owner.id == DUMMY_OWNER_ID
        assert room.participants == []


@pytest.mark.asyncio
async def test_room_repo_increase_player_count(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    room_id = await prepare_room(sessionmaker, max_players=2)

    async with sessionmaker() as session:
        repo = RoomRepo(session)
        room = await repo.increase_player_count(room_id)
        assert room
        assert room.current_players == 1

        room = await repo.increase_player_count(room_id)
        assert room
        assert room.current_players == 2

        # full
        assert await repo.increase_player_count(room_id) is None
        await session.commit()

    async with sessionmaker() as session:
        room = await RoomRepo(session).get(room_id)
        assert room
        assert room.current_players == 2


@pytest.mark.asyncio
async def test_room_repo_status_transitions(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    room_id = await prepare_room(sessionmaker)

    async with sessionmaker() as session:
        repo = RoomRepo(session)
        room = await repo.start(room_id)
        assert room
        assert room.status == RoomStatus.IN_PROGRESS
        assert room.started_at is not None

        # only from waiting
        assert await repo.start(room_id) is None

        room = await repo.finish(room_id)
        assert room
        assert room.status == RoomStatus.FINISHED
        assert room.finished_at is not None

        assert await repo.finish(room_id) is None
        assert await repo.start(room_id) is None
        await session.commit()
