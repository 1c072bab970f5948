from datetime import timedelta

import pytest
import time_machine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...repositories.game_result import GameResultRepo
from ...repositories.room import RoomRepo
from ...repositories.user import UserRepo
from ...types.enums import Difficulty
from ..helper import *


@pytest.mark.asyncio
async def test_game_result_repo_get_last_n_games(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    user_id = "user-id"

    async with sessionmaker() as session:
        await UserRepo(session).register(id=user_id, name="username")
        room = await RoomRepo(session).create(
            code="ABCDE12345",
            name="room",
            owner_id=user_id,
            max_players=2,
            difficulty=Difficulty.HARD,
            duration=60,
            text_content="some text",
        )
        room_id = room.id
        await session.commit()

    for i in range(15):
        with time_machine.travel(NOW + timedelta(minutes=i), tick=False):
            async with sessionmaker() as session:
                await GameResultRepo(session).create(
                    room_id=room_id,
                    user_id=user_id,
                    wpm=i,
                    accuracy=90,
                    placement=1,
                    characters_typed=100,
                    errors=0,
                    duration=60,
                )
                await session.commit()

    async with sessionmaker() as session:
        repo = GameResultRepo(session)
        results = await repo.get_last_n_games(user_id=user_id, size=10)
        assert [r.wpm for r in results] == list(range(14, 4, -1))

        assert await repo.get_last_n_games(user_id="someone-else") == []
