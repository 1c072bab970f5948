from httpx import AsyncClient
from pydantic import TypeAdapter
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...repositories.user import UserRepo
from ...types.common import UserInfo
from ...types.enums import ErrorCode
from ...types.responses.base import ErrorResponse
from ..helper import *

LEADERBOARD = TypeAdapter(list[UserInfo])


@pytest.mark.asyncio
async def test_api_auth_user(client: AsyncClient, setting: Setting):
    ret = await client.get(
        f"{API_PREFIX}/auth/user",
        cookies=gen_cookies(setting, "user-id", "username"),
    )
    assert ret.status_code == 200
    ret_data = UserInfo.model_validate(ret.json())
    assert ret_data.id == "user-id"
    assert ret_data.name == "username"
    assert ret_data.games_played == 0

    body = ret.json()
    assert "ok" not in body
    for key in ["bestWpm", "averageWpm", "averageAccuracy", "gamesPlayed", "gamesWon"]:
        assert key in body

    ret = await client.get(f"{API_PREFIX}/auth/user")
    assert ret.status_code == 401
    assert ErrorResponse.model_validate(ret.json()).error.code == ErrorCode.INVALID_TOKEN


@pytest.mark.asyncio
async def test_api_user_history(client: AsyncClient, setting: Setting):
    ret = await client.get(
        f"{API_PREFIX}/user/history",
        cookies=gen_cookies(setting, "user-id", "username"),
        params={"limit": 5},
    )
    assert ret.status_code == 200
    assert ret.json() == []

    ret = await client.get(
        f"{API_PREFIX}/user/history",
        cookies=gen_cookies(setting, "user-id", "username"),
        params={"limit": 0},
    )
    assert ret.status_code == 400

    ret = await client.get(f"{API_PREFIX}/user/history")
    assert ret.status_code == 401


@pytest.mark.asyncio
async def test_api_leaderboard(
    client: AsyncClient, sessionmaker: async_sessionmaker[AsyncSession]
):
    ret = await client.get(f"{API_PREFIX}/leaderboard")
    assert ret.status_code == 200
    assert ret.json() == []

    async with sessionmaker() as session:
        repo = UserRepo(session)
        for i in range(15):
            await repo.register(id=f"user-{i:02}", name=f"user {i}")
            await repo.update_stats(id=f"user-{i:02}", wpm=i * 10, accuracy=90, won=False)
        await session.commit()

    # default limit
    ret = await client.get(f"{API_PREFIX}/leaderboard")
    assert ret.status_code == 200
    ret_data = LEADERBOARD.validate_python(ret.json())
    assert len(ret_data) == 10
    assert ret_data[0].id == "user-14"
    assert ret_data[0].best_wpm == 140
    assert "bestWpm" in ret.json()[0]

    ret = await client.get(f"{API_PREFIX}/leaderboard", params={"limit": 3})
    ret_data = LEADERBOARD.validate_python(ret.json())
    assert [u.id for u in ret_data] == ["user-14", "user-13", "user-12"]

    ret = await client.get(f"{API_PREFIX}/leaderboard", params={"limit": 101})
    assert ret.status_code == 400
