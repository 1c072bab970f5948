from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..lib.dependencies import get_leaderboard_service
from ..lib.util import catch_error_async
from ..services.leaderboard import LeaderboardService
from ..types.common import UserInfo

router = APIRouter(tags=["Leaderboard"], prefix="/leaderboard")


@router.get("", responses={200: {"model": list[UserInfo]}})
@catch_error_async
async def leaderboard(
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    """
    public, no token required
    - sorted by best wpm, users who never finished a game are left out
    """
    ret = await service.get_leaderboard(limit=limit)

    assert ret.data is not None
    msg = jsonable_encoder(ret.data)
    return JSONResponse(msg, status_code=200)
