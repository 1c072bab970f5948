from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..lib.dependencies import (
    GetAccessTokenInfoRet,
    get_access_token_info,
    get_profile_service,
)
from ..lib.util import catch_error_async
from ..services.profile import ProfileService
from ..types.common import GameResultInfo, UserInfo
from ..types.errors import InvalidCookieToken
from ..types.responses.base import ErrorResponse

logger = getLogger(__name__)

router = APIRouter(tags=["Profile"], responses={401: {"model": ErrorResponse}})


@router.get("/auth/user", responses={200: {"model": UserInfo}})
@catch_error_async
async def user(
    current_user: GetAccessTokenInfoRet = Depends(get_access_token_info),
    service: ProfileService = Depends(get_profile_service),
):
    """
    the signed in user and their lifetime statistics
    """
    if current_user.error:
        raise InvalidCookieToken(current_user.error)

    assert current_user.payload is not None
    ret = await service.get_user(
        user_id=current_user.payload.sub, username=current_user.payload.name
    )

    assert ret.data is not None
    msg = jsonable_encoder(ret.data)
    return JSONResponse(msg, status_code=200)


@router.get("/user/history", responses={200: {"model": list[GameResultInfo]}})
@catch_error_async
async def history(
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    current_user: GetAccessTokenInfoRet = Depends(get_access_token_info),
    service: ProfileService = Depends(get_profile_service),
):
    """
    game results, newest first
    """
    if current_user.error:
        raise InvalidCookieToken(current_user.error)

    assert current_user.payload is not None
    ret = await service.history(user_id=current_user.payload.sub, size=limit)

    assert ret.data is not None
    msg = jsonable_encoder(ret.data)
    return JSONResponse(msg, status_code=200)
