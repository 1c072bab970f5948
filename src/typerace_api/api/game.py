from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..lib.dependencies import (
    GetAccessTokenInfoRet,
    get_access_token_info,
    get_game_service,
)
from ..lib.util import catch_error_async, error_response
from ..services.game import GameService
from ..types.errors import InvalidCookieToken
from ..types.requests.game import FinishGameRequest, ProgressRequest
from ..types.responses.base import ErrorResponse
from ..types.responses.game import FinishGameResponse, ProgressResponse

logger = getLogger(__name__)

router = APIRouter(
    tags=["Game"],
    prefix="/game",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.post("/progress", responses={200: {"model": ProgressResponse}})
@catch_error_async
async def progress(
    participant_id: Annotated[str, Query(alias="participantId", min_length=1)],
    statistics: ProgressRequest,
    current_user: GetAccessTokenInfoRet = Depends(get_access_token_info),
    service: GameService = Depends(get_game_service),
):
    """
    live typing metrics, sent every few seconds while racing
    """
    if current_user.error:
        raise InvalidCookieToken(current_user.error)

    assert current_user.payload
    ret = await service.update_progress(
        user_id=current_user.payload.sub,
        participant_id=participant_id,
        progress=statistics,
    )

    if not ret.ok:
        assert ret.error
        return error_response(ret.error)

    msg = jsonable_encoder(ProgressResponse())
    return JSONResponse(msg, status_code=200)


@router.post("/finish", responses={200: {"model": FinishGameResponse}})
@catch_error_async
async def finish(
    statistics: FinishGameRequest,
    current_user: GetAccessTokenInfoRet = Depends(get_access_token_info),
    service: GameService = Depends(get_game_service),
):
    """
    on finish (or when the countdown runs out), users send their final statistics
    - The placement is decided here by the server
    """
    if current_user.error:
        raise InvalidCookieToken(current_user.error)

    assert current_user.payload
    ret = await service.finish_game(
        user_id=current_user.payload.sub, statistics=statistics
    )

    if not ret.ok:
        assert ret.error
        return error_response(ret.error)

    assert ret.data
    msg = jsonable_encoder(FinishGameResponse(placement=ret.data.placement))
    return JSONResponse(msg, status_code=200)
