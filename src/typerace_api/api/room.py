from logging import getLogger

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..lib.dependencies import (
    GetAccessTokenInfoRet,
    get_access_token_info,
    get_room_service,
)
from ..lib.util import catch_error_async, error_response
from ..services.room import RoomService
from ..types.common import ParticipantWithUser, RoomWithParticipants
from ..types.errors import InvalidCookieToken
from ..types.requests.room import CreateRoomRequest, JoinRoomRequest
from ..types.responses.base import ErrorResponse
from ..types.responses.room import JoinRoomResponse

logger = getLogger(__name__)

router = APIRouter(
    tags=["Room"],
    prefix="/rooms",
    responses={401: {"model": ErrorResponse}},
)


@router.post(
    "",
    responses={
        200: {"model": RoomWithParticipants},
        400: {"model": ErrorResponse},
    },
)
@catch_error_async
async def create(
    request: CreateRoomRequest,
    current_user: GetAccessTokenInfoRet = Depends(get_access_token_info),
    service: RoomService = Depends(get_room_service),
):
    """
    create a room owned by the current user, the owner still has to join
    """
    if current_user.error:
        raise InvalidCookieToken(current_user.error)

    assert current_user.payload
    ret = await service.create_room(
        owner_id=current_user.payload.sub,
        owner_name=current_user.payload.name,
        request=request,
    )

    if not ret.ok:
        assert ret.error
        return error_response(ret.error)

    assert ret.data
    msg = jsonable_encoder(ret.data)
    return JSONResponse(msg, status_code=200)


@router.post(
    "/join",
    responses={
        200: {"model": JoinRoomResponse},
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
@catch_error_async
async def join(
    request: JoinRoomRequest,
    current_user: GetAccessTokenInfoRet = Depends(get_access_token_info),
    service: RoomService = Depends(get_room_service),
):
    if current_user.error:
        raise InvalidCookieToken(current_user.error)

    assert current_user.payload
    ret = await service.join_room(
        user_id=current_user.payload.sub,
        username=current_user.payload.name,
        code=request.code,
    )

    if not ret.ok:
        assert ret.error
        return error_response(ret.error)

    assert ret.data
    msg = jsonable_encoder(
        JoinRoomResponse(room=ret.data.room, participant=ret.data.participant)
    )
    return JSONResponse(msg, status_code=200)


@router.get(
    "/{code}",
    responses={
        200: {"model": RoomWithParticipants},
        404: {"model": ErrorResponse},
    },
)
@catch_error_async
async def get_by_code(
    code: str,
    current_user: GetAccessTokenInfoRet = Depends(get_access_token_info),
    service: RoomService = Depends(get_room_service),
):
    """
    room with owner and participants, polled by clients
    """
    if current_user.error:
        raise InvalidCookieToken(current_user.error)

    ret = await service.get_room_by_code(code.upper())

    if not ret.ok:
        assert ret.error
        return error_response(ret.error)

    assert ret.data
    msg = jsonable_encoder(ret.data)
    return JSONResponse(msg, status_code=200)


@router.get(
    "/{room_id}/participants",
    responses={200: {"model": list[ParticipantWithUser]}},
)
@catch_error_async
async def participants(
    room_id: str,
    current_user: GetAccessTokenInfoRet = Depends(get_access_token_info),
    service: RoomService = Depends(get_room_service),
):
    """
    participants sorted by progress, polled by clients during the race
    """
    if current_user.error:
        raise InvalidCookieToken(current_user.error)

    ret = await service.get_participants(room_id)

    assert ret.data is not None
    msg = jsonable_encoder(ret.data)
    return JSONResponse(msg, status_code=200)


@router.post(
    "/{room_id}/start",
    responses={
        200: {"model": RoomWithParticipants},
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
@catch_error_async
async def start(
    room_id: str,
    current_user: GetAccessTokenInfoRet = Depends(get_access_token_info),
    service: RoomService = Depends(get_room_service),
):
    """
    [Owner only] waiting -> in_progress
    """
    if current_user.error:
        raise InvalidCookieToken(current_user.error)

    assert current_user.payload
    ret = await service.start_room(user_id=current_user.payload.sub, room_id=room_id)

    if not ret.ok:
        assert ret.error
        return error_response(ret.error)

    assert ret.data
    msg = jsonable_encoder(ret.data)
    return JSONResponse(msg, status_code=200)
