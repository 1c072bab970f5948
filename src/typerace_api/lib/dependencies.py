from dataclasses import dataclass
from logging import getLogger

from fastapi import Depends, Request
from fastapi.security.api_key import APIKeyCookie
from jwt.exceptions import PyJWTError

from ..services.game import GameService
from ..services.health_check import HealthCheckService
from ..services.leaderboard import LeaderboardService
from ..services.profile import ProfileService
from ..services.room import RoomService
from ..types.enums import CookieNames
from ..types.errors import TokenNotProvided
from ..types.jwt import JWTPayload
from .server import TyperaceServer
from .token_validator import TokenValidator

access_cookie = APIKeyCookie(
    name=CookieNames.ACCESS_TOKEN,
    auto_error=False,
    description="Access token",
    scheme_name="Access token",
)

logger = getLogger(__name__)


async def get_health_check_service(request: Request) -> HealthCheckService:
    app: TyperaceServer = request.app
    service = HealthCheckService(app)
    return service


async def get_room_service(request: Request) -> RoomService:
    app: TyperaceServer = request.app
    service = RoomService(setting=app.setting, sessionmaker=app.sessionmaker)
    return service


async def get_game_service(request: Request) -> GameService:
    app: TyperaceServer = request.app
    service = GameService(sessionmaker=app.sessionmaker)
    return service


async def get_leaderboard_service(request: Request) -> LeaderboardService:
    app: TyperaceServer = request.app
    service = LeaderboardService(sessionmaker=app.sessionmaker)
    return service


async def get_profile_service(request: Request) -> ProfileService:
    app: TyperaceServer = request.app
    service = ProfileService(sessionmaker=app.sessionmaker)
    return service


@dataclass(slots=True)
class GetAccessTokenInfoRet:
    payload: JWTPayload | None = None
    error: Exception | None = None


def get_access_token_info(
    request: Request,
    access_token: str | None = Depends(access_cookie),
) -> GetAccessTokenInfoRet:
    """
    validate 'access' token and return payload
    """
    if access_token is None:
        error = TokenNotProvided(
            f"Access token '{CookieNames.ACCESS_TOKEN}' not present in cookie"
        )
        return GetAccessTokenInfoRet(error=error)

    app: TyperaceServer = request.app
    try:
        token_validator = TokenValidator(app.setting)
        return GetAccessTokenInfoRet(payload=token_validator.validate(access_token))
    except PyJWTError as ex:
        return GetAccessTokenInfoRet(error=ex)
