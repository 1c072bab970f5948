from contextlib import asynccontextmanager
from logging import Filter, LogRecord, getLogger

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..api.game import router as game_router
from ..api.healthcheck import router as healthcheck_router
from ..api.leaderboard import router as leaderboard_router
from ..api.profile import router as profile_router
from ..api.room import router as room_router
from ..types.enums import ErrorCode
from ..types.responses.base import ErrorResponse
from ..types.setting import Setting
from .server import TyperaceServer

logger = getLogger(__name__)


class HealthCheckFilter(Filter):
    """disable access log for health check endpoints"""

    def filter(self, record: LogRecord):
        return record.getMessage().find("/healthcheck") == -1


@asynccontextmanager
async def lifespan(app: TyperaceServer):
    logger.info("lifespan startup")
    await app.prepare()
    getLogger("uvicorn.access").addFilter(HealthCheckFilter())

    yield

    logger.info("lifespan shutdown")
    await app.cleanup()


async def validation_error_handler(_: Request, exc: Exception):
    logger.warning("validation error: %s", exc)
    msg = jsonable_encoder(
        ErrorResponse.from_code(ErrorCode.VALIDATION_ERROR, str(exc))
    )
    return JSONResponse(status_code=400, content=msg)


def create_server(setting: Setting) -> TyperaceServer:
    app = TyperaceServer(setting=setting, lifespan=lifespan, title="Typerace API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=setting.cors.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)

    api_router = APIRouter(
        prefix="/api",
        responses={500: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
    )
    api_router.include_router(room_router)
    api_router.include_router(game_router)
    api_router.include_router(leaderboard_router)
    api_router.include_router(profile_router)

    app.include_router(healthcheck_router)
    app.include_router(api_router)

    return app
