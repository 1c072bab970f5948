from functools import wraps
from logging import getLogger
from logging.config import dictConfig
from secrets import choice
from string import ascii_uppercase, digits
from typing import Callable

from alembic import command
from alembic.config import Config
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic_core import Url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ..types.enums import ErrorCode
from ..types.errors import InvalidCookieToken
from ..types.log import TRACE
from ..types.common import ErrorContext
from ..types.responses.base import ErrorResponse
from ..types.setting import DBSetting, Setting

logger = getLogger(__name__)

ROOM_CODE_ALPHABET = ascii_uppercase + digits
ROOM_CODE_LENGTH = 10


def sanitized_dsn(setting: DBSetting) -> str:
    if setting.is_sqlite:
        return setting.dsn

    temp_url = Url(setting.dsn)
    assert temp_url.host
    assert temp_url.path
    url = Url.build(
        scheme=temp_url.scheme,
        username=temp_url.username,
        password="***",
        host=temp_url.host,
        port=temp_url.port,
        path=temp_url.path.lstrip("/"),
    )
    return str(url)


def db_migration(setting: Setting):
    logger.info("running migration on %s", sanitized_dsn(setting.db))
    config = Config()
    config.set_main_option("script_location", setting.db.migration_dir)
    config.set_main_option("sqlalchemy.url", setting.db.dsn)
    command.upgrade(config, "head")
    logger.info("finish migration")


def create_engine(setting: Setting) -> AsyncEngine:
    if setting.db.is_sqlite:
        return create_async_engine(url=setting.db.async_dsn, echo=setting.db.echo)

    return create_async_engine(
        url=setting.db.async_dsn,
        echo=setting.db.echo,
        pool_size=setting.db.pool_size,
        pool_pre_ping=True,
        pool_recycle=3600,
        isolation_level="READ COMMITTED",
    )


def init_logger(setting: Setting):
    dictConfig(setting.logger)
    logger.info("logger initialized")
    logger.debug("debug level activated")
    logger.log(TRACE, "trace level activated")


def load_setting(base: str, secret: str) -> Setting:
    return Setting.from_file(base, secret)


ERROR_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_ROOM_STATE: 400,
    ErrorCode.ROOM_FULL: 400,
    ErrorCode.ALREADY_JOINED: 400,
    ErrorCode.PARTICIPANT_FINISHED: 400,
    ErrorCode.INVALID_TOKEN: 401,
    ErrorCode.NOT_ROOM_OWNER: 403,
    ErrorCode.NOT_A_PARTICIPANT: 403,
    ErrorCode.USER_NOT_FOUND: 404,
    ErrorCode.ROOM_NOT_FOUND: 404,
    ErrorCode.PARTICIPANT_NOT_FOUND: 404,
}


def error_response(error: ErrorContext) -> JSONResponse:
    """
    turn a failed service result into a response
    """
    status_code = ERROR_STATUS_CODES.get(error.code)
    if status_code is None:
        raise ValueError(f"unknown error code: {error.code}")

    msg = jsonable_encoder(ErrorResponse(error=error))
    return JSONResponse(msg, status_code=status_code)


def catch_error_async(func: Callable):
    @wraps(func)
    async def wrapped(*args, **kwargs):
        try:
            return await func(*args, **kwargs)

        except InvalidCookieToken as ex:
            logger.warning("token error: %s", str(ex))
            msg = ErrorResponse.from_code(ErrorCode.INVALID_TOKEN, str(ex)).model_dump()
            return JSONResponse(msg, status_code=401)

        except SQLAlchemyError:
            logger.exception("database error")
            msg = ErrorResponse.from_code(ErrorCode.STORE_ERROR).model_dump()
            return JSONResponse(msg, status_code=500)

        except Exception:
            logger.exception("something went wrong")
            msg = ErrorResponse().model_dump()
            return JSONResponse(msg, status_code=500)

    return wrapped


def gen_room_code() -> str:
    return "".join(choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))
