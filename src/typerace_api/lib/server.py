from logging import getLogger

from fastapi import FastAPI
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..orm.room import Room
from ..types.setting import Setting
from .util import create_engine, sanitized_dsn

logger = getLogger(__name__)


class TyperaceServer(FastAPI):
    """
    FastAPI app that owns the database engine.
    The engine only exists between 'prepare' and 'cleanup' (lifespan).
    """

    def __init__(self, setting: Setting, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._setting = setting

    async def prepare(self):
        logger.info("connecting to %s", sanitized_dsn(self._setting.db))
        self._engine = create_engine(self._setting)
        self._sessionmaker = async_sessionmaker(self._engine)

    async def cleanup(self):
        await self._engine.dispose()
        logger.info("database engine disposed")

    async def ready(self) -> bool:
        """
        the store answers and the 'rooms' table exists
        """
        try:
            async with self._sessionmaker() as session:
                await session.execute(select(Room.id).limit(1))

        except SQLAlchemyError as ex:
            logger.warning("failed 'ready' check, error: %s", str(ex))
            return False

        return True

    @property
    def sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        return self._sessionmaker

    @property
    def setting(self) -> Setting:
        return self._setting
