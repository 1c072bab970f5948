from logging import getLogger

from .base import ServiceRet
from ..lib.server import TyperaceServer

logger = getLogger(__name__)


class HealthCheckService:
    def __init__(self, app: TyperaceServer) -> None:
        self._app = app

    async def alive(self) -> ServiceRet:
        return ServiceRet(ok=True)

    async def ready(self) -> ServiceRet:
        """
        ready once the database answers
        """
        result = await self._app.ready()
        if not result:
            logger.warning("not ready")
        return ServiceRet(ok=result)
