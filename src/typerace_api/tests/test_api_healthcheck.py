from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
import pytest

from ..lib.server_setup import create_server
from ..types.enums import ErrorCode
from ..types.responses.base import ErrorResponse, SuccessResponse
from ..types.setting import Setting

from .helper import client, db_migration, rsa_keys, setting


@pytest.mark.asyncio
async def test_api_healthcheck(client: AsyncClient):
    ret = await client.get("/healthcheck/alive")
    ret.raise_for_status()
    assert ret.json() == SuccessResponse().model_dump()

    ret = await client.get("/healthcheck/ready")
    ret.raise_for_status()
    assert ret.json() == SuccessResponse().model_dump()


@pytest.mark.asyncio
async def test_api_healthcheck_not_migrated(setting: Setting):
    app = create_server(setting)

    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            ret = await client.get("/healthcheck/alive")
            assert ret.status_code == 200

            ret = await client.get("/healthcheck/ready")
            assert ret.status_code == 500
            ret_data = ErrorResponse.model_validate(ret.json())
            assert ret_data.error.code == ErrorCode.STORE_ERROR
