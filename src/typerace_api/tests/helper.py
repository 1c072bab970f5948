from datetime import UTC, datetime
from pathlib import Path

import pytest
import pytest_asyncio
from alembic import command
from alembic.config import Config
from asgi_lifespan import LifespanManager
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..lib.server_setup import create_server
from ..lib.token_generator import TokenGenerator
from ..lib.util import create_engine
from ..types.enums import CookieNames
from ..types.setting import DBSetting, Setting, TokenSetting

API_PREFIX = "/api"

MIGRATION_DIR = Path(__file__).parents[3] / "migration"

tmp_now = datetime.now(UTC)
NOW = datetime(year=tmp_now.year, month=tmp_now.month, day=tmp_now.day, tzinfo=UTC)


@pytest.fixture(scope="session")
def rsa_keys() -> tuple[str, str]:
    """
    (private, public) in PEM
    """
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_key = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_key = (
        key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return private_key, public_key


@pytest.fixture
def setting(tmp_path: Path, rsa_keys: tuple[str, str]) -> Setting:
    private_key, public_key = rsa_keys
    setting = Setting(
        db=DBSetting(
            sqlite_path=str(tmp_path / "typerace.db"),
            migration_dir=str(MIGRATION_DIR),
        ),
        token=TokenSetting(public_key=public_key, private_key=private_key),
    )
    return setting


@pytest.fixture
def db_migration(setting: Setting):
    config = Config()
    config.set_main_option("script_location", setting.db.migration_dir)
    config.set_main_option("sqlalchemy.url", setting.db.dsn)
    command.upgrade(config, "head")

    yield

    command.downgrade(config, "base")


@pytest_asyncio.fixture
async def sessionmaker(db_migration, setting: Setting):
    engine = create_engine(setting)
    sessionmaker = async_sessionmaker(engine)

    yield sessionmaker

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_migration, setting: Setting):
    app = create_server(setting)

    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        base_url = f"http://localhost:{setting.server.port}"
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            yield client


def gen_cookies(setting: Setting, user_id: str, username: str) -> dict[str, str]:
    token = TokenGenerator(setting).gen_access_token(
        user_id=user_id, username=username
    )
    return {CookieNames.ACCESS_TOKEN: token}
