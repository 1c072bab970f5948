from datetime import timedelta
from jwt.exceptions import ExpiredSignatureError, InvalidSignatureError
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest
import time_machine

from ...lib.token_validator import TokenValidator

from ...lib.token_generator import TokenGenerator
from ..helper import *


@pytest.mark.asyncio
@time_machine.travel(NOW, tick=False)
async def test_token_validator(setting: Setting):
    token_generator = TokenGenerator(setting=setting)
    token_validator = TokenValidator(setting=setting)

    dummy_user_id = "user_id"
    dummy_username = "username"

    token = token_generator.gen_access_token(user_id=dummy_user_id,
                                             username=dummy_username)

    info = token_validator.validate(token)
    assert info.sub == dummy_user_id
    assert info.name == dummy_username
    iat = datetime.fromtimestamp(info.iat, UTC)
    exp = datetime.fromtimestamp(info.exp, UTC)
    nbf = datetime.fromtimestamp(info.nbf, UTC)
    assert iat == NOW
    assert exp == NOW + timedelta(seconds=setting.token.access_duration)
    assert nbf == NOW - timedelta(seconds=1)

    # in range
    with time_machine.travel(
            NOW + timedelta(seconds=setting.token.access_duration - 1)):
        token_validator.validate(token)

    # expired
    with time_machine.travel(NOW +
                             timedelta(seconds=setting.token.access_duration)):
        with pytest.raises(ExpiredSignatureError):
            token_validator.validate(token)


@pytest.mark.asyncio
async def test_token_validator_wrong_key(setting: Setting):
    other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    other_setting = setting.model_copy(deep=True)
    other_setting.token.private_key = other_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()

    token = TokenGenerator(setting=other_setting).gen_access_token(
        user_id="user_id", username="username"
    )

    with pytest.raises(InvalidSignatureError):
        TokenValidator(setting=setting).validate(token)
