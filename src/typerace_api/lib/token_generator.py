from datetime import UTC, datetime, timedelta

import jwt

from ..types.jwt import JWTPayload
from ..types.setting import Setting


class TokenGenerator:
    """
    Issues access tokens the way the identity provider does.
    Needs 'token.private_key', only used for local runs and tests.
    """

    def __init__(self, setting: Setting) -> None:
        self._setting = setting

    def gen_access_token(self, user_id: str, username: str) -> str:
        iat = datetime.now(UTC)
        nbf = iat - timedelta(seconds=1)
        exp = iat + timedelta(seconds=self._setting.token.access_duration)

        payload = JWTPayload(
            sub=user_id,
            name=username,
            exp=int(exp.timestamp()),
            nbf=int(nbf.timestamp()),
            iat=int(iat.timestamp()),
        )

        return jwt.encode(
            payload.model_dump(), self._setting.token.private_key, algorithm="RS256"
        )
