import jwt

from ..types.jwt import JWTPayload
from ..types.setting import Setting


class TokenValidator:
    """
    Validates access tokens issued by the identity provider
    """

    def __init__(self, setting: Setting) -> None:
        self._setting = setting

    def validate(self, token: str) -> JWTPayload:
        decoded_jwt = jwt.decode(
            jwt=token,
            key=self._setting.token.public_key,
            options={
                "verify_signature": True,
                "verify_aud": False,
                "verify_iss": False,
                "require": ["exp", "sub"],
            },
            algorithms=["RS256"],
        )

        return JWTPayload.model_validate(decoded_jwt)
