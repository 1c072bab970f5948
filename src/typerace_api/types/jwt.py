from pydantic import BaseModel


class JWTPayload(BaseModel):
    """
    Issued by the identity provider.

    sub: user id
    name: display name
    """

    sub: str
    name: str
    exp: int
    nbf: int
    iat: int
