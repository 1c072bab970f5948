class InvalidCookieToken(Exception):
    pass


class TokenNotProvided(Exception):
    pass
