from dataclasses import dataclass


@dataclass
class CLIArgs:
    """
    Properties:
    - setting: Path to setting.yaml file
    - secret_setting: Path to setting.secret.yaml file
    - init: Run alembic migrations before serving
    - host: Interface to bind
    - port: Overrides server.port from the setting file
    - issue_token: USER_ID and USERNAME to print an access token for
    """
    setting: str
    secret_setting: str
    init: bool
    host: str
    port: int | None
    issue_token: list[str] | None
