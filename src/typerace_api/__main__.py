from argparse import ArgumentParser

import uvicorn

from .types.cli import CLIArgs

from .lib.server_setup import create_server

from .lib.token_generator import TokenGenerator

from .lib.util import db_migration, init_logger, load_setting


def main():
    parser = ArgumentParser("Typerace API",
                            usage="Starts the backend server",
                            description="The backend for multiplayer typing races")
    parser.add_argument("-c",
                        "--setting",
                        help="Path to setting.yaml file",
                        dest="setting",
                        default="setting.yaml")
    parser.add_argument("-sc",
                        "--secret-setting",
                        help="Path to setting.secret.yaml file",
                        dest="secret_setting",
                        default="setting.secret.yaml")
    parser.add_argument("--init",
                        help="Run alembic migrations before serving",
                        dest="init",
                        action="store_true")
    parser.add_argument("--host",
                        help="Interface to bind",
                        dest="host",
                        default="0.0.0.0")
    parser.add_argument("--port",
                        help="Overrides server.port from the setting file",
                        dest="port",
                        type=int,
                        default=None)
    parser.add_argument("--issue-token",
                        help="Print an access token for USER_ID and exit, needs token.private_key",
                        dest="issue_token",
                        nargs=2,
                        metavar=("USER_ID", "USERNAME"),
                        default=None)
    args = parser.parse_args(namespace=CLIArgs)

    setting = load_setting(args.setting, args.secret_setting)

    if args.issue_token:
        user_id, username = args.issue_token
        print(TokenGenerator(setting).gen_access_token(user_id, username))
        return

    init_logger(setting)

    if args.init:
        db_migration(setting)

    app = create_server(setting)
    uvicorn.run(app,
                host=args.host,
                port=args.port or setting.server.port,
                log_config=setting.logger)


if __name__ == "__main__":
    main()
