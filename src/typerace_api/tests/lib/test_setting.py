from pathlib import Path

import yaml

from ...types.enums import Difficulty
from ...types.setting import Setting


def test_setting_from_file(tmp_path: Path):
    base = tmp_path / "setting.yaml"
    secret = tmp_path / "setting.secret.yaml"
    base.write_text(
        yaml.safe_dump(
            {
                "db": {"host": "db", "username": "typerace"},
                "server": {"port": 9000},
                "game": {"passages": {"easy": "short text"}},
            }
        )
    )
    secret.write_text(yaml.safe_dump({"db": {"password": "secret"}}))

    setting = Setting.from_file(str(base), str(secret))
    assert setting.db.host == "db"
    assert setting.db.username == "typerace"
    assert setting.db.password == "secret"
    assert setting.db.port == 5432
    assert setting.server.port == 9000
    assert setting.game.passages == {Difficulty.EASY: "short text"}
    assert not setting.db.is_sqlite
    assert setting.db.async_dsn == "postgresql+asyncpg://typerace:secret@db:5432/typerace"


def test_setting_from_file_missing(tmp_path: Path):
    setting = Setting.from_file(
        str(tmp_path / "nope.yaml"), str(tmp_path / "nope.secret.yaml")
    )
    assert setting.server.port == 8080
    assert setting.game.code_retry == 5
    assert set(setting.game.passages) == set(Difficulty)
