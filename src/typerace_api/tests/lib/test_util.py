import json
import re

import pytest

from ...lib.util import (
    ERROR_STATUS_CODES,
    error_response,
    gen_room_code,
    sanitized_dsn,
)
from ...types.common import ErrorContext
from ...types.enums import ErrorCode
from ...types.setting import DBSetting
from ..helper import *


def test_gen_room_code():
    codes = {gen_room_code() for _ in range(100)}
    for code in codes:
        assert re.fullmatch(r"[A-Z0-9]{10}", code)
    # 36 ** 10 possibilities
    assert len(codes) == 100


def test_sanitized_dsn():
    setting = DBSetting(
        username="user", password="secret", host="db", port=5432, db="typerace"
    )
    dsn = sanitized_dsn(setting)
    assert "secret" not in dsn
    assert "***" in dsn
    assert dsn.startswith("postgresql://user:")

    setting = DBSetting(sqlite_path="/tmp/typerace.db")
    assert sanitized_dsn(setting) == "sqlite:////tmp/typerace.db"


@pytest.mark.parametrize(
    "code, status_code",
    [
        (ErrorCode.ROOM_NOT_FOUND, 404),
        (ErrorCode.PARTICIPANT_NOT_FOUND, 404),
        (ErrorCode.ROOM_FULL, 400),
        (ErrorCode.ALREADY_JOINED, 400),
        (ErrorCode.INVALID_ROOM_STATE, 400),
        (ErrorCode.PARTICIPANT_FINISHED, 400),
        (ErrorCode.NOT_A_PARTICIPANT, 403),
        (ErrorCode.NOT_ROOM_OWNER, 403),
        (ErrorCode.INVALID_TOKEN, 401),
    ],
)
def test_error_response(code: ErrorCode, status_code: int):
    ret = error_response(ErrorContext(code=code, message="dummy"))
    assert ret.status_code == status_code
    assert json.loads(ret.body) == {
        "ok": False,
        "error": {"code": code.value, "message": "dummy"},
    }


def test_error_response_unknown_code():
    assert ErrorCode.UNKNOWN_ERROR not in ERROR_STATUS_CODES
    with pytest.raises(ValueError):
        error_response(ErrorContext(code=ErrorCode.UNKNOWN_ERROR))
