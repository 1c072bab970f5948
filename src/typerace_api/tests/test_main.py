import sys
from unittest.mock import patch

import pytest

from .. import __main__ as main_module
from ..lib.token_validator import TokenValidator
from ..types.setting import Setting

from .helper import rsa_keys, setting


def test_main_issue_token(setting: Setting, capsys: pytest.CaptureFixture[str]):
    argv = ["typerace-api", "--issue-token", "user-id", "username"]

    with (
        patch.object(sys, "argv", argv),
        patch.object(main_module, "load_setting", return_value=setting),
        patch.object(main_module.uvicorn, "run") as run,
    ):
        main_module.main()

    # prints and exits without serving
    run.assert_not_called()

    token = capsys.readouterr().out.strip()
    info = TokenValidator(setting).validate(token)
    assert info.sub == "user-id"
    assert info.name == "username"
