from unittest.mock import MagicMock

import pytest

from use_cases.login_flow import LoginParams
from use_cases.session_models import SessionStatusCell, resolve_error_code, resolve_return_target


def test_cell_starts_loading() -> None:
    assert SessionStatusCell().get() == "loading"


def test_cell_notifies_on_change_only() -> None:
    cell = SessionStatusCell()
    listener = MagicMock()
    cell.subscribe(listener)

    cell.set("unauthenticated")
    cell.set("unauthenticated")
    cell.set("authenticated")

    assert [c.args[0] for c in listener.call_args_list] == ["unauthenticated", "authenticated"]


def test_cell_unsubscribe() -> None:
    cell = SessionStatusCell()
    listener = MagicMock()
    unsubscribe = cell.subscribe(listener)
    unsubscribe()
    unsubscribe()

    cell.set("authenticated")

    listener.assert_not_called()
    assert cell.subscriber_count == 0


def test_cell_rejects_unknown_status() -> None:
    with pytest.raises(ValueError):
        SessionStatusCell().set("expired")
    with pytest.raises(ValueError):
        SessionStatusCell("bogus")


@pytest.mark.parametrize(
    "raw, expected",
    [("/dashboard", "/dashboard"), (None, "/qa"), ("", "/qa"), ("   ", "   ")],
)
def test_resolve_return_target(raw, expected) -> None:
    assert resolve_return_target(raw) == expected


def test_resolve_return_target_custom_fallback() -> None:
    assert resolve_return_target(None, fallback="/home") == "/home"


def test_resolve_error_code() -> None:
    assert resolve_error_code(None) is None
    assert resolve_error_code("") is None
    assert resolve_error_code("AccessDenied") == "AccessDenied"


def test_login_params_from_query() -> None:
    params = LoginParams.from_query({"returnUrl": "/dashboard", "error": "OAuthSignin"})
    assert params.return_target == "/dashboard"
    assert params.error_code == "OAuthSignin"

    empty = LoginParams.from_query({})
    assert empty.return_target == "/qa"
    assert empty.error_code is None
