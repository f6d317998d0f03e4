"""Application layer contracts for orchestrating the sign-in gate."""

from .auth_errors import AuthNotice, banner_for_error_code, is_known_error_code, notice_for_error_code
from .login_flow import LoginParams, LoginPhase, LoginViewController, LoginViewState
from .session_models import (
    DEFAULT_RETURN_URL,
    SessionStatus,
    SessionStatusCell,
    resolve_error_code,
    resolve_return_target,
)

__all__ = [
    "AuthNotice",
    "DEFAULT_RETURN_URL",
    "LoginParams",
    "LoginPhase",
    "LoginViewController",
    "LoginViewState",
    "SessionStatus",
    "SessionStatusCell",
    "banner_for_error_code",
    "is_known_error_code",
    "notice_for_error_code",
    "resolve_error_code",
    "resolve_return_target",
]
