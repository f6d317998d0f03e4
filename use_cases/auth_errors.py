"""Mapping of OAuth error codes (from the ``error`` query parameter) to user messages."""

from dataclasses import dataclass
from typing import Literal, Optional

Severity = Literal["error", "info"]

ACCOUNT_NOT_LINKED = "OAuthAccountNotLinked"

AUTH_ERROR_MESSAGES = {
    ACCOUNT_NOT_LINKED: "This email is already associated with a different sign-in method.",
    "OAuthSignin": "Error during OAuth sign in.",
    "OAuthCallback": "Error during OAuth callback.",
    "AccessDenied": "Access denied. You may not have permission to access this resource.",
}
DEFAULT_AUTH_ERROR_MESSAGE = "Authentication error. Please try again."

SIGN_IN_FAILED_MESSAGE = "Failed to sign in with Google"


@dataclass(frozen=True)
class AuthNotice:
    """A single user-visible notification."""

    message: str
    severity: Severity = "error"


def notice_for_error_code(code: Optional[str]) -> Optional[AuthNotice]:
    """Return the notice for ``code``, or None when no code was supplied."""
    if not code:
        return None
    return AuthNotice(message=AUTH_ERROR_MESSAGES.get(code, DEFAULT_AUTH_ERROR_MESSAGE))


def is_known_error_code(code: Optional[str]) -> bool:
    return code in AUTH_ERROR_MESSAGES


def banner_for_error_code(code: Optional[str]) -> Optional[str]:
    # Only the account-linking conflict keeps an inline banner on the form.
    if code == ACCOUNT_NOT_LINKED:
        return AUTH_ERROR_MESSAGES[ACCOUNT_NOT_LINKED]
    return None
