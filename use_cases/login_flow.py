"""Sign-in gate orchestration (application layer).

The controller reconciles three independent inputs:

* the ambient session status, pushed through a ``SessionStatusCell``;
* the ``error`` / ``returnUrl`` query parameters, captured once at construction;
* the user's sign-in tap, guarded so that only one OAuth call is outstanding.

It never touches Streamlit directly. Navigation, notification and the OAuth
call are injected capabilities, so the same controller is driven by the
Streamlit view and by the tests.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal, Mapping, Optional

from use_cases.auth_errors import (
    SIGN_IN_FAILED_MESSAGE,
    Severity,
    banner_for_error_code,
    is_known_error_code,
    notice_for_error_code,
)
from use_cases.session_models import (
    DEFAULT_RETURN_URL,
    SessionStatus,
    SessionStatusCell,
    resolve_error_code,
    resolve_return_target,
)

log = logging.getLogger(__name__)

LoginPhase = Literal["checking", "redirecting", "ready"]

DEFAULT_PROVIDER = "google"
SIGN_IN_LABEL = "Sign in with Google"
SIGNING_IN_LABEL = "Signing in..."

NavigateTo = Callable[[str], None]
Notify = Callable[[str, Severity], None]
BeginOAuthSignIn = Callable[..., Optional[Awaitable[Any]]]


@dataclass(frozen=True)
class LoginParams:
    """Query parameters read once when the view mounts."""

    return_target: str = DEFAULT_RETURN_URL
    error_code: Optional[str] = None

    @classmethod
    def from_query(cls, params: Mapping[str, str], fallback: str = DEFAULT_RETURN_URL) -> "LoginParams":
        return cls(
            return_target=resolve_return_target(params.get("returnUrl"), fallback),
            error_code=resolve_error_code(params.get("error")),
        )


@dataclass(frozen=True)
class LoginViewState:
    """Render contract for the login view."""

    phase: LoginPhase
    banner: Optional[str] = None
    sign_in_disabled: bool = False
    sign_in_label: str = SIGN_IN_LABEL


class LoginViewController:
    def __init__(
        self,
        session: SessionStatusCell,
        params: LoginParams,
        *,
        navigate_to: NavigateTo,
        notify: Notify,
        begin_oauth_sign_in: BeginOAuthSignIn,
        provider: str = DEFAULT_PROVIDER,
    ):
        self._session = session
        self._params = params
        self._navigate_to = navigate_to
        self._notify = notify
        self._begin_oauth_sign_in = begin_oauth_sign_in
        self._provider = provider

        self._sign_in_in_flight = False
        self._redirecting = False
        self._last_status: Optional[SessionStatus] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._mounted = False
        self._destroyed = False

    # --- read-only state ---

    @property
    def params(self) -> LoginParams:
        return self._params

    @property
    def return_target(self) -> str:
        return self._params.return_target

    @property
    def error_code(self) -> Optional[str]:
        return self._params.error_code

    @property
    def status(self) -> SessionStatus:
        return self._session.get()

    @property
    def sign_in_in_flight(self) -> bool:
        return self._sign_in_in_flight

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    # --- lifecycle ---

    def mount(self) -> None:
        """
        Subscribe to the session cell and run the mount-time effects.

        Idempotent: the error-code notification is emitted on the first call only,
        so re-renders that call ``mount`` again do not repeat it.
        """
        if self._destroyed:
            raise RuntimeError("Cannot mount a torn-down login view")
        if self._mounted:
            return
        self._mounted = True
        self._unsubscribe = self._session.subscribe(self._on_status)
        self._announce_error_code()
        self._on_status(self._session.get())

    def teardown(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        log.debug("Login view torn down")

    def rebind(
        self,
        *,
        navigate_to: Optional[NavigateTo] = None,
        notify: Optional[Notify] = None,
        begin_oauth_sign_in: Optional[BeginOAuthSignIn] = None,
    ) -> None:
        """Swap in fresh capabilities; effects always use the latest ones."""
        if navigate_to is not None:
            self._navigate_to = navigate_to
        if notify is not None:
            self._notify = notify
        if begin_oauth_sign_in is not None:
            self._begin_oauth_sign_in = begin_oauth_sign_in

    # --- effects ---

    def _announce_error_code(self) -> None:
        notice = notice_for_error_code(self._params.error_code)
        if notice is None:
            return
        kind = "auth error" if is_known_error_code(self._params.error_code) else "unrecognized auth error"
        log.warning(f"Sign-in page opened with {kind} code: {self._params.error_code}")
        self._notify(notice.message, notice.severity)

    def _on_status(self, status: SessionStatus) -> None:
        if self._destroyed:
            return
        previous = self._last_status
        self._last_status = status
        if status == "authenticated" and previous != "authenticated":
            self._redirecting = True
            log.info(f"Session authenticated, redirecting to {self._params.return_target}")
            self._navigate_to(self._params.return_target)

    # --- rendering ---

    def render(self) -> LoginViewState:
        if self._redirecting:
            return LoginViewState(phase="redirecting")

        status = self._session.get()
        if status == "loading":
            return LoginViewState(phase="checking")
        if status == "authenticated":
            # Not mounted yet: the redirect effect has not run.
            return LoginViewState(phase="redirecting")

        return LoginViewState(
            phase="ready",
            banner=banner_for_error_code(self._params.error_code),
            sign_in_disabled=self._sign_in_in_flight,
            sign_in_label=SIGNING_IN_LABEL if self._sign_in_in_flight else SIGN_IN_LABEL,
        )

    # --- user action ---

    async def trigger_sign_in(self) -> bool:
        """
        Start the OAuth flow unless one is already running.

        Returns True when the OAuth capability was invoked. On success the in-flight
        flag stays set: the provider redirect takes the user away from this view.
        On failure the user is notified once and the flag is cleared so a later tap
        can retry.
        """
        if self._destroyed:
            return False
        if self._sign_in_in_flight:
            log.debug("Sign-in already in flight, ignoring tap")
            return False

        self._sign_in_in_flight = True
        try:
            result = self._begin_oauth_sign_in(self._provider, callback_url=self._params.return_target)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            if self._destroyed:
                log.info(f"Sign-in failed after the login view was torn down: {e}")
                return True
            log.error(f"{self._provider} sign-in error: {e}", exc_info=True)
            self._notify(SIGN_IN_FAILED_MESSAGE, "error")
            self._sign_in_in_flight = False
        return True
