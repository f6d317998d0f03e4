import json
import logging
import os
from urllib.parse import unquote

import streamlit as st
import streamlit.components.v1 as components
from streamlit.errors import StreamlitSecretNotFoundError

from use_cases.session_models import DEFAULT_RETURN_URL, SessionStatus

log = logging.getLogger(__name__)


class SignInError(Exception):
    pass


RETURN_URL_COOKIE = "qa_return_url"
RETURN_URL_COOKIE_MAX_AGE = 600  # 10 minutes, enough for the provider round trip

TOAST_ICONS = {
    "error": "🚨",
    "info": "ℹ️",
}


def get_secret(key):
    try:
        return st.secrets.get(key)
    except (FileNotFoundError, StreamlitSecretNotFoundError):
        return None


def get_setting(key, default=None):
    return get_secret(key) or os.getenv(key) or default


def default_return_url() -> str:
    return get_setting("LOGIN_DEFAULT_RETURN_URL", DEFAULT_RETURN_URL)


def oauth_provider() -> str:
    return get_setting("LOGIN_OAUTH_PROVIDER", "google")


def is_provider_configured(provider: str) -> bool:
    """True when `.streamlit/secrets.toml` has an [auth.<provider>] section."""
    auth_section = get_secret("auth")
    if not auth_section:
        return False
    try:
        return provider in auth_section
    except TypeError:
        return False


# --- session status ---

def current_session_status() -> SessionStatus:
    try:
        logged_in = bool(st.user.is_logged_in)
    except (AttributeError, KeyError):
        logged_in = False
    return "authenticated" if logged_in else "unauthenticated"


# --- query parameters ---

def read_login_query(session_status: SessionStatus) -> dict:
    """
    Snapshot of the navigation parameters for the login view.

    The identity provider sends the user back to the app root without our
    query string, so for an authenticated session a missing `returnUrl` is
    recovered from the cookie written by `remember_return_url`. Any other visit
    ignores the cookie.
    """
    params = {key: st.query_params.get(key) for key in st.query_params.keys()}
    if session_status == "authenticated" and not params.get("returnUrl"):
        remembered = _read_cookie(RETURN_URL_COOKIE)
        if remembered:
            params["returnUrl"] = unquote(remembered)
    return params


def _read_cookie(name):
    try:
        return st.context.cookies.get(name)
    except Exception:
        # Outside a browser session (tests, bare mode) there is no context.
        return None


# --- capabilities ---

def remember_return_url(path: str) -> None:
    # Written while the form is on screen, before any sign-in tap can navigate away.
    components.html(
        f"""
        <script>
            var cookieStr = "{RETURN_URL_COOKIE}=" + encodeURIComponent({json.dumps(path)}) +
                "; path=/; max-age={RETURN_URL_COOKIE_MAX_AGE}; SameSite=Lax";
            document.cookie = cookieStr;
            try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
        </script>
        """,
        height=0,
    )


async def begin_oauth_sign_in(provider: str, callback_url: str) -> None:
    """Start Streamlit's OIDC flow for `provider`; raises SignInError on failure."""
    if not is_provider_configured(provider):
        raise SignInError(f"OAuth provider '{provider}' is not configured in secrets.toml")

    log.info(f"Starting {provider} sign-in, callback {callback_url}")
    try:
        st.login(provider)
    except Exception as e:
        raise SignInError(f"Could not start {provider} sign-in") from e


def navigate_to(path: str) -> None:
    # Leaving the login view, so the remembered callback has served its purpose.
    components.html(
        f"""
        <script>
            var clearStr = "{RETURN_URL_COOKIE}=; path=/; max-age=0; SameSite=Lax";
            document.cookie = clearStr;
            try {{ window.parent.document.cookie = clearStr; }} catch (e) {{}}
            window.parent.location.assign({json.dumps(path)});
        </script>
        """,
        height=0,
    )


def notify(message: str, severity: str = "error") -> None:
    st.toast(message, icon=TOAST_ICONS.get(severity, TOAST_ICONS["info"]))
