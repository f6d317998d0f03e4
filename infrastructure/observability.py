"""
Centralized Observability Infrastructure.
Provides structured logging setup and Sentry SDK initialization
governed entirely by environment variables.
"""

import os
import logging
import re
from typing import Any, Dict

import sentry_sdk

log = logging.getLogger(__name__)

# Patterns to scrub in logs and Sentry events
SENSITIVE_PATTERNS = [
    re.compile(r"([a-zA-Z0-9_\-]{30,})"),  # Catch tokens/dsn looking strings
    re.compile(r"([a-z0-9]{32})", re.IGNORECASE),  # Catch md5 hashes/salts
]

# OAuth redirect parameters that must never leave the server
OAUTH_QUERY_PATTERN = re.compile(r"\b(code|state|id_token|access_token)=[^&\s]+")


def _mask_string(val: str) -> str:
    val = OAUTH_QUERY_PATTERN.sub(r"\1=[REDACTED]", val)
    for pattern in SENSITIVE_PATTERNS:
        val = pattern.sub("[REDACTED]", val)
    return val


def _recursive_scrub(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _recursive_scrub(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_recursive_scrub(i) for i in obj]
    elif isinstance(obj, str):
        return _mask_string(obj)
    return obj


def _scrub_sensitive_data(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sentry before_send hook. Scrubs tokens and OAuth redirect parameters
    from stack-frame variables and request data before they leave the server.
    """
    for exc in event.get("exception", {}).get("values", []):
        for frame in exc.get("stacktrace", {}).get("frames", []):
            if "vars" in frame:
                frame["vars"] = _recursive_scrub(frame["vars"])

    request = event.get("request")
    if request:
        for key in ("url", "query_string"):
            if isinstance(request.get(key), str):
                request[key] = _mask_string(request[key])

    return event


def setup_observability() -> None:
    """
    Initializes global system logging and Sentry (if DSN is present).
    Should be called once at application startup.
    """

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    # Complete format: 2026-02-27 15:00:00 | INFO    | module.name | The message
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    sentry_dsn = os.getenv("SENTRY_DSN")
    if sentry_dsn:
        sentry_env = os.getenv("SENTRY_ENV", "development")
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=sentry_env,
            traces_sample_rate=1.0,
            send_default_pii=False,
            before_send=_scrub_sensitive_data
        )
        log.info(f"Sentry SDK initialized (env: {sentry_env})")
    else:
        log.info("SENTRY_DSN not provided. Running without Sentry.")

    # Quiet down noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("authlib").setLevel(logging.WARNING)
    logging.getLogger("tornado.access").setLevel(logging.WARNING)
