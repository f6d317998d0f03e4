"""Session DTOs shared across application layers."""

import logging
from typing import Callable, List, Literal, Optional

log = logging.getLogger(__name__)

SessionStatus = Literal["loading", "authenticated", "unauthenticated"]
SESSION_STATUSES = ("loading", "authenticated", "unauthenticated")

DEFAULT_RETURN_URL = "/qa"

StatusListener = Callable[[SessionStatus], None]


class SessionStatusCell:
    """
    Subscribable holder for the ambient session status.

    Starts in ``loading``. Subscribers are called with the new value only when
    ``set`` actually changes it; ``subscribe`` hands back the unsubscribe callable.
    """

    def __init__(self, initial: SessionStatus = "loading"):
        self._status = _validate_status(initial)
        self._listeners: List[StatusListener] = []

    def get(self) -> SessionStatus:
        return self._status

    def set(self, status: SessionStatus) -> None:
        status = _validate_status(status)
        if status == self._status:
            return
        log.debug(f"Session status {self._status} -> {status}")
        self._status = status
        # Copy: a listener may unsubscribe while we iterate.
        for listener in list(self._listeners):
            listener(status)

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)


def _validate_status(status: str) -> SessionStatus:
    if status not in SESSION_STATUSES:
        raise ValueError(f"Unknown session status: {status!r}")
    return status


def resolve_return_target(return_url: Optional[str], fallback: str = DEFAULT_RETURN_URL) -> str:
    """Path to land on after sign-in; an empty or missing ``returnUrl`` falls back."""
    if not return_url:
        return fallback
    return return_url


def resolve_error_code(error: Optional[str]) -> Optional[str]:
    if not error:
        return None
    return error
