"""
Background notifier - fire-and-forget wrapper around any Notifier.

Each send is submitted to a thread pool and the call returns at once.
The task keeps no reference to the request that triggered it, so a
client disconnect does not cancel it. Failures are logged from a
done-callback and never reach the caller.
"""

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from campusconnect.domain.ports import Notifier

logger = logging.getLogger(__name__)


class BackgroundNotifier:
    """Implements Notifier protocol by dispatching to a wrapped notifier."""

    def __init__(self, notifier: Notifier, max_workers: int = 4) -> None:
        self._notifier = notifier
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notifier"
        )

    def send_verification_code(self, email: str, name: str, code: str) -> Future:
        return self._dispatch(self._notifier.send_verification_code, email, name, code)

    def send_password_reset_code(self, email: str, name: str, code: str) -> Future:
        return self._dispatch(self._notifier.send_password_reset_code, email, name, code)

    def shutdown(self, wait: bool = False) -> None:
        self._executor.shutdown(wait=wait)

    def _dispatch(
        self, send: Callable[[str, str, str], None], email: str, name: str, code: str
    ) -> Future:
        future = self._executor.submit(send, email, name, code)
        future.add_done_callback(lambda f: _log_outcome(f, email))
        return future


def _log_outcome(future: Future, email: str) -> None:
    if future.cancelled():
        logger.warning("Email delivery to %s cancelled", email)
        return
    exc = future.exception()
    if exc is not None:
        logger.error(
            "Email delivery to %s failed", email, exc_info=(type(exc), exc, exc.__traceback__)
        )
    else:
        logger.debug("Email delivery to %s complete", email)
