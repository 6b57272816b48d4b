"""
Notification dispatch from domain services.

Sending is fire-and-forget: by the time a notifier is called the
account state is already persisted, so a failed send is logged and
never turned into a failed request.
"""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


def notify_quietly(send: Callable[[str, str, str], None], email: str, name: str, code: str) -> None:
    try:
        send(email, name, code)
    except Exception:
        logger.exception("Failed to dispatch notification to %s", email)
