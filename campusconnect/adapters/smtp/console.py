"""
Console email sender adapter - Implements Notifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging codes instead of sending mail, for local runs.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements Notifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints codes to stdout.
    """

    def send_verification_code(self, email: str, name: str, code: str) -> None:
        """
        Log verification code to console (simulates email delivery).

        The code is logged at INFO level to be visible in container logs.

        Args:
            email: Recipient email address (normalized by domain layer)
            name: Recipient display name
            code: 6-digit verification code
        """
        logger.info("[VERIFICATION] Email: %s Name: %s Code: %s", email, name, code)

    def send_password_reset_code(self, email: str, name: str, code: str) -> None:
        logger.info("[PASSWORD RESET] Email: %s Name: %s Code: %s", email, name, code)
