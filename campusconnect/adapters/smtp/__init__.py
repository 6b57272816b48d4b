"""Email adapters - Notifier implementations."""

from .background import BackgroundNotifier
from .console import ConsoleEmailSender
from .sender import SmtpEmailSender

__all__ = ["BackgroundNotifier", "ConsoleEmailSender", "SmtpEmailSender"]
