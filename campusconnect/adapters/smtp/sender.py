"""
SMTP email sender adapter - Implements Notifier protocol.

Sends plain-text plus HTML verification and reset emails through a
standard SMTP relay using smtplib. Delivery errors propagate; callers
wrap this sender in BackgroundNotifier so they never see them.
"""

import logging
import smtplib
from email.message import EmailMessage

logger = logging.getLogger(__name__)

_VERIFY_HTML = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="text-align: center;">Welcome to CampusConnect!</h2>
  <p>Hi {name},</p>
  <p>Please verify your email address using the code below:</p>
  <h1 style="text-align: center; letter-spacing: 5px;">{code}</h1>
  <p style="font-size: 12px; text-align: center;">Expires in {minutes} minutes.</p>
</div>
"""

_RESET_HTML = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="text-align: center;">Password Reset</h2>
  <p>Hi {name},</p>
  <p>You requested a password reset. Use this code:</p>
  <h1 style="text-align: center; letter-spacing: 5px;">{code}</h1>
  <p style="font-size: 12px; text-align: center;">Expires in {minutes} minutes.</p>
</div>
"""


class SmtpEmailSender:
    """
    Implements Notifier protocol via SMTP.

    Opens one connection per message; volume is a handful of emails
    per signup or reset.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        *,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
        code_ttl_minutes: int = 15,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout
        self._code_ttl_minutes = code_ttl_minutes

    def send_verification_code(self, email: str, name: str, code: str) -> None:
        self._send(
            email,
            "Verify Your CampusConnect Account",
            f"Hi {name},\n\nYour CampusConnect verification code is {code}.\n"
            f"It expires in {self._code_ttl_minutes} minutes.\n",
            _VERIFY_HTML.format(name=name, code=code, minutes=self._code_ttl_minutes),
        )

    def send_password_reset_code(self, email: str, name: str, code: str) -> None:
        self._send(
            email,
            "Reset Your CampusConnect Password",
            f"Hi {name},\n\nYour CampusConnect password reset code is {code}.\n"
            f"It expires in {self._code_ttl_minutes} minutes.\n",
            _RESET_HTML.format(name=name, code=code, minutes=self._code_ttl_minutes),
        )

    def _send(self, to: str, subject: str, text: str, html: str) -> None:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text)
        message.add_alternative(html, subtype="html")

        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            if self._use_tls:
                smtp.starttls()
            if self._username:
                smtp.login(self._username, self._password or "")
            smtp.send_message(message)
        logger.info("Email sent to %s: %s", to, subject)
