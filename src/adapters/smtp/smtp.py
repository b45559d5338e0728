"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers HTML messages through an SMTP relay with smtplib. Delivery
failures are logged and reported as False; the caller decides whether
the failure matters.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from src.domain.ports import MailMessage

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """Implements EmailSender protocol via smtplib."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def send(self, message: MailMessage) -> bool:
        mime = MIMEMultipart("alternative")
        mime["Subject"] = message.subject
        mime["From"] = message.sender
        mime["To"] = message.to
        mime.attach(MIMEText(message.body, "html", "utf-8"))

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                if self._use_tls:
                    server.starttls()
                if self._username and self._password:
                    server.login(self._username, self._password)
                server.sendmail(message.sender, [message.to], mime.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email to '%s' was not sent due to an error: %s", message.to, e)
            return False

        logger.info("Validation email sent to '%s' successfully", message.to)
        return True
