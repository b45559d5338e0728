"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging outgoing messages for development use.
"""

import logging

from src.domain.mail import verification_code_in
from src.domain.ports import MailMessage

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints verification codes to stdout.
    """

    def send(self, message: MailMessage) -> bool:
        """
        Log the message to console (simulates email delivery).

        The code is logged at INFO level to be visible in container logs.

        Args:
            message: Rendered verification message

        Returns:
            Always True
        """
        code = verification_code_in(message.body) or "-"
        logger.info(
            "[VERIFICATION] Email: %s Subject: %s Code: %s", message.to, message.subject, code
        )
        return True
