"""
Verification email composition.

Builds the MailMessage sent on registration and on resend. The body is
an HTML template filled with the account name, email and code.
"""

import re
from html import escape
from string import Template

from .ports import MailMessage

VERIFICATION_SUBJECT = "Registration confirmation"

_VERIFICATION_TEMPLATE = Template(
    """<!DOCTYPE html>
<html>
  <body>
    <p>Hello, $name!</p>
    <p>Use the code below to confirm the registration of <strong>$email</strong>:</p>
    <h2>$code</h2>
    <p>If you did not request this, ignore this message.</p>
  </body>
</html>
"""
)
# Matches the <h2> line of the template above
_CODE_PATTERN = re.compile(r"<h2>(\d+)</h2>")


def build_verification_message(sender: str, name: str, email: str, code: str) -> MailMessage:
    """
    Render the verification email for an account.

    Args:
        sender: From address
        name: Account display name
        email: Recipient address
        code: Verification code to deliver

    Returns:
        MailMessage ready for an EmailSender
    """
    body = _VERIFICATION_TEMPLATE.substitute(
        name=escape(name),
        email=escape(email),
        code=escape(code),
    )
    return MailMessage(sender=sender, to=email, subject=VERIFICATION_SUBJECT, body=body)


def verification_code_in(body: str) -> str | None:
    """Return the code rendered into a verification body, or None if absent."""
    match = _CODE_PATTERN.search(body)
    return match.group(1) if match else None
