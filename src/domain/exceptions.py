"""
Domain exceptions - Errors raised by adapters across the port boundary.

Expected registration outcomes travel as Result values (see errors.py).
These exceptions cover the cases where a storage adapter must signal a
business rule violation it detected itself, such as a unique constraint.
"""


class RegistrationError(Exception):
    """Base class for registration domain exceptions."""

    pass


class EmailAlreadyClaimed(RegistrationError):
    """Storage rejected an account because its email is already taken."""

    pass
