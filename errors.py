"""
errors.py – Exceptions raised while running the story scenarios.
"""


class AuthenticationError(Exception):
    """Login failed or returned no usable token. Aborts the whole run."""


class PreconditionError(Exception):
    """A scenario needs state that an earlier scenario did not produce."""


class ExpectationError(AssertionError):
    """An observed status code or body did not match the expectation."""


class ParseError(ValueError):
    """A response body is not the structured data a lookup expected."""
