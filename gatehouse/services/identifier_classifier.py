"""
Classification of free-text user search terms.

A single path segment such as ``/user/{term}`` may carry a user id, an email
address or a display name. classify() decides which one it is, in a fixed
order where the first match wins:

1. canonical UUID            -> LookupStrategy.BY_ID
2. numeric literal           -> LookupStrategy.UNRESOLVABLE
3. email address             -> LookupStrategy.BY_EMAIL
4. anything else             -> LookupStrategy.BY_NAME

Numeric terms can be neither an id, an email nor a name we would match on,
so they are reported as unresolvable and the directory answers NotFound.
"""

import enum
import re
import uuid
from dataclasses import dataclass
from typing import Any

import email_validator
from email_validator import EmailNotValidError, validate_email
from sqlalchemy import ColumnElement

from gatehouse.models.user import User

# 8-4-4-4-12 hex digits, any version, case-insensitive
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# ASCII decimal and exponent forms, Infinity, and 0x/0o/0b integer literals
NUMERIC_PATTERN = re.compile(
    r"^[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|Infinity)$"
    r"|^0[xX][0-9a-fA-F]+$"
    r"|^0[oO][0-7]+$"
    r"|^0[bB][01]+$",
    re.ASCII,
)

# Directory addresses may live on special-use domains such as .local or .test.
# The list is read at validation time, so this also applies to EmailStr fields.
email_validator.SPECIAL_USE_DOMAIN_NAMES[:] = []


class LookupStrategy(str, enum.Enum):
    """How a search term is matched against the users table."""

    BY_ID = "id"
    BY_EMAIL = "email"
    BY_NAME = "name"
    UNRESOLVABLE = "unresolvable"


@dataclass(frozen=True)
class UserLookup:
    """
    Result of classifying a search term.

    Attributes:
        term: The original search term
        strategy: Which column the term is matched against
        value: The typed value to compare (uuid.UUID for BY_ID)
    """

    term: str
    strategy: LookupStrategy
    value: Any = None

    @property
    def is_resolvable(self) -> bool:
        return self.strategy is not LookupStrategy.UNRESOLVABLE

    def predicate(self) -> ColumnElement[bool]:
        """
        Build the WHERE clause for this lookup.

        Raises:
            ValueError: For an unresolvable lookup, which has no predicate
        """
        if self.strategy is LookupStrategy.BY_ID:
            return User.id == self.value
        if self.strategy is LookupStrategy.BY_EMAIL:
            return User.email == self.value
        if self.strategy is LookupStrategy.BY_NAME:
            return User.full_name == self.value
        raise ValueError(f"Search term {self.term!r} cannot be resolved to a lookup")


def is_uuid(term: str) -> bool:
    return bool(UUID_PATTERN.match(term))


def is_numeric(term: str) -> bool:
    """Blank strings count as numeric (they coerce to zero)."""
    stripped = term.strip()
    return not stripped or bool(NUMERIC_PATTERN.match(stripped))


def is_email(term: str) -> bool:
    """Email address shape. Special-use domains are accepted; the domain needs a dot."""
    try:
        result = validate_email(term, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return "." in result.domain


def classify(term: str) -> UserLookup:
    """
    Classify a search term into exactly one lookup strategy.

    Never raises; an unusable term yields LookupStrategy.UNRESOLVABLE.

    Example:
        >>> classify("jane@example.com").strategy
        <LookupStrategy.BY_EMAIL: 'email'>
        >>> classify("42").strategy
        <LookupStrategy.UNRESOLVABLE: 'unresolvable'>
    """
    if is_uuid(term):
        return UserLookup(term, LookupStrategy.BY_ID, uuid.UUID(term))
    if is_numeric(term):
        return UserLookup(term, LookupStrategy.UNRESOLVABLE)
    if is_email(term):
        return UserLookup(term, LookupStrategy.BY_EMAIL, term)
    return UserLookup(term, LookupStrategy.BY_NAME, term)
