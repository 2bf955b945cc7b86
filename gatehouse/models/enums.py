"""
Enums shared by models, guards and schemas.

This module defines:
- ValidPermission: the closed catalog of capability tokens a role can grant
"""

import enum


class ValidPermission(str, enum.Enum):
    """
    Capability tokens recognized by the system.

    Every Permission row is named after one of these members and every
    guarded operation declares its requirement with them.

    Attributes:
        read: View users and their country
        write: Modify users and run the seed
        delete: Deactivate (soft delete) users
        administrator: Inspect a user's role and granted permissions

    Usage:
        Auth = auth(ValidPermission.read)
        ValidPermission.is_valid("read")  # True
        ValidPermission.parse("raed")     # ValueError
    """

    read = "read"
    write = "write"
    delete = "delete"
    administrator = "administrator"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def is_valid(cls, token: object) -> bool:
        """Report whether token names a recognized capability. Never raises."""
        return isinstance(token, str) and token in cls._value2member_map_

    @classmethod
    def parse(cls, token: "str | ValidPermission") -> "ValidPermission":
        """
        Convert a token to its catalog member.

        Raises:
            ValueError: If token is not a recognized capability
        """
        if isinstance(token, cls):
            return token
        if not cls.is_valid(token):
            raise ValueError(
                f"Unknown permission {token!r}; expected one of: "
                f"{', '.join(member.value for member in cls)}"
            )
        return cls(token)
