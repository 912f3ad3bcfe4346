"""
Shared API dependencies.

Authentication is handled upstream; the gateway forwards the caller's
user id in the ``X-User-Id`` header.  A missing or invalid header is a
422 validation error.
"""

from fastapi import Header


def get_current_user_id(x_user_id: int = Header(..., alias="X-User-Id", ge=1)) -> int:
    """The authenticated caller's user id."""
    return x_user_id
