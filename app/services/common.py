"""
Shared service helpers.

Services run one request per :class:`Session` and commit once, as a unit
of work.  Domain errors from the core roll the whole request back and
reach the client as HTTP errors with the message passed through.
"""

import datetime
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status
from sqlmodel import Session

from app.atlas.errors import AtlasError, ErrorCode, InvalidStateError
from app.db.repositories.user import UserRepository
from app.models.user import User

_STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
}


def http_error(exc: AtlasError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""
    return HTTPException(
        status_code=_STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST),
        detail=exc.message,
    )


@contextmanager
def unit_of_work(session: Session) -> Iterator[None]:
    """Commit on success, roll back on any error."""
    try:
        yield
        session.commit()
    except AtlasError as exc:
        session.rollback()
        raise http_error(exc) from exc
    except Exception:
        session.rollback()
        raise


def require_user(session: Session, user_id: int) -> User:
    user = UserRepository(session).get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def ensure_not_past(date: datetime.date, today: datetime.date) -> None:
    """Past workouts are history: nothing may be written to them."""
    if date < today:
        raise InvalidStateError(f"{date.isoformat()} is in the past and can no longer be changed")
