"""
Principal extraction.

Views never hand ``request.user`` to the services.  They resolve a
:class:`Principal` here and pass it explicitly, so that authorization
decisions in ``booking.services`` only depend on the values they are
given.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Principal:
    user_id: int
    hospital_id: int
    email: str = ''


def principal_for_user(user) -> Optional[Principal]:
    """Return the principal for an authenticated hospital account, else None."""
    if not (user and getattr(user, 'is_authenticated', False)):
        return None
    hospital_id = getattr(user, 'hospital_id', None)
    if hospital_id is None:
        return None
    return Principal(user_id=user.id, hospital_id=hospital_id, email=user.email or '')


def get_principal(request) -> Optional[Principal]:
    return principal_for_user(getattr(request, 'user', None))
