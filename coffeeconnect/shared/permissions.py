"""
Role capability checks.

Every role-gated action in the services goes through one of these so the
rules live in a single place.
"""

from typing import Optional, Union

from ..models import UserRole

RoleLike = Union[UserRole, str, None]


def _role(role: RoleLike) -> Optional[UserRole]:
    if role is None:
        return None
    try:
        return UserRole(role)
    except ValueError:
        return None


def is_administrator(role: RoleLike) -> bool:
    return _role(role) == UserRole.ADMINISTRATOR


def can_delete_booked_timeslot(role: RoleLike) -> bool:
    return is_administrator(role)


def can_delete_any_timeslot(role: RoleLike) -> bool:
    """Delete an open timeslot hosted by someone else"""
    return is_administrator(role)


def can_cancel_any_meeting(role: RoleLike) -> bool:
    return is_administrator(role)


def can_approve_location(role: RoleLike) -> bool:
    return is_administrator(role)


def can_delete_location(role: RoleLike) -> bool:
    return is_administrator(role)


def can_post_announcement(role: RoleLike) -> bool:
    return _role(role) in (UserRole.LEADER, UserRole.ADMINISTRATOR)


def can_delete_announcement(role: RoleLike) -> bool:
    return is_administrator(role)


def can_change_roles(role: RoleLike) -> bool:
    return is_administrator(role)


def can_manage_users(role: RoleLike) -> bool:
    """Edit or delete another member's profile"""
    return is_administrator(role)
