"""
Profile provisioning and role checks.

Every write that references a profile (design submission, team join) goes
through ensure_profile first, so a signed-in user without a profile row is
provisioned on demand instead of failing the ownership foreign key.
"""
import logging

from django.db import DatabaseError

from accounts.models import Profile
from common.errors import AuthError, InfrastructureError, InsufficientRoleError

logger = logging.getLogger(__name__)

REVIEWER_ROLES = ("admin", "mentor")

PROFILE_EDITABLE_FIELDS = (
    "first_name",
    "last_name",
    "username",
    "bio",
    "phone",
    "location",
    "linkedin_url",
    "github_url",
    "portfolio_url",
    "years_of_experience",
)


def require_identity(user):
    """Return the user when authenticated, raise AuthError otherwise."""
    if user is None or not getattr(user, "is_authenticated", False):
        raise AuthError("User not authenticated. Please log in again.")
    return user


def get_profile(user):
    """Existing profile for an authenticated user, or None."""
    require_identity(user)
    try:
        return Profile.objects.filter(user_id=user.pk).first()
    except DatabaseError as e:
        raise InfrastructureError(cause=e)


def ensure_profile(user, first_name: str = "", last_name: str = "") -> Profile:
    """
    Return the caller's profile, creating it with role 'student' when missing.

    get_or_create tolerates a concurrent duplicate create: the loser of the
    race re-reads the row the winner inserted.
    """
    require_identity(user)
    email = (user.email or "").lower()
    try:
        profile, created = Profile.objects.get_or_create(
            user_id=user.pk,
            defaults={
                "email": email,
                "first_name": first_name or "",
                "last_name": last_name or "",
                "username": email.split("@")[0] if email else "",
                "role": "student",
            },
        )
    except DatabaseError as e:
        raise InfrastructureError(cause=e)
    if created:
        logger.info("ensure_profile: created profile user=%s", user.pk)
    return profile


def require_role(user, roles=REVIEWER_ROLES) -> Profile:
    """Return the caller's profile when its role is one of ``roles``."""
    profile = get_profile(user)
    if profile is None or profile.role not in roles:
        raise InsufficientRoleError("Insufficient permissions")
    return profile


def update_profile(user, **changes) -> Profile:
    """Update the caller's own editable profile fields; unknown keys are ignored."""
    profile = ensure_profile(user)
    fields = [name for name in PROFILE_EDITABLE_FIELDS if name in changes]
    for name in fields:
        setattr(profile, name, changes[name])
    if fields:
        try:
            profile.save(update_fields=fields + ["updated_at"])
        except DatabaseError as e:
            raise InfrastructureError(cause=e)
    return profile
