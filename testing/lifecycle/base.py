from django.conf import settings
from django.db import transaction

from accounts.models import CustomUser, Profile
from designs import services as design_services
from designs.models import Design

SCENARIO_TAG_PREFIX = "[lifecycle_scenario]"


def ensure_user(email, first_name, last_name, role):
    user, _ = CustomUser.objects.get_or_create(
        email=email,
        defaults={"is_email_verified": True, "is_active": True},
    )
    user.is_email_verified = True
    user.is_active = True
    user.save(update_fields=["is_email_verified", "is_active"])

    profile, _ = Profile.objects.get_or_create(
        user=user,
        defaults={
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "username": email.split("@")[0],
            "role": role,
        },
    )
    if profile.role != role:
        profile.role = role
        profile.save(update_fields=["role"])
    return user


def ensure_test_users():
    """Reviewer (admin role) plus two student members."""
    reviewer = ensure_user("test_reviewer@local.test", "Test", "Reviewer", "admin")
    member_a = ensure_user("test_member_a@local.test", "Test", "Member A", "student")
    member_b = ensure_user("test_member_b@local.test", "Test", "Member B", "student")
    return reviewer, member_a, member_b


def assert_scenarios_enabled():
    if not settings.ALLOW_TEST_SCENARIOS:
        raise Exception("Test scenarios disabled in this environment.")


@transaction.atomic()
def cleanup_scenario_data(scenario_name=None):
    """
    Delete designs tagged by a scenario; history, comments and team
    memberships go with them. Without a name, every scenario's data goes.
    """
    marker = f"{SCENARIO_TAG_PREFIX}:{scenario_name}" if scenario_name else SCENARIO_TAG_PREFIX
    Design.objects.filter(description__icontains=marker).delete()


def submit_scenario_design(*, scenario_name, owner, type="landing_page", pages_count=1, name=None):
    return design_services.submit_design(
        owner,
        name=name or f"Scenario design ({scenario_name})",
        type=type,
        pages_count=pages_count,
        description=f"{SCENARIO_TAG_PREFIX}:{scenario_name}",
    )


def create_design_in_development(*, scenario_name, owner, reviewer, type="landing_page", pages_count=1, name=None):
    design = submit_scenario_design(
        scenario_name=scenario_name, owner=owner, type=type, pages_count=pages_count, name=name,
    )
    design_services.accept_design(reviewer, design.id, notes="Accepted by scenario runner")
    design_services.start_development(reviewer, design.id)
    return Design.objects.get(id=design.id)
