"""
Derived profile stats: points, level and badges.

compute_stats is a pure function of a profile's designs, team memberships and
catalog awards. Nothing it returns is persisted; derived badges (completed
designs, completed developments, New Member) are rebuilt on every read and
kept apart from the catalog awards they are merged with.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from django.db import DatabaseError

from achievements import config
from achievements.models import UserAchievement
from common.errors import InfrastructureError


@dataclass(frozen=True)
class Badge:
    key: str
    name: str
    description: str
    source: str  # "catalog" or "derived"
    icon_url: Optional[str] = None
    badge_color: Optional[str] = None


@dataclass(frozen=True)
class ProfileStats:
    design_count: int
    development_count: int
    design_points: int
    development_points: int
    points: int
    level: int
    points_to_next_level: int
    badges: Tuple[Badge, ...]


def design_points(designs) -> int:
    return sum(
        design.pages_count * config.POINTS_PER_DESIGN_PAGE
        for design in designs
        if design.status in config.SCORED_DESIGN_STATUSES
    )


def development_points(memberships) -> int:
    completed = sum(1 for membership in memberships if membership.design.status == "completed")
    return completed * config.POINTS_PER_COMPLETED_DEVELOPMENT


def level_for_points(points: int) -> int:
    return points // config.POINTS_PER_LEVEL + 1


def catalog_badges(awards):
    for award in awards:
        achievement = award.achievement
        yield Badge(
            key=f"achievement-{achievement.id}",
            name=achievement.name,
            description=achievement.description,
            source="catalog",
            icon_url=achievement.icon_url or None,
            badge_color=achievement.badge_color or None,
        )


def derived_badges(designs, memberships):
    for design in designs:
        if design.status == "completed":
            yield Badge(
                key=f"design-completed-{design.id}",
                name="Design Completed",
                description=f'Your design "{design.name}" was built by the community.',
                source="derived",
                badge_color=config.DESIGN_COMPLETED_BADGE_COLOR,
            )
    for membership in memberships:
        if membership.design.status == "completed":
            yield Badge(
                key=f"development-completed-{membership.id}",
                name="Development Completed",
                description=f'Helped build "{membership.design.name}".',
                source="derived",
                badge_color=config.DEVELOPMENT_COMPLETED_BADGE_COLOR,
            )
    yield Badge(source="derived", **config.NEW_MEMBER_BADGE)


def compute_stats(designs, memberships, awards) -> ProfileStats:
    """
    Args:
        designs: the profile's designs (id, name, status, pages_count).
        memberships: the profile's team memberships, each with ``design``.
        awards: the profile's catalog awards, each with ``achievement``.

    Badge order follows input order: catalog awards, completed designs,
    completed memberships, then New Member.
    """
    designs = list(designs)
    memberships = list(memberships)
    d_points = design_points(designs)
    dev_points = development_points(memberships)
    points = d_points + dev_points
    return ProfileStats(
        design_count=len(designs),
        development_count=sum(1 for m in memberships if m.design.status == "completed"),
        design_points=d_points,
        development_points=dev_points,
        points=points,
        level=level_for_points(points),
        points_to_next_level=config.POINTS_PER_LEVEL - points % config.POINTS_PER_LEVEL,
        badges=tuple(catalog_badges(awards)) + tuple(derived_badges(designs, memberships)),
    )


def load_profile_stats(profile) -> ProfileStats:
    """Query a profile's rows in a stable order and compute its stats."""
    try:
        designs = list(profile.designs.order_by("id"))
        memberships = list(profile.team_memberships.select_related("design").order_by("id"))
        awards = list(
            UserAchievement.objects.filter(profile=profile)
            .select_related("achievement")
            .order_by("id")
        )
    except DatabaseError as e:
        raise InfrastructureError(cause=e)
    return compute_stats(designs, memberships, awards)
