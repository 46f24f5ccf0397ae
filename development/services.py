"""
Development board: team reads, team joining and development statistics.

Joining a team runs these checks in order:
1. the design must be accepted or in development (NotFoundError)
2. the team must have a free slot, one per page (CapacityError)
3. the caller must not already be on this team (ConflictError)
4. the caller must not be on another in-development team (PolicyError)

The capacity check is check-then-insert without a lock; two users racing for
the last slot can both get in. Expected concurrency is near zero.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from accounts.services import ensure_profile, require_identity
from common.errors import (
    CapacityError,
    ConflictError,
    InfrastructureError,
    NotFoundError,
    PolicyError,
    ValidationError,
)
from designs import config as design_config
from designs.models import Design
from development.models import TeamMembership

logger = logging.getLogger(__name__)

DEFAULT_MEMBER_ROLE = "developer"


@dataclass(frozen=True)
class TeamMember:
    """One team slot, flattened with the member's public profile fields."""
    user_id: int
    design_id: int
    joined_at: datetime
    role: str
    email: str
    first_name: str
    last_name: str
    username: str

    @classmethod
    def from_membership(cls, membership):
        profile = membership.user
        return cls(
            user_id=membership.user_id,
            design_id=membership.design_id,
            joined_at=membership.joined_at,
            role=membership.role,
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            username=profile.username,
        )


@dataclass
class DevelopmentDesign:
    design: Design
    team: List[TeamMember] = field(default_factory=list)

    @property
    def joined_count(self) -> int:
        return len(self.team)

    @property
    def open_slots(self) -> int:
        return max(0, self.design.pages_count - self.joined_count)

    @property
    def is_full(self) -> bool:
        return self.joined_count >= self.design.pages_count

    def has_member(self, user_id) -> bool:
        return any(member.user_id == user_id for member in self.team)


def get_teams(design_ids) -> Dict[int, List[TeamMember]]:
    """
    Team members per design, ordered by join time.

    A failing team query (missing or misconfigured table) degrades to empty
    teams instead of failing the whole board. This is the only read that
    swallows a database error.
    """
    design_ids = list(design_ids)
    teams = {design_id: [] for design_id in design_ids}
    if not design_ids:
        return teams
    try:
        with transaction.atomic():
            rows = list(
                TeamMembership.objects.filter(design_id__in=design_ids)
                .select_related("user")
                .order_by("joined_at", "id")
            )
    except DatabaseError as e:
        logger.warning("get_teams: team members unavailable, showing empty teams: %s", e)
        return teams
    for row in rows:
        teams[row.design_id].append(TeamMember.from_membership(row))
    return teams


def get_team(design_id) -> List[TeamMember]:
    return get_teams([design_id])[design_id]


def list_user_team_design_ids(user) -> List[int]:
    """Ids of designs the caller has joined; degrades to [] like get_teams."""
    require_identity(user)
    try:
        with transaction.atomic():
            return list(
                TeamMembership.objects.filter(user_id=user.pk)
                .order_by("design_id")
                .values_list("design_id", flat=True)
            )
    except DatabaseError as e:
        logger.warning("list_user_team_design_ids: team members unavailable for user=%s: %s", user.pk, e)
        return []


def active_project_id(user) -> Optional[int]:
    """Design id of the caller's in-development team, if any."""
    require_identity(user)
    try:
        return (
            TeamMembership.objects.filter(user_id=user.pk, design__status="in_development")
            .order_by("joined_at", "id")
            .values_list("design_id", flat=True)
            .first()
        )
    except DatabaseError as e:
        raise InfrastructureError(cause=e)


def list_development_designs(status=None) -> List[DevelopmentDesign]:
    """Accepted, in-development and completed designs, newest first, with their teams."""
    if status is not None and status not in design_config.DEVELOPMENT_STATUSES:
        raise ValidationError(f"Unknown development status '{status}'.")
    statuses = [status] if status else list(design_config.DEVELOPMENT_STATUSES)
    try:
        designs = list(
            Design.objects.filter(status__in=statuses)
            .select_related("owner")
            .order_by("-created_at", "-id")
        )
    except DatabaseError as e:
        raise InfrastructureError(cause=e)
    teams = get_teams(design.id for design in designs)
    return [DevelopmentDesign(design=design, team=teams[design.id]) for design in designs]


def join_team(user, design_id) -> TeamMembership:
    """
    Claim a slot on a design's development team.

    Raises:
        AuthError: caller not authenticated.
        NotFoundError: design missing or not accepted / in development.
        CapacityError: every page already has a member.
        ConflictError: caller already joined this design.
        PolicyError: caller is already on another in-development design.
        InfrastructureError: team storage unavailable.
    """
    require_identity(user)
    try:
        design = Design.objects.filter(id=design_id, status__in=design_config.JOINABLE_STATUSES).first()
        if design is None:
            raise NotFoundError("Project not found.")

        joined_count = TeamMembership.objects.filter(design=design).count()
        if joined_count >= design.pages_count:
            raise CapacityError("This project team is already full.")

        if TeamMembership.objects.filter(design=design, user_id=user.pk).exists():
            raise ConflictError("You have already joined this project.")

        has_other_active = (
            TeamMembership.objects.filter(user_id=user.pk, design__status="in_development")
            .exclude(design=design)
            .exists()
        )
        if has_other_active:
            raise PolicyError(
                "You can only participate in one ongoing project at a time. "
                "Finish your current project before joining another."
            )

        profile = ensure_profile(user)
        try:
            with transaction.atomic():
                membership = TeamMembership.objects.create(
                    design=design,
                    user=profile,
                    joined_at=timezone.now(),
                    role=DEFAULT_MEMBER_ROLE,
                )
        except IntegrityError:
            raise ConflictError("You have already joined this project.")
    except DatabaseError as e:
        raise InfrastructureError("Development team feature is not yet available. Please try again later.", cause=e)

    logger.info(
        "join_team: user=%s design=%s slot=%s/%s",
        user.pk, design.id, joined_count + 1, design.pages_count,
    )
    return membership


def development_stats() -> Dict[str, int]:
    """Number of designs per development status, plus the total."""
    stats = {status: 0 for status in design_config.DEVELOPMENT_STATUSES}
    try:
        rows = (
            Design.objects.filter(status__in=design_config.DEVELOPMENT_STATUSES)
            .values("status")
            .annotate(total=Count("id"))
            .order_by()
        )
        for row in rows:
            stats[row["status"]] = row["total"]
    except DatabaseError as e:
        raise InfrastructureError(cause=e)
    stats["total"] = sum(stats.values())
    return stats
