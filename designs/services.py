"""
Design lifecycle: submission, owner edits while pending, and the admin/mentor
operated status machine.

    pending --accept--> accepted --start_development--> in_development --complete--> completed
    pending --reject--> rejected

Status changes are compare-and-set updates (``WHERE status = <source>``), so
a transition that lost a race or was already applied fails with
InvalidTransitionError instead of being recorded twice.
"""
import logging
from urllib.parse import urlparse

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Count
from django.utils import timezone

from accounts.services import ensure_profile, get_profile, require_identity, require_role
from common.errors import (
    InfrastructureError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from designs import config
from designs.models import Design, DesignComment, DesignStatusHistory

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "type", "pages_count", "figma_link", "description")


def is_valid_figma_link(link: str) -> bool:
    try:
        parsed = urlparse(link)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and (parsed.hostname or "") in config.FIGMA_HOSTS


def _clean_pages_count(value) -> int:
    if isinstance(value, bool):
        raise ValidationError("Number of pages must be a whole number.")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError("Number of pages must be a whole number.")
    try:
        pages_count = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Number of pages must be a whole number.")
    if pages_count < 1:
        raise ValidationError("Number of pages must be at least 1.")
    return pages_count


def check_page_rule(design_type: str, pages_count: int) -> None:
    """Type-specific page-count rule; a no-op when enforcement is switched off."""
    if not getattr(settings, "DESIGN_ENFORCE_PAGE_RULES", True):
        return
    min_pages, max_pages = config.TYPE_PAGE_RULES[design_type]
    label = config.TYPE_LABELS[design_type]
    if min_pages == max_pages and pages_count != min_pages:
        raise ValidationError(f"A {label.lower()} must have exactly {min_pages} page{'s' if min_pages > 1 else ''}.")
    if pages_count < min_pages:
        raise ValidationError(f"A {label.lower()} requires at least {min_pages} pages.")
    if max_pages is not None and pages_count > max_pages:
        raise ValidationError(f"A {label.lower()} allows at most {max_pages} pages.")


def _check_max_length(field_name: str, value, label: str) -> None:
    max_length = Design._meta.get_field(field_name).max_length
    if value is not None and len(value) > max_length:
        raise ValidationError(f"{label} must be at most {max_length} characters.")


def _clean_optional_text(value, label: str):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be text.")
    return value.strip() or None


def validate_submission(*, name, type, pages_count, figma_link=None, description=None) -> dict:
    """
    Validate submission fields and return them cleaned.

    Raises:
        ValidationError: blank name, unknown type, pages_count < 1, a
            figma_link outside figma.com, a name or figma_link longer than
            its column, or a violated page rule.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Design name is required.")
    name = name.strip()
    _check_max_length("name", name, "Design name")
    if not isinstance(type, str) or type not in config.TYPE_PAGE_RULES:
        raise ValidationError(f"Unknown design type '{type}'.")
    pages_count = _clean_pages_count(pages_count)
    figma_link = _clean_optional_text(figma_link, "Figma link")
    _check_max_length("figma_link", figma_link, "Figma link")
    if figma_link and not is_valid_figma_link(figma_link):
        raise ValidationError("Please enter a valid Figma link (figma.com).")
    description = _clean_optional_text(description, "Description")
    check_page_rule(type, pages_count)
    return {
        "name": name,
        "type": type,
        "pages_count": pages_count,
        "figma_link": figma_link,
        "description": description,
    }


def submit_design(user, *, name, type, pages_count, figma_link=None, description=None) -> Design:
    """
    Create a pending design owned by the caller.

    The caller's profile is provisioned first when missing. History starts
    with one synthetic 'pending' entry marking the submission.
    """
    require_identity(user)
    cleaned = validate_submission(
        name=name,
        type=type,
        pages_count=pages_count,
        figma_link=figma_link,
        description=description,
    )
    try:
        with transaction.atomic():
            profile = ensure_profile(user)
            design = Design.objects.create(owner=profile, status="pending", **cleaned)
            DesignStatusHistory.objects.create(
                design=design,
                status="pending",
                changed_by=profile,
                notes=config.SUBMITTED_NOTE,
                created_at=design.created_at,
            )
    except DatabaseError as e:
        raise InfrastructureError(cause=e)
    logger.info("submit_design: design=%s owner=%s type=%s pages=%s", design.id, profile.pk, design.type, design.pages_count)
    return design


def list_user_designs(user):
    """Caller's designs, newest first, with status history prefetched."""
    profile = get_profile(user)
    if profile is None:
        return []
    try:
        return list(
            Design.objects.filter(owner=profile)
            .prefetch_related("status_history")
            .order_by("-created_at", "-id")
        )
    except DatabaseError as e:
        raise InfrastructureError(cause=e)


def get_user_design(user, design_id) -> Design:
    """One of the caller's designs; designs owned by others are invisible."""
    profile = get_profile(user)
    design = None
    if profile is not None:
        try:
            design = (
                Design.objects.filter(id=design_id, owner=profile)
                .prefetch_related("status_history", "comments__author")
                .first()
            )
        except DatabaseError as e:
            raise InfrastructureError(cause=e)
    if design is None:
        raise NotFoundError("Design not found.")
    return design


def update_design(user, design_id, changes: dict) -> Design:
    """Owner edit; only allowed while the design is pending. ``changes`` maps field names to new values."""
    unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
    if unknown:
        raise ValidationError(f"Fields cannot be changed: {', '.join(unknown)}.")
    design = get_user_design(user, design_id)
    if not design.is_editable:
        raise InvalidTransitionError("Only pending designs can be edited.")
    merged = {field: changes.get(field, getattr(design, field)) for field in EDITABLE_FIELDS}
    cleaned = validate_submission(**merged)
    try:
        updated = Design.objects.filter(id=design.id, owner_id=design.owner_id, status="pending").update(
            updated_at=timezone.now(),
            **cleaned,
        )
    except DatabaseError as e:
        raise InfrastructureError(cause=e)
    if not updated:
        raise InvalidTransitionError("Only pending designs can be edited.")
    design.refresh_from_db()
    return design


def delete_design(user, design_id) -> None:
    """Owner delete; only allowed while the design is pending."""
    design = get_user_design(user, design_id)
    if not design.is_editable:
        raise InvalidTransitionError("Only pending designs can be deleted.")
    try:
        deleted, _ = Design.objects.filter(id=design.id, owner_id=design.owner_id, status="pending").delete()
    except DatabaseError as e:
        raise InfrastructureError(cause=e)
    if not deleted:
        raise InvalidTransitionError("Only pending designs can be deleted.")
    logger.info("delete_design: design=%s owner=%s", design_id, design.owner_id)


def add_design_comment(user, design_id, comment: str) -> DesignComment:
    """Owners comment on their own designs; admins and mentors on any design."""
    comment = (comment or "").strip()
    if not comment:
        raise ValidationError("Comment cannot be empty.")
    profile = ensure_profile(user)
    try:
        design = Design.objects.filter(id=design_id).first()
        if design is None or (design.owner_id != profile.pk and not profile.can_review_designs):
            raise NotFoundError("Design not found.")
        return DesignComment.objects.create(
            design=design,
            author=profile,
            comment=comment,
            is_admin_comment=profile.can_review_designs,
        )
    except DatabaseError as e:
        raise InfrastructureError(cause=e)


def _transition_error(action: str, status: str) -> InvalidTransitionError:
    label = config.STATUS_LABELS.get(status, status)
    if status in config.TERMINAL_STATUSES:
        return InvalidTransitionError(f"Design is {label}; no further status changes are allowed.")
    return InvalidTransitionError(f"Cannot {action.replace('_', ' ')} a design that is {label}.")


def transition_design(actor, design_id, action: str, notes: str = None) -> Design:
    """
    Apply one state-machine transition on behalf of an admin or mentor.

    The optional note is stored as the design's latest admin_notes and on the
    appended history entry.

    Raises:
        AuthError: no authenticated actor.
        InsufficientRoleError: actor's role is not admin or mentor.
        InvalidTransitionError: unknown action or design not in the source state.
        NotFoundError: design does not exist.
    """
    reviewer = require_role(actor)
    if action not in config.TRANSITIONS:
        raise InvalidTransitionError(f"Unknown transition '{action}'.")
    source, target, stamp_field = config.TRANSITIONS[action]
    notes = (notes or "").strip() or None
    now = timezone.now()

    try:
        with transaction.atomic():
            design = Design.objects.filter(id=design_id).first()
            if design is None:
                raise NotFoundError("Design not found.")
            if design.status != source:
                raise _transition_error(action, design.status)
            updates = {"status": target, "admin_notes": notes, "updated_at": now}
            if stamp_field:
                updates[stamp_field] = now
            # Compare-and-set: a concurrent transition leaves nothing to update.
            if not Design.objects.filter(id=design.id, status=source).update(**updates):
                design.refresh_from_db(fields=["status"])
                raise _transition_error(action, design.status)
            DesignStatusHistory.objects.create(
                design=design,
                status=target,
                changed_by=reviewer,
                notes=notes,
                created_at=now,
            )
    except DatabaseError as e:
        raise InfrastructureError(cause=e)

    design.refresh_from_db()
    logger.info("transition_design: design=%s %s -> %s by=%s", design.id, source, target, reviewer.pk)
    return design


def accept_design(actor, design_id, notes=None):
    return transition_design(actor, design_id, "accept", notes)


def reject_design(actor, design_id, notes=None):
    return transition_design(actor, design_id, "reject", notes)


def start_development(actor, design_id, notes=None):
    return transition_design(actor, design_id, "start_development", notes)


def complete_development(actor, design_id, notes=None):
    return transition_design(actor, design_id, "complete", notes)


def list_designs_for_review(actor, status=None):
    """
    Admin/mentor listing of every design, newest first, optionally filtered
    by status. Returns (designs, counts) where counts maps every status to
    its number of designs.
    """
    require_role(actor)
    if status is not None and status not in config.STATUS_LABELS:
        raise ValidationError(f"Unknown status '{status}'.")
    try:
        designs = Design.objects.select_related("owner").order_by("-created_at", "-id")
        if status:
            designs = designs.filter(status=status)
        counts = {key: 0 for key in config.STATUS_LABELS}
        for row in Design.objects.values("status").annotate(total=Count("id")).order_by():
            counts[row["status"]] = row["total"]
        return list(designs), counts
    except DatabaseError as e:
        raise InfrastructureError(cause=e)
