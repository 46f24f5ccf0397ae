from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from common.errors import LifecycleError
from common.responses import error_response
from designs.serializers import design_payload
from development import services


def _member_payload(member):
    return {
        "user_id": member.user_id,
        "role": member.role,
        "joined_at": member.joined_at.isoformat() if member.joined_at else None,
        "first_name": member.first_name,
        "last_name": member.last_name,
        "email": member.email,
        "username": member.username,
    }


def _entry_payload(entry, user_id=None, active_project_id=None):
    design = entry.design
    data = design_payload(design)
    data.update({
        "owner_name": design.owner.display_name,
        "joined_count": entry.joined_count,
        "open_slots": entry.open_slots,
        "is_full": entry.is_full,
        "team": [_member_payload(member) for member in entry.team],
    })
    if user_id is not None:
        joined = entry.has_member(user_id)
        data["joined_by_me"] = joined
        data["can_join"] = (
            design.status in ("accepted", "in_development")
            and not joined
            and not entry.is_full
            and active_project_id in (None, design.id)
        )
    return data


@require_GET
def development_board(request):
    """
    Development board: accepted / in-development / completed designs with
    their teams, plus board statistics. Signed-in callers also get their
    joined design ids and per-design join flags.
    """
    status = request.GET.get("status", "").strip() or None
    if status == "all":
        status = None
    try:
        entries = services.list_development_designs(status=status)
        stats = services.development_stats()
        user_id = None
        active_id = None
        my_design_ids = []
        if request.user.is_authenticated:
            user_id = request.user.pk
            active_id = services.active_project_id(request.user)
            my_design_ids = services.list_user_team_design_ids(request.user)
    except LifecycleError as e:
        return error_response(e)

    return JsonResponse({
        "success": True,
        "stats": stats,
        "my_design_ids": my_design_ids,
        "active_project_id": active_id,
        "designs": [_entry_payload(entry, user_id, active_id) for entry in entries],
    })


@require_POST
def join_design_team(request, design_id):
    try:
        membership = services.join_team(request.user, design_id)
    except LifecycleError as e:
        return error_response(e)
    return JsonResponse({
        "success": True,
        "message": "You have joined the project!",
        "membership": {
            "design_id": membership.design_id,
            "user_id": membership.user_id,
            "role": membership.role,
            "joined_at": membership.joined_at.isoformat(),
        },
    }, status=201)
