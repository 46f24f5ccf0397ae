from django.http import JsonResponse
from django.views.decorators.http import require_http_methods, require_POST, require_GET

from common.errors import LifecycleError
from common.responses import error_response, parse_json_body
from designs import config, services
from designs.serializers import comment_payload, design_payload


@require_http_methods(["GET", "POST"])
def design_list(request):
    """
    GET: the caller's designs with status history.
    POST: submit a new design {name, type, pages_count, figma_link?, description?}.
    """
    try:
        if request.method == "POST":
            data = parse_json_body(request)
            design = services.submit_design(
                request.user,
                name=data.get("name"),
                type=data.get("type"),
                pages_count=data.get("pages_count"),
                figma_link=data.get("figma_link"),
                description=data.get("description"),
            )
            return JsonResponse({"success": True, "design": design_payload(design, include_history=True)}, status=201)

        designs = services.list_user_designs(request.user)
        return JsonResponse({
            "success": True,
            "designs": [design_payload(design, include_history=True) for design in designs],
        })
    except LifecycleError as e:
        return error_response(e)


@require_http_methods(["GET", "POST", "DELETE"])
def design_detail(request, design_id):
    """GET details; POST edits and DELETE removes, both only while pending."""
    try:
        if request.method == "DELETE":
            services.delete_design(request.user, design_id)
            return JsonResponse({"success": True})
        if request.method == "POST":
            data = parse_json_body(request)
            design = services.update_design(request.user, design_id, data)
        else:
            design = services.get_user_design(request.user, design_id)
        return JsonResponse({
            "success": True,
            "design": design_payload(design, include_history=True, include_comments=True),
        })
    except LifecycleError as e:
        return error_response(e)


@require_POST
def design_comment_create(request, design_id):
    try:
        data = parse_json_body(request)
        comment = services.add_design_comment(request.user, design_id, data.get("comment"))
        return JsonResponse({"success": True, "comment": comment_payload(comment)}, status=201)
    except LifecycleError as e:
        return error_response(e)


@require_GET
def review_list(request):
    """Admin/mentor design manager: every design plus per-status counts."""
    status = request.GET.get("status", "").strip() or None
    if status == "all":
        status = None
    try:
        designs, counts = services.list_designs_for_review(request.user, status=status)
    except LifecycleError as e:
        return error_response(e)
    return JsonResponse({
        "success": True,
        "counts": counts,
        "status_labels": config.STATUS_LABELS,
        "designs": [
            dict(design_payload(design), owner_name=design.owner.display_name, owner_email=design.owner.email)
            for design in designs
        ],
    })


@require_POST
def design_transition(request, design_id):
    """Body: {action: accept|reject|start_development|complete, notes?}"""
    try:
        data = parse_json_body(request)
        design = services.transition_design(
            request.user,
            design_id,
            (data.get("action") or "").strip(),
            data.get("notes"),
        )
        return JsonResponse({"success": True, "design": design_payload(design)})
    except LifecycleError as e:
        return error_response(e)
