import logging

from django.conf import settings
from django.contrib.auth import authenticate, login, logout
from django.forms.models import model_to_dict
from django.http import JsonResponse
from django.shortcuts import redirect
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from achievements.stats import load_profile_stats
from common.errors import LifecycleError
from common.responses import error_response, parse_json_body
from .forms import CustomAuthenticationForm, ProfileForm, RegisterForm
from .models import CustomUser
from .services import PROFILE_EDITABLE_FIELDS, ensure_profile, require_identity, update_profile

logger = logging.getLogger(__name__)


def _profile_payload(profile):
    data = model_to_dict(profile, fields=("email", "first_name", "last_name", "username", "avatar_url", "role") + PROFILE_EDITABLE_FIELDS)
    data["id"] = profile.pk
    data["display_name"] = profile.display_name
    return data


def _stats_payload(stats):
    return {
        "design_count": stats.design_count,
        "development_count": stats.development_count,
        "design_points": stats.design_points,
        "development_points": stats.development_points,
        "points": stats.points,
        "level": stats.level,
        "points_to_next_level": stats.points_to_next_level,
        "badges": [
            {
                "id": badge.key,
                "name": badge.name,
                "description": badge.description,
                "source": badge.source,
                "icon_url": badge.icon_url,
                "badge_color": badge.badge_color,
            }
            for badge in stats.badges
        ],
    }


@require_POST
def register(request):
    """Create an account and its student profile from {first_name, last_name, email, password1, password2}."""
    try:
        data = parse_json_body(request)
    except LifecycleError as e:
        return error_response(e)
    form = RegisterForm(data)
    if not form.is_valid():
        return JsonResponse({"success": False, "errors": form.errors.get_json_data()}, status=400)

    email = form.cleaned_data["email"]
    user = CustomUser.objects.create_user(email=email, password=form.cleaned_data["password1"])
    try:
        profile = ensure_profile(
            user,
            first_name=form.cleaned_data["first_name"],
            last_name=form.cleaned_data["last_name"],
        )
    except LifecycleError as e:
        return error_response(e)
    logger.info("register: user=%s", user.pk)
    return JsonResponse({"success": True, "profile": _profile_payload(profile)}, status=201)


@require_POST
def login_view(request):
    try:
        data = parse_json_body(request)
    except LifecycleError as e:
        return error_response(e)
    form = CustomAuthenticationForm(request, data={
        "username": data.get("email", ""),
        "password": data.get("password", ""),
    })
    if not form.is_valid():
        return JsonResponse({"success": False, "error": "Invalid email or password."}, status=400)
    login(request, form.get_user())
    return JsonResponse({"success": True})


@require_POST
def logout_view(request):
    logout(request)
    return JsonResponse({"success": True})


@require_GET
def auth_callback(request):
    """
    Landing point of the external (redirect-based) login flow. Routes to the
    site root when a session was established, back to login otherwise.
    """
    if request.GET.get("error"):
        logger.warning("auth_callback: provider returned error=%s", request.GET.get("error"))
        return redirect(f"{settings.LOGIN_URL}?error=auth_callback_failed")
    if request.user.is_authenticated:
        return redirect(settings.LOGIN_REDIRECT_URL)
    return redirect(settings.LOGIN_URL)


@require_http_methods(["GET", "POST"])
def profile(request):
    """
    GET: the caller's profile with derived points, level and badges.
    POST: update editable profile fields.
    """
    try:
        require_identity(request.user)
        current = ensure_profile(request.user)
        if request.method == "POST":
            data = parse_json_body(request)
            merged = model_to_dict(current, fields=PROFILE_EDITABLE_FIELDS)
            merged.update({key: value for key, value in data.items() if key in PROFILE_EDITABLE_FIELDS})
            form = ProfileForm(merged, instance=current)
            if not form.is_valid():
                return JsonResponse({"success": False, "errors": form.errors.get_json_data()}, status=400)
            current = update_profile(request.user, **form.cleaned_data)
        stats = load_profile_stats(current)
    except LifecycleError as e:
        return error_response(e)
    return JsonResponse({
        "success": True,
        "profile": _profile_payload(current),
        "stats": _stats_payload(stats),
    })
