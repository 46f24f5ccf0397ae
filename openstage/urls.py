from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("accounts/", include("accounts.urls", namespace="accounts")),
    path("designs/", include("designs.urls", namespace="designs")),
    path("development/", include("development.urls", namespace="development")),
    path("", include("general.urls", namespace="general")),
]
