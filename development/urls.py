from django.urls import path
from . import views

app_name = "development"

urlpatterns = [
    path("", views.development_board, name="board"),
    path("<int:design_id>/join/", views.join_design_team, name="join"),
]
