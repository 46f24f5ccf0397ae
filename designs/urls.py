from django.urls import path
from . import views

app_name = "designs"

urlpatterns = [
    path("", views.design_list, name="design_list"),
    path("review/", views.review_list, name="review_list"),
    path("<int:design_id>/", views.design_detail, name="design_detail"),
    path("<int:design_id>/comments/", views.design_comment_create, name="design_comment_create"),
    path("<int:design_id>/transition/", views.design_transition, name="design_transition"),
]
