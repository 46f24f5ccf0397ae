from django.urls import path
from . import views

app_name = "general"

urlpatterns = [
    path("api/contact/", views.contact, name="contact"),
]
