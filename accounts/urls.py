from django.urls import path
from .views import MeView, HealthView

urlpatterns = [
    path("auth/me/", MeView.as_view(), name="me"),
    path("health/", HealthView.as_view(), name="health"),
]
