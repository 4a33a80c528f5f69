"""URLConf for the Users API (async views)."""

from django.urls import path

from .views import UserSummaryView

app_name = "users"

urlpatterns = [
    path("/<str:handle>", UserSummaryView.as_view(), name="summary"),
]
