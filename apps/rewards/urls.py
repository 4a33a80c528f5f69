"""URLConf for the Rewards API (async views)."""

from __future__ import annotations

from django.urls import include, path

from .views import CompareView, EstimateView, ProjectDetailView, ProjectListView

app_name = "rewards"

handle_patterns = [
    path("", EstimateView.as_view(), name="estimate"),
    path("/compare/<str:fren>", CompareView.as_view(), name="compare"),
]

urlpatterns = [
    path("/projects", ProjectListView.as_view(), name="projects"),
    path("/<slug:slug>", ProjectDetailView.as_view(), name="project-detail"),
    path("/<slug:slug>/<str:handle>", include(handle_patterns)),
]
