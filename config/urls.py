"""
Root URLconf.

`/api/v1/...` is the rewards API; `/api/kaito/...` and `/api/yap/...` relay
to the upstream leaderboard API. `/health` lives on the Starlette router in
`config.asgi`.
"""

from django.urls import include, path

api_v1_patterns = [
    path("rewards", include("apps.rewards.urls")),
    path("users", include("apps.users.urls")),
]

urlpatterns = [
    path("api/v1/", include(api_v1_patterns)),
    path("api/", include("apps.proxy.urls")),
]

# JSON bodies for unknown routes and crashes.
handler404 = "apps.core.views.custom_handler.json_404_handler"
handler500 = "apps.core.views.custom_handler.json_500_handler"
