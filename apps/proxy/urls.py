"""URLConf for the upstream pass-through endpoints."""

from django.urls import path
from django.views.decorators.csrf import csrf_exempt

from apps.leaderboards.conf import KAITO_NAMESPACE, YAP_NAMESPACE

from .views import ProxyView, YapOpenView

app_name = "proxy"

urlpatterns = [
    path("yap/open", YapOpenView.as_view(), name="yap-open"),
    path("kaito/<path:path>", csrf_exempt(ProxyView.as_view(namespace=KAITO_NAMESPACE)), name="kaito"),
    path("yap/<path:path>", csrf_exempt(ProxyView.as_view(namespace=YAP_NAMESPACE)), name="yap"),
]
