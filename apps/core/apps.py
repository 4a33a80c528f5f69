from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    App configuration for the 'core' app.
    Holds shared plumbing: upstream HTTP client, JSON error handlers, health.
    """

    name = "apps.core"
    verbose_name = "Core"
