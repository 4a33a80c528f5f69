from django.apps import AppConfig


class RewardsConfig(AppConfig):
    """
    App configuration for the 'rewards' app.
    Owns the project constant tables and the reward scoring engine.
    """

    name = "apps.rewards"
    verbose_name = "Rewards"
