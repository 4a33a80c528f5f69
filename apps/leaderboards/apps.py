from django.apps import AppConfig


class LeaderboardsConfig(AppConfig):
    """
    App configuration for the 'leaderboards' app.
    Owns the upstream leaderboard client and the row normalizer.
    """

    name = "apps.leaderboards"
    verbose_name = "Leaderboards"
