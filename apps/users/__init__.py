"""The 'users' app serves the dashboard header: follower and yap counters."""
