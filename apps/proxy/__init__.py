"""
The 'proxy' app relays browser calls to the upstream leaderboard API under
the same paths the dashboard has always used (`/api/kaito/...`, `/api/yap/...`).
"""
