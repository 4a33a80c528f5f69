"""
The 'leaderboards' app reads raw mindshare leaderboard rows from the upstream
API and narrows them down to the rows that matter for one project.
"""
