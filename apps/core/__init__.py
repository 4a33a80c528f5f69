"""
The 'core' app carries the plumbing every other app leans on: the async
upstream HTTP client, JSON error handlers and the health endpoint.
"""
