"""
Services for the 'leaderboards' app.

Example:
    from apps.leaderboards.services import KaitoClient, normalize_rows
"""

from .kaito_client import KaitoClient, YapClient
from .normalizer import extract_rows, normalize_rows

__all__ = [
    "KaitoClient",
    "YapClient",
    "extract_rows",
    "normalize_rows",
]
