"""
Local persistence.

- state_store.py: JSON-file key-value store for the logging endpoint URL
  and the pseudo-anonymous user id (no expiry)
"""

from review_insight.persistence.state_store import InvalidEndpointURL, LocalStateStore

__all__ = ["InvalidEndpointURL", "LocalStateStore"]
