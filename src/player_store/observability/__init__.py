"""
player_store.observability

Logging and request-context helpers.
"""

# Package marker.
