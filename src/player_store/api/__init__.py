"""
player_store.api

HTTP surface for the player store.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers stay thin: validate the request, call AccountStore, map Err to a status code.
