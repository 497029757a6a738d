"""
sog_api.api

API package for the SOG document service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and error-to-response mapping.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request validation + delegation to repositories + envelopes.
