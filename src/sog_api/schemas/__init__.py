"""
sog_api.schemas

Wire schemas (Pydantic).

Responsibilities:
- Create/Update request models and public entity projections per entity kind.
- Response envelopes returned by the API layer.
"""

# Package marker; schemas are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Public field names are camelCase on the wire (`createdAt`) and snake_case in Python.
