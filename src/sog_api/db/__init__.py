"""
sog_api.db

Persistence package (MongoDB, async pymongo).

Responsibilities:
- Provide the store handle, document mapping helpers, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here holds module-level connections; the client is created by the app
# factory and passed down explicitly.
