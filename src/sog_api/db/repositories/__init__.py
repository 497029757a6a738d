"""
sog_api.db.repositories

Entity-kind repositories.

Responsibilities:
- Bind the generic `DocumentRepo` to each entity kind's schemas, key field and defaults.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories are intentionally thin; all behavior lives in `db.repository`.
