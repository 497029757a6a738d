"""
sog_api.api.routers

HTTP routers (health, users, blog).
"""

# Package marker.
