# Route constructor service configuration
import os

# Server
PORT = int(os.getenv("TOURROUTE_PORT", "8000"))
HOST = os.getenv("TOURROUTE_HOST", "0.0.0.0")

# Logging
LOG_LEVEL = os.getenv("TOURROUTE_LOG_LEVEL", "INFO")

# Geography
EARTH_RADIUS_KM = 6371  # Mean radius used by the haversine formula

# Limits
MAX_WAYPOINTS = 500  # Same cap as the public places listing (limit=500)
