"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_DAYS = 7
DEFAULT_POOL_SIZE = 5
DEFAULT_JWT_ALGORITHM = "HS256"
PERCENTAGE_PRECISION = 1
