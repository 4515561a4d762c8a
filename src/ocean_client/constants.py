"""
Project-wide constants for the ocean client
"""  # noqa: D200, D212, D415

# ==============================================================================
# API Configuration
# ==============================================================================

DEFAULT_API_ROOT = "https://api.digitalocean.com/v2/"
NETWORK_TIMEOUT = 30.0  # seconds

# ==============================================================================
# Rate Limit Protocol
# ==============================================================================

# Header names are matched case-insensitively
RATELIMIT_LIMIT_HEADER = "RateLimit-Limit"
RATELIMIT_REMAINING_HEADER = "RateLimit-Remaining"
RATELIMIT_RESET_HEADER = "RateLimit-Reset"

HTTP_TOO_MANY_REQUESTS = 429

# Widest value accepted for RateLimit-Limit and RateLimit-Remaining
MAX_RATELIMIT_VALUE = 2**64 - 1
# RateLimit-Reset must stay within the range of datetime (9999-12-31T23:59:59Z)
MAX_RATELIMIT_RESET = 253_402_300_799
