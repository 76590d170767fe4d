"""
Rate Limiting Configuration

Per-IP limits for the public endpoints, enforced with slowapi.
The limiter is shared by every app instance; create_app() toggles it
from settings.RATE_LIMIT_ENABLED.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Format: "count/period" (e.g., "10/minute" means 10 requests per minute)
RATE_LIMITS = {
    "shorten": "10/minute",  # Link creation: 10 per minute per IP
    "preview": "100/minute",  # Preview pages: 100 per minute per IP
    "metadata": "30/minute",  # JSON lookups: 30 per minute per IP
}
