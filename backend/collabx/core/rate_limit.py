# Rate limiting configuration for CollabX (slowapi, keyed by client IP)

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

RATE_LIMITS = {
    "join_request_operations": "10/minute",
    "project_operations": "30/minute",
}

__all__ = ["limiter", "RATE_LIMITS"]
