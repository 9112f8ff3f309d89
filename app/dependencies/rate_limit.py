from fastapi_limiter.depends import RateLimiter

from app.config import settings

# Shared by every API route; tests override this instance
rate_limit = RateLimiter(times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS)
