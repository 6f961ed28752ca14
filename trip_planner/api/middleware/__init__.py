from trip_planner.api.middleware.rate_limit import RateLimitMiddleware
from trip_planner.api.middleware.request_id import RequestIdMiddleware

__all__ = ["RateLimitMiddleware", "RequestIdMiddleware"]
