"""Rate-limit estimation and the gate every request passes through."""

from ocean_client.ratelimit.deadline import Ratelimited
from ocean_client.ratelimit.estimator import QuotaState, WindowEstimator
from ocean_client.ratelimit.gate import Ratelimiter
from ocean_client.ratelimit.policy import RatelimitPolicy

__all__ = [
    "QuotaState",
    "RatelimitPolicy",
    "Ratelimited",
    "Ratelimiter",
    "WindowEstimator",
]
