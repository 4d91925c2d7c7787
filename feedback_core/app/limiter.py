from slowapi import Limiter

from feedback_core.app.common import client_ip, enable_rate_limit
from feedback_core.app.config import settings

limiter = Limiter(
    key_func=client_ip,
    headers_enabled=True,
    default_limits=["150/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    key_prefix="feedback:slowapi:",
    enabled=enable_rate_limit(),
)
