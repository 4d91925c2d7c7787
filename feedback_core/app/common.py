import logging
from typing import Optional

import sentry_sdk
from fastapi import Request

logger = logging.getLogger(__name__)


def is_dev() -> bool:
    from feedback_core.app.config import settings

    return settings.ENV == "dev"


def enable_rate_limit() -> bool:
    from feedback_core.app.config import settings

    return not is_dev() or settings.FORCE_RATE_LIMIT


def client_ip(request: Request) -> str:
    if "x-forwarded-for" in request.headers:
        r = request.headers["x-forwarded-for"].split(", ")[0]
        return r
    if request.client:
        return request.client.host or "127.0.0.1"
    return "127.0.0.1"


def user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")


def report_exception(e: Exception, context: str) -> None:
    logger.error(f"{context}: {e!r}")
    if not is_dev():
        sentry_sdk.capture_exception(e)
