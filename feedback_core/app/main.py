from typing import Any, MutableMapping, Optional

import logging
import logging.config
log_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "feedback_core": {"handlers": ["console"], "level": "INFO", "propagate": False},
    },
    "root": {"handlers": ["console"], "level": "INFO"},
}
logging.config.dictConfig(log_config)
logger = logging.getLogger(__name__)


from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

scheduler = BackgroundScheduler()
import sentry_sdk
import uvicorn
import fastapi
import starlette
from fastapi import FastAPI
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.engine import make_url
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request

from feedback_core.app.api import health
from feedback_core.app.api.api_v1.api import api_router
from feedback_core.app.common import enable_rate_limit, is_dev
from feedback_core.app.config import settings
from feedback_core.app.errors import FeedbackError
from feedback_core.app.limiter import limiter
from feedback_core.app.task import purge_expired_notifications

args: MutableMapping[str, Optional[Any]] = {}
if is_dev():
    args["openapi_url"] = f"{settings.API_V1_STR}/openapi.json"
else:
    args["openapi_url"] = None
    args["redoc_url"] = None

app = FastAPI(title=settings.PROJECT_NAME, **args)  # type: ignore


app.state.limiter = limiter
if enable_rate_limit():
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(FeedbackError)
async def feedback_error_handler(request: Request, exc: FeedbackError) -> JSONResponse:
    logger.info(
        f"{request.method} {request.url.path} rejected: {exc.error_code.value}: {exc.message}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_code": exc.error_code.value},
    )


@app.exception_handler(RequestValidationError)
async def custom_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Any:
    request_str = f"request.url: {request.url}\nrequest.method: {request.method}"
    err_msg = f"Validation error:\n{request_str}\nexc: {exc}\nexc.body: {exc.body}"
    if is_dev():
        # NOTE: need to print in order to capture by pytest
        print(err_msg)
    else:
        sentry_sdk.capture_message(err_msg)
    return await request_validation_exception_handler(request, exc)


def set_backend_cors_origins() -> None:
    origins = []
    if settings.DEBUG_BYPASS_BACKEND_CORS == "magic":
        origins.append("*")
    for host in settings.FEEDBACK_BACKEND_CORS_ORIGINS.split(","):
        origins.append(host)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("Set CORS allowed origins: " + str(origins))


set_backend_cors_origins()

app.include_router(health.router)
app.include_router(api_router, prefix=settings.API_V1_STR)


def print_app_settings() -> None:
    logger.info("settings:")
    for k, v in settings.__dict__.items():
        if k.startswith("__") or "SECRET" in k:
            continue
        if k == "DATABASE_URL":
            v = make_url(v).render_as_string(hide_password=True)
        logger.info(f"{k}: {v}")


print_app_settings()
for lib in [fastapi, uvicorn, starlette]:
    logger.info("{} version: {}".format(lib.__name__, lib.__version__))

logger.info("Server launches")


@app.on_event("startup")
def set_up_scheduled_tasks() -> None:
    if not settings.ENABLE_SCHEDULED_TASKS:
        logger.info("Scheduled tasks disabled")
        return
    if not scheduler.running:
        scheduler.add_job(
            purge_expired_notifications,
            trigger=IntervalTrigger(
                minutes=settings.SCHEDULED_TASK_PURGE_NOTIFICATIONS_MINUTES
            ),
            name="purge_expired_notifications",
        )
        scheduler.start()
        logger.info("Set up scheduled tasks")
    else:
        logger.info("Scheduler already running, skipping scheduled task setup")


@app.on_event("shutdown")
def shutdown_event() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
