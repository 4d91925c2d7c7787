from typing import Literal, Optional

import sentry_sdk
from pydantic import AnyHttpUrl
from pydantic.types import SecretStr
from pydantic_settings import BaseSettings
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration


class Settings(BaseSettings):
    ############ Common ############
    ENV: Literal["dev", "stag", "prod"] = "dev"
    PROJECT_NAME: str = "Feedback Dev"
    SENTRY_DSN: Optional[AnyHttpUrl] = None

    DATABASE_URL: str = "sqlite:///./feedback.db"
    DB_SESSION_POOL_SIZE: int = 20
    DB_SESSION_POOL_MAX_OVERFLOW_SIZE: int = 10

    ############ Web server only ############
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: Optional[str] = None
    # 60 minutes * 24 hours * 7 days = 7 days
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    DEBUG_BYPASS_BACKEND_CORS: str = "false"
    FEEDBACK_BACKEND_CORS_ORIGINS: str = "http://127.0.0.1:3000"

    HCAPTCHA_SITEKEY: str = "10000000-ffff-ffff-ffff-000000000001"
    HCAPTCHA_SECRET: str = "0x0000000000000000000000000000000000000000"

    USERS_OPEN_REGISTRATION: bool = True
    FIRST_SUPERUSER: Optional[str] = None
    FIRST_SUPERUSER_PASSWORD: Optional[SecretStr] = None

    ### Limit settings
    FORCE_RATE_LIMIT: bool = False
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RESPONSE_SUBMISSION_RATE_LIMIT: str = "30/minute"

    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    ### Forms and responses
    RECENT_RESPONSES_DAYS: int = 7
    NOTIFICATION_TTL_DAYS: int = 30

    ### Scheduled tasks
    ENABLE_SCHEDULED_TASKS: bool = True
    SCHEDULED_TASK_PURGE_NOTIFICATIONS_MINUTES: int = 60

    class Config:
        case_sensitive = True


settings = Settings()


if settings.SENTRY_DSN:
    sentry_sdk.init(
        str(settings.SENTRY_DSN),
        traces_sample_rate=0.2,
        integrations=[
            SqlalchemyIntegration(),
        ],
    )
