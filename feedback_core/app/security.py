import datetime
from typing import Any, Optional, Union

from jose import jwt
from passlib.context import CryptContext  # type: ignore
from pydantic.types import SecretStr

from feedback_core.app.config import settings
from feedback_core.utils.base import get_utc_now, unwrap

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


ALGORITHM = "HS256"


def create_access_token(
    subject: Union[str, Any], expires_delta: Optional[datetime.timedelta] = None
) -> str:
    if expires_delta:
        expire = get_utc_now() + expires_delta
    else:
        expire = get_utc_now() + datetime.timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode = {"exp": expire, "sub": str(subject)}
    encoded_jwt = jwt.encode(
        to_encode, unwrap(settings.SECRET_KEY), algorithm=ALGORITHM
    )
    return encoded_jwt


def verify_password(plain_password: SecretStr, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password.get_secret_value(), hashed_password)


def get_password_hash(password: SecretStr) -> str:
    return pwd_context.hash(password.get_secret_value())
