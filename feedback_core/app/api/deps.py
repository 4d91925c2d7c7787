from typing import Generator, Optional

from fastapi import Depends, Query, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt
from sqlalchemy.orm import Session

from feedback_core.app import crud, models, schemas, security
from feedback_core.app.config import settings
from feedback_core.db.session import SessionLocal
from feedback_core.utils.base import HTTPException_, unwrap

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/login/access-token"
)

try_reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/login/access-token", auto_error=False
)


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(token: str = Depends(reusable_oauth2)) -> int:
    try:
        payload = jwt.decode(
            token, unwrap(settings.SECRET_KEY), algorithms=[security.ALGORITHM]
        )
        token_data = schemas.TokenPayload(**payload)
    except Exception:
        raise HTTPException_(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    if token_data.sub is None:
        raise HTTPException_(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    return token_data.sub


def try_get_current_user_id(
    token: Optional[str] = Depends(try_reusable_oauth2),
) -> Optional[int]:
    if token is None:
        return None
    try:
        return get_current_user_id(token)
    except Exception:
        return None


def get_current_active_user(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id),
) -> models.User:
    user = crud.user.get(db, id=current_user_id)
    if user is None:
        raise HTTPException_(status_code=404, detail="User not found")
    if not crud.user.is_active(user):
        raise HTTPException_(status_code=400, detail="Inactive user")
    return user


def try_get_current_active_user(
    db: Session = Depends(get_db),
    current_user_id: Optional[int] = Depends(try_get_current_user_id),
) -> Optional[models.User]:
    if current_user_id is None:
        return None
    user = crud.user.get(db, id=current_user_id)
    if user is None or not crud.user.is_active(user):
        return None
    return user


class PageParams:
    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    ):
        self.page = page
        self.limit = limit
