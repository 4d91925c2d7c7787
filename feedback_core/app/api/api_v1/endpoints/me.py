from typing import Any

from fastapi import APIRouter, Depends

from feedback_core.app import models, schemas
from feedback_core.app.api import deps
from feedback_core.app.materialize import user_schema_from_orm

router = APIRouter()


# NOTE: don't change route to "/"
@router.get("", response_model=schemas.User)
def read_user_me(
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Get current user.
    """
    return user_schema_from_orm(current_user)
