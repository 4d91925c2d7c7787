from fastapi import APIRouter

from feedback_core.app.api.api_v1.endpoints import (
    forms,
    login,
    me,
    notifications,
    responses,
    users,
)

api_router = APIRouter()
api_router.include_router(login.router, tags=["login"])
api_router.include_router(me.router, prefix="/me", tags=["me"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(forms.router, prefix="/forms", tags=["forms"])
api_router.include_router(responses.router, prefix="/responses", tags=["responses"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)
