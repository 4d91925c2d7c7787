from typing import Optional

from pydantic import BaseModel

from feedback_core.app.errors import ErrorCode


class HealthResponse(BaseModel):
    success: bool = True
    version: str = "v0.1.0"


class GenericResponse(BaseModel):
    success: bool = True
    error_code: Optional[ErrorCode] = None
    msg: Optional[str] = None


class Pagination(BaseModel):
    current: int
    total: int
    total_items: int
