from typing import Optional

from pydantic import BaseModel


class UserPreview(BaseModel):
    uuid: str
    full_name: Optional[str] = None
    display_name: str

    class Config:
        from_attributes = True
