import datetime
from typing import List, Optional

from pydantic import BaseModel

from feedback_core.app.schemas.msg import Pagination
from feedback_core.utils.base import NotificationType, Priority


class NotificationData(BaseModel):
    form_uuid: Optional[str] = None
    response_uuid: Optional[str] = None
    action_url: Optional[str] = None


# Shared properties
class NotificationBase(BaseModel):
    type: NotificationType
    title: str
    message: str
    data: NotificationData = NotificationData()
    priority: Priority = Priority.MEDIUM


class NotificationCreate(NotificationBase):
    receiver_id: int
    created_at: datetime.datetime
    expires_at: datetime.datetime


class NotificationUpdate(BaseModel):
    is_read: bool


class NotificationInDBBase(NotificationBase):
    id: int
    created_at: datetime.datetime
    expires_at: datetime.datetime
    is_read: bool

    class Config:
        from_attributes = True


# Additional properties to return via API
class Notification(NotificationInDBBase):
    pass


class NotificationList(BaseModel):
    notifications: List[Notification]
    pagination: Pagination


class UnreadCount(BaseModel):
    unread_count: int
