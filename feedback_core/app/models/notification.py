from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql.sqltypes import JSON

from feedback_core.db.base_class import Base
from feedback_core.utils.base import Priority

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class Notification(Base):
    id = Column(Integer, primary_key=True, index=True)
    receiver_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    receiver = relationship("User", back_populates="notifications")

    type = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    # form_uuid, response_uuid, action_url
    data = Column(JSON, nullable=False, default=dict)
    priority = Column(String, nullable=False, default=Priority.MEDIUM.value)

    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    is_read = Column(Boolean, default=False, server_default="false", nullable=False)
