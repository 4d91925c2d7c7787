from typing import TYPE_CHECKING, List

from sqlalchemy import CHAR, Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from feedback_core.db.base_class import Base
from feedback_core.utils.base import UUID_LENGTH, UserRole

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class User(Base):
    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(CHAR(length=UUID_LENGTH), index=True, unique=True, nullable=False)
    full_name = Column(String)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=UserRole.USER.value)
    is_active = Column(Boolean(), server_default="true", nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False)

    forms: List["Form"] = relationship(  # type: ignore
        "Form", back_populates="owner", order_by="Form.created_at.desc()"
    )
    notifications: List["Notification"] = relationship(  # type: ignore
        "Notification",
        back_populates="receiver",
        order_by="Notification.created_at.desc()",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        return self.email.split("@")[0]
