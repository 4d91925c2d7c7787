from typing import TYPE_CHECKING, List

from sqlalchemy import (
    CHAR,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql.sqltypes import JSON

from feedback_core.db.base_class import Base
from feedback_core.utils.base import UUID_LENGTH

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class Form(Base):
    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(CHAR(length=UUID_LENGTH), index=True, unique=True, nullable=False)
    owner_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    owner = relationship("User", back_populates="forms")

    title = Column(String, nullable=False)
    description = Column(String)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # List of serialized schemas.Question, ids are immutable once assigned
    questions = Column(JSON, nullable=False)

    is_active = Column(Boolean, default=True, server_default="true", nullable=False)
    is_public = Column(Boolean, default=False, server_default="false", nullable=False)
    allow_anonymous = Column(
        Boolean, default=False, server_default="false", nullable=False
    )
    max_responses = Column(Integer)
    expires_at = Column(DateTime(timezone=True))
    version = Column(Integer, default=1, server_default="1", nullable=False)

    # settings
    enable_notifications = Column(
        Boolean, default=True, server_default="true", nullable=False
    )
    require_captcha = Column(
        Boolean, default=False, server_default="false", nullable=False
    )
    allow_file_upload = Column(
        Boolean, default=False, server_default="false", nullable=False
    )

    # analytics, only ever changed through crud.form.record_* atomic updates
    total_responses = Column(Integer, default=0, server_default="0", nullable=False)
    average_completion_time = Column(
        Float, default=0.0, server_default="0", nullable=False
    )
    last_response_at = Column(DateTime(timezone=True))

    responses: List["FeedbackResponse"] = relationship(  # type: ignore
        "FeedbackResponse",
        back_populates="form",
        order_by="FeedbackResponse.created_at.desc()",
        lazy="dynamic",
    )
