from typing import TYPE_CHECKING

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
from feedback_core.utils.base import UUID_LENGTH, Priority, ResponseStatus, Sentiment

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class FeedbackResponse(Base):
    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(CHAR(length=UUID_LENGTH), index=True, unique=True, nullable=False)
    form_id = Column(Integer, ForeignKey("form.id"), nullable=False, index=True)
    form: "Form" = relationship("Form", back_populates="responses")  # type: ignore

    # NULL for anonymous submissions and for submitters that were deleted
    submitted_by_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    submitted_by = relationship("User", foreign_keys=[submitted_by_id])

    answers = Column(JSON, nullable=False)
    response_metadata = Column(JSON, nullable=False, default=dict)

    start_time = Column(DateTime(timezone=True))
    end_time = Column(DateTime(timezone=True), nullable=False)
    duration = Column(Float, default=0.0, server_default="0", nullable=False)

    status = Column(
        String, nullable=False, default=ResponseStatus.SUBMITTED.value, index=True
    )
    moderation_notes = Column(String)
    moderated_by_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    moderated_by = relationship("User", foreign_keys=[moderated_by_id])
    moderated_at = Column(DateTime(timezone=True))

    is_anonymous = Column(
        Boolean, default=False, server_default="false", nullable=False
    )
    tags = Column(JSON, nullable=False, default=list)
    sentiment = Column(String, nullable=False, default=Sentiment.NEUTRAL.value)
    priority = Column(String, nullable=False, default=Priority.MEDIUM.value)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)
