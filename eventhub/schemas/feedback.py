from pydantic import Field, validator
from typing import Optional
from datetime import datetime
from .common import CamelModel
from ..utils.constants import AppConstants


class FeedbackCreate(CamelModel):
    comments: str = Field(..., min_length=1, max_length=AppConstants.MAX_TEXT_LENGTH)

    @validator("comments")
    def comments_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Comments cannot be empty")
        return v.strip()


class FeedbackResponse(CamelModel):
    feedback_id: int
    event_id: int
    user_id: int
    comments: str
    user_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_feedback(cls, feedback) -> "FeedbackResponse":
        return cls(
            feedback_id=feedback.feedback_id,
            event_id=feedback.event_id,
            user_id=feedback.user_id,
            comments=feedback.comments,
            user_name=feedback.user.name if feedback.user else None,
            created_at=feedback.created_at,
        )
