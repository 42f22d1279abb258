from pydantic import Field
from typing import Optional
from .common import CamelModel
from ..models.enums import ReviewAction
from ..utils.constants import AppConstants


class ApproveRequest(CamelModel):
    """Body of an approve call; the comment is kept only where the record has one"""

    comment: Optional[str] = Field(None, max_length=AppConstants.MAX_TEXT_LENGTH)


class RejectRequest(CamelModel):
    """
    Users, organizers and request queues send rejectionReason;
    events and venues send comment. Either is accepted.
    """

    # Length is checked by the approval workflow so the message stays uniform
    rejection_reason: Optional[str] = Field(None, max_length=AppConstants.MAX_TEXT_LENGTH)
    comment: Optional[str] = Field(None, max_length=AppConstants.MAX_TEXT_LENGTH)

    @property
    def reason(self) -> Optional[str]:
        if self.rejection_reason is not None:
            return self.rejection_reason
        return self.comment


class VenueReviewRequest(CamelModel):
    action: ReviewAction
    comment: Optional[str] = Field(None, max_length=AppConstants.MAX_TEXT_LENGTH)
