# app/schemas/report.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, model_validator

from app.schemas.base import ApiModel, PaginationInfo


class ReportType(str, Enum):
    POST = "POST"
    COMMENT = "COMMENT"


class ReportStatus(str, Enum):
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    RESOLVED = "RESOLVED"
    DISMISSED = "DISMISSED"


class ReportCreate(ApiModel):
    reason: str = Field(..., min_length=1, max_length=1000)
    type: ReportType
    post_id: Optional[int] = None
    comment_id: Optional[int] = None

    @model_validator(mode="after")
    def check_target(self):
        if self.type == ReportType.POST and self.post_id is None:
            raise ValueError("postId is required for POST type")
        if self.type == ReportType.COMMENT and self.comment_id is None:
            raise ValueError("commentId is required for COMMENT type")
        return self


class ReportStatusUpdate(ApiModel):
    status: ReportStatus
    notes: Optional[str] = Field(None, max_length=1000)


class ReportedPostInfo(ApiModel):
    id: int
    title: str


class ReportedCommentInfo(ApiModel):
    id: int
    content: str


class ReporterInfo(ApiModel):
    id: int
    name: str


class ReportResponse(ApiModel):
    id: int
    reason: str
    type: ReportType
    status: ReportStatus
    post_id: Optional[int] = None
    comment_id: Optional[int] = None
    reporter_id: int
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime

    post: Optional[ReportedPostInfo] = None
    comment: Optional[ReportedCommentInfo] = None
    reporter: ReporterInfo


class ReportListResponse(ApiModel):
    reports: List[ReportResponse]
    pagination: PaginationInfo
