# app/models/report.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from app.core.database import Base


class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)

    # Reported content: exactly one of post_id / comment_id, matching `type`
    type = Column(String(20), nullable=False)  # POST, COMMENT
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=True, index=True)
    comment_id = Column(Integer, ForeignKey("comments.id"), nullable=True, index=True)

    reporter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    # Report Details
    reason = Column(Text, nullable=False)
    status = Column(
        String(20), default="PENDING", nullable=False, index=True
    )  # PENDING, REVIEWED, RESOLVED, DISMISSED
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
    reviewed_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Report(id={self.id}, type='{self.type}', status='{self.status}')>"
