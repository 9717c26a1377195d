# app/services/report.py
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import and_
from sqlalchemy.orm import Session, selectinload

from app.core.decorator import db_exception
from app.models.comment import Comment
from app.models.post import Post
from app.models.report import Report
from app.schemas.report import (
    ReportCreate,
    ReportStatus,
    ReportStatusUpdate,
    ReportType,
)
from app.utils.pagination import PageParams, paginate

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, db: Session):
        self.db = db

    def _with_relations(self):
        return self.db.query(Report).options(
            selectinload(Report.post),
            selectinload(Report.comment),
            selectinload(Report.reporter),
        )

    def _target_exists(self, report_in: ReportCreate) -> bool:
        if report_in.type == ReportType.POST:
            return (
                self.db.query(Post)
                .filter(
                    and_(Post.id == report_in.post_id, Post.deleted_at.is_(None))
                )
                .first()
                is not None
            )

        return (
            self.db.query(Comment)
            .filter(
                and_(
                    Comment.id == report_in.comment_id,
                    Comment.deleted_at.is_(None),
                )
            )
            .first()
            is not None
        )

    @db_exception
    def create_report(self, report_in: ReportCreate, reporter_id: int) -> Optional[Report]:
        """Report a live post or comment"""
        if not self._target_exists(report_in):
            return None

        is_post = report_in.type == ReportType.POST
        report = Report(
            reason=report_in.reason,
            type=report_in.type.value,
            post_id=report_in.post_id if is_post else None,
            comment_id=None if is_post else report_in.comment_id,
            reporter_id=reporter_id,
            status=ReportStatus.PENDING.value,
        )

        self.db.add(report)
        self.db.commit()

        logger.info(
            f"Report {report.id} filed by user {reporter_id} against {report.type}"
        )
        return self._with_relations().filter(Report.id == report.id).first()

    def get_reports(
        self,
        params: PageParams,
        report_status: Optional[ReportStatus] = None,
    ) -> Tuple[List[Report], dict]:
        """Get reports for review, newest first"""
        query = self._with_relations()

        if report_status:
            query = query.filter(Report.status == report_status.value)

        return paginate(query, params, Report.created_at.desc(), Report.id.desc())

    @db_exception
    def update_report_status(
        self, report_id: int, update_in: ReportStatusUpdate, reviewer_id: int
    ) -> Optional[Report]:
        """Record a reviewer's decision on a report"""
        report = self.db.query(Report).filter(Report.id == report_id).first()
        if not report:
            return None

        report.status = update_in.status.value
        report.notes = update_in.notes
        report.reviewed_by = reviewer_id
        report.reviewed_at = datetime.now(timezone.utc)

        self.db.commit()

        logger.info(
            f"Report {report_id} marked {report.status} by reviewer {reviewer_id}"
        )
        return self._with_relations().filter(Report.id == report_id).first()
