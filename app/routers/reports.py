# app/routers/reports.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_reviewer, get_current_user
from app.models.user import User
from app.schemas.report import (
    ReportCreate,
    ReportListResponse,
    ReportResponse,
    ReportStatus,
    ReportStatusUpdate,
)
from app.services.report import ReportService
from app.utils.pagination import PageParams, page_params

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
def create_report(
    report_in: ReportCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Report a post or a comment for review"""
    report = ReportService(db).create_report(report_in, current_user.id)

    if not report:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{report_in.type.value.capitalize()} not found",
        )

    return report


# ==================== Reviewer Endpoints ====================


@router.get("", response_model=ReportListResponse)
def get_reports(
    params: PageParams = Depends(page_params),
    report_status: Optional[ReportStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_reviewer: User = Depends(get_current_reviewer),
):
    """
    Get reports for review, newest first.
    Only reviewers can list reports.
    """
    reports, pagination = ReportService(db).get_reports(params, report_status)
    return {"reports": reports, "pagination": pagination}


@router.put("/{report_id}", response_model=ReportResponse)
def update_report_status(
    report_id: int,
    update_in: ReportStatusUpdate,
    db: Session = Depends(get_db),
    current_reviewer: User = Depends(get_current_reviewer),
):
    """Record a review decision on a report"""
    report = ReportService(db).update_report_status(
        report_id, update_in, current_reviewer.id
    )

    if not report:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Report not found",
        )

    return report
