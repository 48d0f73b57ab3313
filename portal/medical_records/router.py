"""
Medical Record Router - report generation.
"""
from datetime import datetime, timezone
from typing import Literal
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.orm import Session
import logging

from ..auth.dependencies import get_current_user
from ..auth.models import User
from ..database import get_db
from ..exceptions import AppException, InternalError
from .report import render_html_report, render_text_report
from .service import get_record_for_report

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/medical-records/{record_id}/report", summary="Generate Medical Record Report")
async def generate_report(
    record_id: int,
    report_format: Literal["text", "html"] = Query("text", alias="format", description="Report format"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Generate a downloadable report for a medical record.

    Providers may only report on their own records; admins on any record.
    """
    try:
        record = get_record_for_report(db, current_user, record_id)
        generated_at = datetime.now(timezone.utc)
        if report_format == "html":
            content = render_html_report(record, generated_at)
        else:
            content = render_text_report(record, generated_at)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error generating medical report: {str(e)}")
        raise InternalError()

    logger.info(f"Report generated for record {record_id} by user {current_user.id}")
    if report_format == "html":
        return HTMLResponse(content)
    return PlainTextResponse(
        content,
        headers={"Content-Disposition": f'attachment; filename="medical-report-{record_id}.txt"'},
    )
