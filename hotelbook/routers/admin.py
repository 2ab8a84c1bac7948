from decimal import Decimal
from typing import List
from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from ..config import settings
from ..errors import InvalidCredentials, InvalidDateFormat
from ..models import BookingFilter
from ..security import Session, set_session, require_admin
from ..services import bookings as booking_service
from ..services import dates, identity, reporting
from ..store import RecordStore, get_store
from .api import BookingOut

router = APIRouter(prefix="/api/v1/admin", tags=["admin-api"])

# ==== Schemas ====

class AdminLoginIn(BaseModel):
    password: str

class PasswordChangeIn(BaseModel):
    new_password: str
    confirm_password: str

class RevenueOut(BaseModel):
    date: str
    week_start: str
    week_end: str
    daily: Decimal
    weekly: Decimal
    message: str

# ==== Helpers ====

def _date_bound(value: str) -> str:
    """Normalize an optional filter date; empty stays empty."""
    value = value.strip()
    if not value:
        return ""
    normalized = dates.normalize(value)
    if normalized == dates.INVALID:
        raise InvalidDateFormat()
    return normalized

def booking_filter(booking_id: int = 0, username: str = "", start_date: str = "", end_date: str = "") -> BookingFilter:
    return BookingFilter(
        booking_id=booking_id,
        username=username.strip(),
        start_date=_date_bound(start_date),
        end_date=_date_bound(end_date),
    )

# ==== Auth ====

@router.post("/login")
def admin_login(payload: AdminLoginIn, response: Response, store: RecordStore = Depends(get_store)):
    if not identity.admin_authenticate(store, payload.password):
        raise InvalidCredentials("Invalid admin password.")
    set_session(response, Session(is_admin=True))
    return {"ok": True, "message": "Admin login successful!"}

@router.post("/password")
def admin_change_password(payload: PasswordChangeIn, admin: Session = Depends(require_admin), store: RecordStore = Depends(get_store)):
    identity.change_admin_password(store, payload.new_password, payload.confirm_password)
    return {"ok": True, "message": "Admin password changed successfully."}

# ==== Bookings & reports ====

@router.get("/bookings", response_model=List[BookingOut])
def admin_bookings(f: BookingFilter = Depends(booking_filter), admin: Session = Depends(require_admin), store: RecordStore = Depends(get_store)):
    return booking_service.all_bookings(store, f)

@router.get("/revenue", response_model=RevenueOut)
def admin_revenue(date: str, admin: Session = Depends(require_admin), store: RecordStore = Depends(get_store)):
    summary = reporting.revenue_summary(store, date)
    return RevenueOut(
        date=summary.date,
        week_start=summary.week_start,
        week_end=summary.week_end,
        daily=summary.daily,
        weekly=summary.weekly,
        message=f"Revenue for {summary.date}: Daily: ${summary.daily:.2f}, Weekly: ${summary.weekly:.2f}",
    )

@router.get("/reports/bookings.csv")
def admin_bookings_csv(f: BookingFilter = Depends(booking_filter), admin: Session = Depends(require_admin), store: RecordStore = Depends(get_store)):
    csv_data = reporting.generate_csv_report(booking_service.all_bookings(store, f))
    return Response(
        content=csv_data,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=bookings.csv"},
    )

@router.get("/reports/bookings.pdf")
def admin_bookings_pdf(f: BookingFilter = Depends(booking_filter), admin: Session = Depends(require_admin), store: RecordStore = Depends(get_store)):
    period = None
    if f.start_date or f.end_date:
        period = f"{f.start_date or '...'} to {f.end_date or '...'}"
    pdf_data = reporting.generate_pdf_report(
        booking_service.all_bookings(store, f),
        title=f"{settings.APP_NAME} booking report",
        period=period,
    )
    return Response(
        content=pdf_data,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=bookings.pdf"},
    )
