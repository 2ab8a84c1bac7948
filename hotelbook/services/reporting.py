import csv
from dataclasses import dataclass
from decimal import Decimal
from io import StringIO, BytesIO

from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib import colors
from reportlab.lib.units import inch

from ..errors import InvalidDateFormat
from ..models import Booking
from ..store import RecordStore
from . import dates

RECEIPT_HEADER = "========== BOOKING RECEIPT =========="
RECEIPT_FOOTER = "====================================="


@dataclass
class RevenueSummary:
    date: str
    week_start: str
    week_end: str
    daily: Decimal
    weekly: Decimal


def _report_date(value: str) -> str:
    normalized = dates.normalize(value)
    if normalized == dates.INVALID:
        raise InvalidDateFormat()
    return normalized


def daily_revenue(store: RecordStore, date: str) -> Decimal:
    """Total of active bookings made on ``date``."""
    day = _report_date(date)
    return sum(
        (b.total_price for b in store.load_all(Booking) if b.is_active and b.booked_on == day),
        Decimal("0"),
    )


def weekly_revenue(store: RecordStore, date: str) -> Decimal:
    """Total of active bookings made Monday through Sunday of the week containing ``date``."""
    monday, sunday = dates.week_range(_report_date(date))
    return sum(
        (b.total_price for b in store.load_all(Booking)
         if b.is_active and monday <= b.booked_on <= sunday),
        Decimal("0"),
    )


def revenue_summary(store: RecordStore, date: str) -> RevenueSummary:
    day = _report_date(date)
    monday, sunday = dates.week_range(day)
    return RevenueSummary(
        date=day,
        week_start=monday,
        week_end=sunday,
        daily=daily_revenue(store, day),
        weekly=weekly_revenue(store, day),
    )


def render_receipt(booking: Booking) -> str:
    lines = [
        RECEIPT_HEADER,
        f"Booking ID: {booking.booking_id}",
        f"Customer: {booking.username}",
        f"Room Number: {booking.room_number}",
        f"Booking Date: {booking.booking_date:%Y-%m-%d %H:%M:%S}",
        f"Check-in: {booking.check_in_date}",
        f"Check-out: {booking.check_out_date}",
        f"Total Price: ${booking.total_price:.2f}",
        f"Status: {booking.status.value}",
        RECEIPT_FOOTER,
    ]
    return "\n".join(lines) + "\n"


def receipt_history(bookings: list[Booking]) -> str:
    """Receipts for the given bookings, most recent first."""
    if not bookings:
        return "No receipts found.\n"
    return "".join(render_receipt(b) for b in reversed(bookings))


def generate_csv_report(bookings: list[Booking]) -> str:
    """Generates a CSV report from a list of bookings."""
    output = StringIO()
    writer = csv.writer(output)

    # Header
    writer.writerow(["Booking ID", "Customer", "Room", "Booking Date", "Check-in", "Check-out", "Total", "Status"])

    # Data
    for b in bookings:
        writer.writerow([
            b.booking_id,
            b.username,
            b.room_number,
            f"{b.booking_date:%Y-%m-%d %H:%M:%S}",
            b.check_in_date,
            b.check_out_date,
            f"{b.total_price:.2f}",
            b.status.value,
        ])

    return output.getvalue()


def generate_pdf_report(bookings: list[Booking], title: str, period: str | None = None) -> bytes:
    """Generates a PDF report from a list of bookings using ReportLab."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, rightMargin=0.5*inch, leftMargin=0.5*inch, topMargin=0.5*inch, bottomMargin=0.5*inch)
    styles = getSampleStyleSheet()
    elements = [Paragraph(title, styles['h1'])]

    if period:
        elements.append(Paragraph(f"Period: {period}", styles['h2']))
    elements.append(Spacer(1, 0.25*inch))

    data = [["ID", "Customer", "Room", "Check-in", "Check-out", "Total", "Status"]]
    active_total = Decimal("0")
    for b in bookings:
        data.append([
            str(b.booking_id),
            b.username,
            str(b.room_number),
            b.check_in_date,
            b.check_out_date,
            f"${b.total_price:.2f}",
            b.status.value.title(),
        ])
        if b.is_active:
            active_total += b.total_price

    table = Table(data, colWidths=[0.8*inch, 1.5*inch, 0.7*inch, 1*inch, 1*inch, 1*inch, 0.9*inch])
    style = TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.teal),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 12),
        ('BACKGROUND', (0, 1), (-1, -1), colors.beige),
        ('GRID', (0,0), (-1,-1), 1, colors.black)
    ])
    table.setStyle(style)
    elements.append(table)
    elements.append(Spacer(1, 0.25*inch))
    elements.append(Paragraph(f"Active bookings total: ${active_total:.2f}", styles['Normal']))

    doc.build(elements)
    return buffer.getvalue()
