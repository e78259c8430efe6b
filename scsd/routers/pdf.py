"""
PDF download endpoint.

GET /api/quotes/{quote_id}/pdf: client-facing proposal for a saved quote.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from .. import models
from ..config import settings
from ..database import get_db
from ..pdf_generator import generate_quote_pdf

router = APIRouter(prefix="/quotes", tags=["pdf"])

PARTICULARS = [
    ("preparation", "Preparation"),
    ("asphalt", "Asphalt"),
    ("two_coat_seal", "Two coat seal"),
    ("profiling", "Profiling"),
]


def _enum_value(value):
    return getattr(value, "value", value) or ""


def _quote_to_pdf_data(quote: models.Quote) -> dict:
    client = quote.client
    client_name = ""
    if client:
        client_name = " ".join(p for p in [client.first_name, client.last_name] if p)

    return {
        "quote_number": quote.quote_number,
        "title": quote.title,
        "summary": quote.summary,
        "job_site_address": quote.job_site_address,
        "date_created": quote.date_created,
        "total_area": quote.total_area,
        "notes": quote.notes,
        "client_name": client_name,
        "particulars": [label for field, label in PARTICULARS if getattr(quote, field)],
        "labour_lines": [
            {
                "name": line.labour.name if line.labour else "Labour",
                "required_for": _enum_value(line.required_for),
                "is_night": line.is_night,
                "quantity": line.quantity,
            }
            for line in quote.labour_lines
        ],
        "equipment_lines": [
            {
                "name": line.equipment.name if line.equipment else "Equipment",
                "required_for": _enum_value(line.required_for),
                "is_night": line.is_night,
                "quantity": line.quantity,
            }
            for line in quote.equipment_lines
        ],
        "material_lines": [
            {
                "name": line.material.name if line.material else _enum_value(line.material_type),
                "material_type": _enum_value(line.material_type),
                "sqm": line.sqm,
                "depth": line.depth,
                "quantity": line.quantity,
            }
            for line in quote.material_lines
        ],
        "subtotal": quote.subtotal,
        "gst": quote.gst,
        "total": quote.total,
    }


@router.get("/{quote_id}/pdf")
def download_pdf(quote_id: int, db: Session = Depends(get_db)):
    """
    Generate and download the proposal PDF.

    Returns: application/pdf
    """
    quote = db.query(models.Quote).filter(models.Quote.id == quote_id).first()
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")

    company = {
        "name": settings.COMPANY_NAME,
        "email": settings.COMPANY_EMAIL,
        "phone": settings.COMPANY_PHONE,
    }
    pdf_bytes = generate_quote_pdf(_quote_to_pdf_data(quote), company)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="Quote-{quote.quote_number}.pdf"',
        },
    )
