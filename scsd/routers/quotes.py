import logging
import re
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..config import settings
from ..database import get_db
from ..pricing import (
    InvalidInput,
    PricingEngine,
    QuoteSummary,
    build_equipment_line,
    build_labour_line,
    build_material_line,
    depth_label,
    material_quantity,
    quantity_unit,
)
from ..repository import CatalogRepository, get_catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotes", tags=["quotes"])

QUOTE_NUMBER_ATTEMPTS = 5


def generate_quote_number(db: Session) -> str:
    """Next QU-NNNN number: highest stored suffix + 1, else QUOTE_NUMBER_START."""
    prefix = settings.QUOTE_NUMBER_PREFIX
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    numbers = db.query(models.Quote.quote_number).filter(
        models.Quote.quote_number.like(f"{prefix}%")
    ).all()
    suffixes = []
    for (number,) in numbers:
        match = pattern.match(number or "")
        if match:
            suffixes.append(int(match.group(1)))
    next_number = max(suffixes) + 1 if suffixes else settings.QUOTE_NUMBER_START
    return f"{prefix}{str(next_number).zfill(4)}"


def _get_or_404(db: Session, quote_id: int) -> models.Quote:
    quote = db.query(models.Quote).filter(models.Quote.id == quote_id).first()
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


def _apply_summary(quote: models.Quote, summary: QuoteSummary):
    quote.markup = summary.markup_rate
    quote.cost_base = summary.cost_base
    quote.markup_amount = summary.markup_amount
    quote.subtotal = summary.subtotal
    quote.gst = summary.gst
    quote.total = summary.grand_total
    quote.profit = summary.profit
    quote.margin = summary.margin


# --- Line builders ("+ Add" buttons) ---

@router.post("/lines/labour", response_model=schemas.LabourLine)
def add_labour_line(pick: schemas.LabourPick, catalog: CatalogRepository = Depends(get_catalog)):
    resource = catalog.get_labour(pick.labour_id)
    if not resource:
        raise HTTPException(status_code=404, detail="Labour entry not found")
    line = build_labour_line(resource, pick.quantity, pick.required_for, pick.is_night)
    if line is None:
        raise HTTPException(status_code=400, detail="Labour line needs a quantity of 0 or more and a phase")
    return line


@router.post("/lines/equipment", response_model=schemas.EquipmentLine)
def add_equipment_line(pick: schemas.EquipmentPick, catalog: CatalogRepository = Depends(get_catalog)):
    resource = catalog.get_equipment(pick.equipment_id)
    if not resource:
        raise HTTPException(status_code=404, detail="Equipment not found")
    line = build_equipment_line(resource, pick.quantity, pick.required_for, pick.is_night)
    if line is None:
        raise HTTPException(status_code=400, detail="Equipment line needs a quantity of 0 or more and a phase")
    return line


@router.post("/lines/material", response_model=schemas.MaterialLineView)
def add_material_line(pick: schemas.MaterialPick, catalog: CatalogRepository = Depends(get_catalog)):
    resource = catalog.get_material(pick.material_id)
    if not resource:
        raise HTTPException(status_code=404, detail="Material not found")
    try:
        line = build_material_line(resource, pick.sqm, pick.depth, pick.sell_price)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if line is None:
        raise HTTPException(status_code=400, detail="Material line needs sqm, depth and a sell price")
    return schemas.MaterialLineView(
        **line.model_dump(),
        unit=quantity_unit(line.material_type),
        depth_label=depth_label(line.material_type),
    )


# --- Quotes ---

@router.get("/next-number")
def next_quote_number(db: Session = Depends(get_db)):
    return {"quote_number": generate_quote_number(db)}


@router.post("/preview", response_model=QuoteSummary)
def preview_quote(preview: schemas.QuotePreview):
    """Live totals for the lines on screen. Nothing is stored."""
    return PricingEngine().summarize(
        labour=preview.labour_lines,
        equipment=preview.equipment_lines,
        materials=preview.material_lines,
        markup=preview.markup,
    )


def _derive_material_lines(lines, catalog: CatalogRepository):
    """Recompute quantity and charge from the catalog formula; submitted quantities are not trusted."""
    derived = []
    for line in lines:
        material_type, formula = line.material_type, None
        if line.material_id is not None:
            resource = catalog.get_material(line.material_id)
            if not resource:
                raise HTTPException(status_code=404, detail="Material not found")
            material_type, formula = resource.material_type, resource.formula
        try:
            quantity = material_quantity(material_type, line.sqm, line.depth, formula)
        except InvalidInput as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        derived.append(line.model_copy(update={
            "material_type": material_type,
            "quantity": quantity,
            "charge": quantity * line.sell_price,
        }))
    return derived


@router.post("/", response_model=schemas.Quote)
def create_quote(
    quote: schemas.QuoteCreate,
    db: Session = Depends(get_db),
    catalog: CatalogRepository = Depends(get_catalog),
):
    client = catalog.get_client(quote.client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    material_lines = _derive_material_lines(quote.material_lines, catalog)
    markup = settings.MARKUP_DEFAULT if quote.markup is None else quote.markup
    summary = PricingEngine().summarize(
        labour=quote.labour_lines,
        equipment=quote.equipment_lines,
        materials=material_lines,
        markup=markup,
    )

    header = quote.model_dump(
        exclude={"labour_lines", "equipment_lines", "material_lines", "markup", "date_created"},
    )
    db_quote = models.Quote(**header)
    if quote.date_created is not None:
        db_quote.date_created = quote.date_created
    _apply_summary(db_quote, summary)

    for position, line in enumerate(quote.labour_lines):
        db_quote.labour_lines.append(models.QuoteLabourLine(position=position, **line.model_dump()))
    for position, line in enumerate(quote.equipment_lines):
        db_quote.equipment_lines.append(models.QuoteEquipmentLine(position=position, **line.model_dump()))
    for position, line in enumerate(material_lines):
        db_quote.material_lines.append(models.QuoteMaterialLine(position=position, **line.model_dump()))

    # Another request may take the same number between read and insert
    for _ in range(QUOTE_NUMBER_ATTEMPTS):
        db_quote.quote_number = generate_quote_number(db)
        db.add(db_quote)
        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            logger.warning("Quote number %s already taken, retrying", db_quote.quote_number)
    else:
        raise HTTPException(status_code=409, detail="Could not allocate a quote number, try again")

    db.refresh(db_quote)
    logger.info(
        "Saved quote %s for client %s: subtotal=%.2f total=%.2f",
        db_quote.quote_number, client.id, db_quote.subtotal, db_quote.total,
    )
    return db_quote


@router.get("/", response_model=List[schemas.QuoteListItem])
def list_quotes(skip: int = 0, limit: int = 50, db: Session = Depends(get_db)):
    return db.query(models.Quote).order_by(
        models.Quote.date_created.desc(), models.Quote.id.desc()
    ).offset(skip).limit(limit).all()


@router.get("/{quote_id}", response_model=schemas.Quote)
def get_quote(quote_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, quote_id)


@router.patch("/{quote_id}", response_model=schemas.Quote)
def update_quote(quote_id: int, update: schemas.QuoteUpdate, db: Session = Depends(get_db)):
    quote = _get_or_404(db, quote_id)
    data = update.model_dump(exclude_unset=True)
    remark = "markup" in data
    markup = data.pop("markup", None)
    if markup is None:
        markup = settings.MARKUP_DEFAULT
    for field, value in data.items():
        setattr(quote, field, value)

    # Lines keep the rates they were added with; only the markup is re-applied.
    if remark:
        summary = PricingEngine().summarize(
            labour=quote.labour_lines,
            equipment=quote.equipment_lines,
            materials=quote.material_lines,
            markup=markup,
        )
        _apply_summary(quote, summary)
        logger.info("Quote %s re-priced at %s%% markup", quote.quote_number, summary.markup_rate)

    db.commit()
    db.refresh(quote)
    return quote


@router.delete("/{quote_id}")
def delete_quote(quote_id: int, db: Session = Depends(get_db)):
    quote = _get_or_404(db, quote_id)
    db.delete(quote)
    db.commit()
    return {"ok": True}
