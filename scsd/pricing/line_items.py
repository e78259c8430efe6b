"""
Line-item builders, one per resource picker.

Each builder takes the selected catalog record plus the user's entries and
returns an immutable line, or None when the add is refused (missing
selection, missing/unparsable field, negative quantity). A refusal is a
validation gate, not an error: nothing is raised and the caller's line list
is left as it was.

Zero quantities are accepted; negative quantities are refused.
"""

import logging
import math
from typing import Optional

from ..enums import Phase
from .material_formulas import coerce_material_type, material_quantity
from .types import EquipmentLine, LabourLine, MaterialLine

logger = logging.getLogger(__name__)


def _parse_entry(value) -> Optional[float]:
    """Parse a numeric form entry. Returns None when missing or unparsable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (ValueError, TypeError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _parse_phase(value) -> Optional[Phase]:
    if not value:
        return None
    try:
        return Phase(value)
    except ValueError:
        return None


def _rate(resource, is_night: bool) -> float:
    rate = resource.night_rate if is_night else resource.charge_out_rate
    return float(rate or 0.0)


def _priced_line(kind: str, resource, quantity, required_for, is_night: bool):
    """Shared gate + rate selection for labour and equipment lines."""
    if resource is None:
        logger.info("%s line refused: no resource selected", kind)
        return None
    qty = _parse_entry(quantity)
    if qty is None:
        logger.info("%s line refused: quantity missing or not a number (%r)", kind, quantity)
        return None
    if qty < 0:
        logger.info("%s line refused: negative quantity %s", kind, qty)
        return None
    phase = _parse_phase(required_for)
    if phase is None:
        logger.info("%s line refused: required_for phase missing or unknown (%r)", kind, required_for)
        return None

    rate = _rate(resource, bool(is_night))
    return {
        "quantity": qty,
        "charge_rate": rate,
        "total": qty * rate,
        "required_for": phase,
        "is_night": bool(is_night),
    }


def build_labour_line(resource, quantity, required_for, is_night: bool = False) -> Optional[LabourLine]:
    """Labour line: total = quantity (hours) * day or night rate."""
    fields = _priced_line("Labour", resource, quantity, required_for, is_night)
    if fields is None:
        return None
    return LabourLine(labour_id=getattr(resource, "id", None), **fields)


def build_equipment_line(resource, quantity, required_for, is_night: bool = False) -> Optional[EquipmentLine]:
    """Equipment line: total = quantity (usage) * day or night rate."""
    fields = _priced_line("Equipment", resource, quantity, required_for, is_night)
    if fields is None:
        return None
    return EquipmentLine(equipment_id=getattr(resource, "id", None), **fields)


def build_material_line(resource, sqm, depth, sell_price) -> Optional[MaterialLine]:
    """
    Material line: quantity from the type formula, charge = quantity * sell_price.

    Refuses when the material, sqm, depth or sell price is missing, or the sell
    price is negative. Formula problems (zero divisor, negative measurements)
    propagate as InvalidInput.
    """
    if resource is None:
        logger.info("Material line refused: no material selected")
        return None
    sqm_value = _parse_entry(sqm)
    depth_value = _parse_entry(depth)
    price_value = _parse_entry(sell_price)
    if sqm_value is None or depth_value is None or price_value is None:
        logger.info(
            "Material line refused: sqm=%r depth=%r sell_price=%r", sqm, depth, sell_price,
        )
        return None
    if price_value < 0:
        logger.info("Material line refused: negative sell price %s", price_value)
        return None

    mtype = coerce_material_type(resource.material_type)
    if mtype is None:
        logger.info("Material line refused: unknown material type %r", resource.material_type)
        return None

    quantity = material_quantity(
        mtype, sqm_value, depth_value, getattr(resource, "formula", None),
    )
    return MaterialLine(
        material_id=getattr(resource, "id", None),
        material_type=mtype,
        sqm=sqm_value,
        depth=depth_value,
        quantity=quantity,
        sell_price=price_value,
        charge=quantity * price_value,
    )
