"""
Quote Pricing Engine.

Folds the labour, equipment and material lines of a quote plus a markup
percentage into a QuoteSummary. Pure math: no rounding, no I/O.

    cost_base     = labour + equipment + material
    markup_amount = cost_base * markup / 100
    subtotal      = cost_base + markup_amount
    gst           = subtotal * GST_RATE
    grand_total   = subtotal + gst
    profit        = markup_amount
    margin        = profit / subtotal * 100   (0 when subtotal <= 0)

Non-numeric or NaN values (partially entered rows, a blank markup box)
count as 0. Nothing here raises.
"""

import math

from ..config import settings
from .types import QuoteSummary


def _safe_number(value) -> float:
    """Coerce to float; anything missing, non-numeric or non-finite becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (ValueError, TypeError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _line_value(line, field: str) -> float:
    """Read a money field from a line model, ORM row or plain dict."""
    if isinstance(line, dict):
        return _safe_number(line.get(field))
    return _safe_number(getattr(line, field, None))


class PricingEngine:
    """Single source of truth for quote totals."""

    def __init__(self, gst_rate: float = None):
        self.gst_rate = settings.GST_RATE if gst_rate is None else gst_rate

    def summarize(self, labour=(), equipment=(), materials=(), markup=0) -> QuoteSummary:
        """
        Build the QuoteSummary for a set of lines.

        Args:
            labour: LabourLine-like items (uses .total)
            equipment: EquipmentLine-like items (uses .total)
            materials: MaterialLine-like items (uses .charge)
            markup: percentage, number or string ("20", "", None)
        """
        labour_total = self._calculate_labour_subtotal(labour)
        equipment_total = self._calculate_equipment_subtotal(equipment)
        material_total = self._calculate_material_subtotal(materials)

        cost_base = labour_total + equipment_total + material_total
        markup_rate = self.parse_markup(markup)
        markup_amount = cost_base * (markup_rate / 100)
        subtotal = cost_base + markup_amount
        gst = subtotal * self.gst_rate
        grand_total = subtotal + gst
        profit = markup_amount
        margin = profit / subtotal * 100 if subtotal > 0 else 0.0

        return QuoteSummary(
            labour_total=labour_total,
            equipment_total=equipment_total,
            material_total=material_total,
            cost_base=cost_base,
            markup_rate=markup_rate,
            markup_amount=markup_amount,
            subtotal=subtotal,
            gst_rate=self.gst_rate,
            gst=gst,
            grand_total=grand_total,
            profit=profit,
            margin=margin,
        )

    @staticmethod
    def parse_markup(markup) -> float:
        return _safe_number(markup)

    def _calculate_labour_subtotal(self, labour) -> float:
        """Sum of labour line totals."""
        return math.fsum(_line_value(line, "total") for line in labour)

    def _calculate_equipment_subtotal(self, equipment) -> float:
        """Sum of equipment line totals."""
        return math.fsum(_line_value(line, "total") for line in equipment)

    def _calculate_material_subtotal(self, materials) -> float:
        """Sum of material line charges."""
        return math.fsum(_line_value(line, "charge") for line in materials)
