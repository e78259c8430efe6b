"""
Quote pricing core.

Pure arithmetic over in-memory line items. No database, no HTTP.
Material quantity formulas -> line totals -> quote summary (cost base,
markup, GST, total, profit, margin).
"""

from .engine import PricingEngine
from .line_items import build_equipment_line, build_labour_line, build_material_line
from .material_formulas import InvalidInput, depth_label, material_quantity, quantity_unit
from .types import EquipmentLine, LabourLine, MaterialLine, QuoteSummary

__all__ = [
    "PricingEngine",
    "InvalidInput",
    "material_quantity",
    "quantity_unit",
    "depth_label",
    "build_labour_line",
    "build_equipment_line",
    "build_material_line",
    "LabourLine",
    "EquipmentLine",
    "MaterialLine",
    "QuoteSummary",
]
